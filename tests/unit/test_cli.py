"""Tests for CLI tool."""

from __future__ import annotations

import json
import socket
import subprocess
import sys
import time
from pathlib import Path

import pytest

from tempestwx import __version__
from tempestwx.cli.main import _TextListener, main
from tempestwx.listener import ListenerConfig


def _run(*args: str, stdin: str | None = None) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", "tempestwx.cli.main", *args],
        capture_output=True,
        text=True,
        input=stdin,
    )


def test_cli_help() -> None:
    """Test CLI --help flag."""
    result = _run("--help")
    assert result.returncode == 0
    assert "tempestwx: WeatherFlow Tempest packet codec" in result.stdout
    assert "--decode" in result.stdout
    assert "--listen" in result.stdout


def test_cli_version() -> None:
    """Test CLI --version flag."""
    result = _run("--version")
    assert result.returncode == 0
    assert f"tempestwx {__version__}" in result.stdout


def test_cli_no_args() -> None:
    """Test CLI with no arguments (should show help)."""
    result = _run()
    assert result.returncode == 0
    assert "tempestwx: WeatherFlow Tempest packet codec" in result.stdout


def test_cli_decode_file(tmp_path: Path, sample_packets: dict[str, str]) -> None:
    """Test CLI --decode with a captured packet."""
    packet = tmp_path / "packet.json"
    packet.write_text(sample_packets["obs_sky"], encoding="utf-8")

    result = _run("--decode", str(packet))
    assert result.returncode == 0
    assert "SkyObservation" in result.stdout
    assert '"type": "obs_sky"' in result.stdout


def test_cli_decode_stdin(sample_packets: dict[str, str]) -> None:
    result = _run("--decode", "-", stdin=sample_packets["hub_status"])
    assert result.returncode == 0
    assert "HubStatus" in result.stdout


def test_cli_decode_rejected(tmp_path: Path) -> None:
    """Test CLI --decode with an unknown record type."""
    packet = tmp_path / "packet.json"
    packet.write_text(json.dumps({"type": "evt_unknown"}), encoding="utf-8")

    result = _run("--decode", str(packet))
    assert result.returncode == 1
    assert "UnknownVariant" in result.stderr


def test_cli_decode_missing_file() -> None:
    """Test CLI --decode with missing file."""
    result = _run("--decode", "nonexistent.json")
    assert result.returncode == 1
    assert "not found" in result.stderr.lower()


def test_cli_schema(capsys: pytest.CaptureFixture[str]) -> None:
    """Test CLI --schema slot table."""
    assert main(["--schema", "obs_sky"]) == 0

    out = capsys.readouterr().out
    assert "obs_sky: SkyObservation" in out
    assert "obs[i][11]" in out
    assert "rain_day" in out
    assert "or null" in out


def test_cli_schema_all(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--schema", "all"]) == 0

    out = capsys.readouterr().out
    assert "8 record types." in out
    assert "hub_status: HubStatus" in out


def test_cli_schema_unknown(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--schema", "evt_unknown"]) == 1
    assert "evt_unknown" in capsys.readouterr().err


def test_cli_listen_invalid_port(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--listen", "--port", "70000"]) == 1
    assert "port must be" in capsys.readouterr().err


def test_cli_decode_invalid_utf8(tmp_path: Path) -> None:
    """Test CLI --decode with bytes that are not UTF-8."""
    packet = tmp_path / "packet.json"
    packet.write_bytes(b'{"type": "\xff"}')

    result = _run("--decode", str(packet))
    assert result.returncode == 1
    assert "MalformedInput" in result.stderr
    assert "Traceback" not in result.stderr


def test_cli_decode_invalid_utf8_stdin() -> None:
    result = subprocess.run(
        [sys.executable, "-m", "tempestwx.cli.main", "--decode", "-"],
        capture_output=True,
        input=b"\xff\xfe",
    )
    assert result.returncode == 1
    assert b"MalformedInput" in result.stderr


def test_cli_listen_unknown_mode(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--listen", "--mode", "struct"])

    assert exc_info.value.code == 2
    assert "invalid choice" in capsys.readouterr().err


@pytest.mark.parametrize(
    "parse,expected",
    [
        (False, '{"type": "evt_unknown",  "x": 1}'),
        (True, '{"type": "evt_unknown", "x": 1}'),
    ],
)
def test_text_listener_prints_without_decoding(
    capsys: pytest.CaptureFixture[str], parse: bool, expected: str
) -> None:
    listener = _TextListener(ListenerConfig(port=0), parse=parse)

    listener.handle_datagram(b'{"type": "evt_unknown",  "x": 1}', ("127.0.0.1", 50222))

    assert capsys.readouterr().out.strip() == expected
    assert listener.packets == 1
    assert listener.errors == 0


def test_text_listener_reports_invalid_json(capsys: pytest.CaptureFixture[str]) -> None:
    listener = _TextListener(ListenerConfig(port=0), parse=True)

    listener.handle_datagram(b"{oops", ("127.0.0.1", 50222))

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Invalid JSON from 127.0.0.1" in captured.err
    assert listener.errors == 1


def test_cli_listen_raw_mode(sample_packets: dict[str, str]) -> None:
    """Test --listen --mode raw over loopback UDP."""
    port = _free_udp_port()
    proc = subprocess.Popen(
        [
            sys.executable, "-m", "tempestwx.cli.main", "--listen", "--mode", "raw",
            "--host", "127.0.0.1", "--port", str(port), "--count", "1",
        ],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
    )
    try:
        packet = sample_packets["rapid_wind"].encode("utf-8")
        deadline = time.monotonic() + 10.0
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            while proc.poll() is None and time.monotonic() < deadline:
                sock.sendto(packet, ("127.0.0.1", port))
                time.sleep(0.2)
        out, err = proc.communicate(timeout=10)
    finally:
        if proc.poll() is None:
            proc.kill()
            proc.communicate()

    assert proc.returncode == 0
    assert out.strip() == sample_packets["rapid_wind"].strip()
    assert "1 packets, 0 rejected" in err


def _free_udp_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
