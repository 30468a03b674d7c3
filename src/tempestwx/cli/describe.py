"""Record schema description CLI command."""

from __future__ import annotations

from ..codec.schema import FieldSchema, schema_for
from ..models.base import BaseRecord
from ..registry import RECORD_REGISTRY, lookup_record


def describe_types(name: str) -> None:
    """Print the schema of one record type, or of all of them for ``"all"``.

    Args:
        name: Discriminator string (e.g. ``obs_sky``) or ``all``

    Raises:
        UnknownVariant: If ``name`` is not a known record type
    """
    if name == "all":
        record_classes = list(RECORD_REGISTRY.values())
    else:
        record_classes = [lookup_record(name)]

    print(f"{len(record_classes)} record type{'s' if len(record_classes) != 1 else ''}.")
    print()
    for record_class in record_classes:
        describe_record(record_class)


def describe_record(record_class: type[BaseRecord]) -> None:
    """Print the field table of a record, expanding positional payloads by slot.

    Args:
        record_class: Record class to describe
    """
    print(f"{'=' * 19} {record_class.record_type}: {record_class.__name__} {'=' * 19}")
    print(f"  {'type':<32} string = {record_class.record_type!r}")

    for field_schema in schema_for(record_class).fields:
        print(f"  {field_schema.name:<32} {field_schema.expected}")
        if field_schema.kind in ("positional", "batch"):
            _print_slots(field_schema)
    print()


def _print_slots(field_schema: FieldSchema) -> None:
    slots = schema_for(field_schema.python_type).fields
    prefix = "[i]" if field_schema.kind == "batch" else ""
    for index, slot in enumerate(slots):
        label = f"{field_schema.name}{prefix}[{index}]"
        print(f"    {label:<14} {slot.name:<30} {slot.expected}")
