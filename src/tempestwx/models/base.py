"""Base record classes and tempestwx-specific Pydantic configuration.

Two kinds of model exist:

- ``BaseRecord``: a whole packet, serialized as a JSON object with a ``type`` tag.
- ``PositionalRecord``: a payload serialized as a JSON array, where each field's
  declaration order is its slot index.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from .fields import Epoch

_RECORD_CONFIG = ConfigDict(
    # Lax validation for hand-built records; the codec does its own strict checks
    strict=False,
    # Records are values: no mutation after construction
    frozen=True,
    # Forbid extra fields not defined in schema
    extra="forbid",
    # JSON has no NaN/Infinity, so every valid record stays encodable
    allow_inf_nan=False,
)


def utc_datetime(epoch: int) -> Optional[datetime]:
    """Convert Unix seconds to a UTC datetime, or None past year 9999."""
    try:
        return datetime.fromtimestamp(epoch, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


class BaseRecord(BaseModel):
    """Base class for the eight packet kinds.

    Subclasses set ``record_type`` to the discriminator string carried in the
    packet's ``type`` field and are registered with
    :func:`tempestwx.registry.register_record`.

    Attributes:
        record_type: Discriminator string (e.g. ``"obs_sky"``)
    """

    model_config = _RECORD_CONFIG

    record_type: ClassVar[str]


class PositionalRecord(BaseModel):
    """Base class for payloads carried as fixed-length JSON arrays.

    The wire format has no field names for these payloads: slot ``i`` of the
    array is the ``i``-th field declared on the model.
    """

    model_config = _RECORD_CONFIG


class ObservationRecord(PositionalRecord):
    """Positional payload whose slot 0 is the sample time."""

    epoch: Epoch = Field(description="Sample time, Unix seconds")

    @property
    def observed_at(self) -> Optional[datetime]:
        """Sample time as a timezone-aware UTC datetime.

        None when the epoch lies beyond what ``datetime`` can represent.
        """
        return utc_datetime(self.epoch)
