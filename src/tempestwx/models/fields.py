"""Field type helpers and utilities.

The hub serializes integers with fixed widths (u8, u16, u32, u64, i32). Python
has a single ``int``, so each width is expressed as a bounded annotation. The
codec reads the bounds back through schema introspection and rejects values
that would not fit in the vendor's field.
"""

from __future__ import annotations

from typing import Annotated, Any, cast

from pydantic import Field
from pydantic.fields import FieldInfo


def BoundedInt(*, ge: int, le: int, **kwargs: Any) -> FieldInfo:
    """Create a bounded integer field.

    This is a convenience wrapper around Pydantic's Field() that ensures
    both ge= and le= constraints are set so the codec can range-check the slot.

    Args:
        ge: Minimum value (inclusive)
        le: Maximum value (inclusive)
        **kwargs: Additional Field() arguments (description, default, etc.)

    Returns:
        Pydantic FieldInfo suitable for use as Annotated metadata.

    Example:
        >>> class Sample(PositionalRecord):
        ...     counter: Annotated[int, BoundedInt(ge=0, le=1023)]
    """
    return cast(FieldInfo, Field(ge=ge, le=le, **kwargs))


UInt8 = Annotated[int, BoundedInt(ge=0, le=2**8 - 1)]
UInt16 = Annotated[int, BoundedInt(ge=0, le=2**16 - 1)]
UInt32 = Annotated[int, BoundedInt(ge=0, le=2**32 - 1)]
UInt64 = Annotated[int, BoundedInt(ge=0, le=2**64 - 1)]
Int32 = Annotated[int, BoundedInt(ge=-(2**31), le=2**31 - 1)]

# Unix time in seconds
Epoch = UInt64
