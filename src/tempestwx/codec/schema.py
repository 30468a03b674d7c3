"""Schema introspection for record models.

This module turns a record model into the explicit, ordered schema table the
codec walks: one ``FieldSchema`` per field, in declaration order, carrying the
field's kind, scalar type, nullability and integer bounds. For positional
payloads the table order is the slot order on the wire.
"""

from __future__ import annotations

import functools
import types
from dataclasses import dataclass
from typing import (
    Annotated,
    Any,
    Iterable,
    List,
    Literal,
    Optional,
    Type,
    Union,
    get_args,
    get_origin,
)

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ..exceptions import SchemaError
from ..models.base import PositionalRecord

FieldKind = Literal["scalar", "positional", "batch", "sequence"]

_SCALAR_TYPES = (int, float, str)
_SCALAR_NAMES = {int: "integer", float: "number", str: "string"}


@dataclass(frozen=True)
class FieldSchema:
    """Schema information for a single field or positional slot.

    Attributes:
        name: Field name
        kind: ``scalar`` (int/float/str value), ``positional`` (one nested
            positional array), ``batch`` (array of positional arrays) or
            ``sequence`` (opaque array of integers)
        python_type: Scalar type for scalar/sequence fields, the
            PositionalRecord subclass for positional/batch fields
        nullable: Whether JSON null is accepted (decodes to None)
        min_value: Minimum value constraint (for integer scalars)
        max_value: Maximum value constraint (for integer scalars)
    """

    name: str
    kind: FieldKind
    python_type: Type[Any]
    nullable: bool
    min_value: Optional[int]
    max_value: Optional[int]

    @property
    def bounded(self) -> bool:
        return self.min_value is not None or self.max_value is not None

    @property
    def expected(self) -> str:
        """Description of the accepted JSON value, as used in TypeMismatch errors."""
        if self.kind == "scalar":
            if self.python_type is int and self.bounded:
                lo = "-inf" if self.min_value is None else self.min_value
                hi = "inf" if self.max_value is None else self.max_value
                desc = f"integer in [{lo}, {hi}]"
            else:
                desc = _SCALAR_NAMES[self.python_type]
        elif self.kind == "positional":
            desc = f"array of {schema_for(self.python_type).arity} slots"
        elif self.kind == "batch":
            desc = "array of observation arrays"
        else:
            desc = "array of integers"
        return f"{desc} or null" if self.nullable else desc

    def contains(self, value: int) -> bool:
        """Check an integer against this field's bounds."""
        if self.min_value is not None and value < self.min_value:
            return False
        if self.max_value is not None and value > self.max_value:
            return False
        return True


class RecordSchema:
    """Schema information for an entire record model.

    This class introspects a Pydantic model and extracts the decode-relevant
    information for each field.

    Example:
        >>> schema = RecordSchema.from_model(SkyObs)
        >>> schema.arity
        14
        >>> [f.name for f in schema.fields if f.nullable]
        ['rain_day']
    """

    def __init__(self, model_class: Type[BaseModel]) -> None:
        """Initialize schema from a Pydantic model.

        Args:
            model_class: Pydantic model class to introspect
        """
        self.model_class = model_class
        self.fields: List[FieldSchema] = []
        self._introspect()

    @classmethod
    def from_model(cls, model_class: Type[BaseModel]) -> RecordSchema:
        """Return the (cached) schema of a Pydantic model.

        Args:
            model_class: Pydantic model class

        Returns:
            RecordSchema instance
        """
        return schema_for(model_class)

    @property
    def positional(self) -> bool:
        """Whether the model is serialized as a JSON array."""
        return issubclass(self.model_class, PositionalRecord)

    @property
    def arity(self) -> int:
        """Number of slots (positional models) or fields."""
        return len(self.fields)

    def _introspect(self) -> None:
        """Introspect the model and populate field schemas."""
        for field_name, field_info in self.model_class.model_fields.items():
            field_schema = self._extract_field_schema(field_name, field_info)
            if self.positional and field_schema.kind != "scalar":
                raise SchemaError(
                    f"{self.model_class.__name__}.{field_name}: positional slots must be "
                    f"int, float or str"
                )
            self.fields.append(field_schema)

    def _extract_field_schema(self, name: str, field_info: FieldInfo) -> FieldSchema:
        """Extract schema information from a Pydantic FieldInfo.

        Args:
            name: Field name
            field_info: Pydantic FieldInfo object

        Returns:
            FieldSchema with extracted information
        """
        annotation = field_info.annotation
        if annotation is None:
            raise SchemaError(f"Field {name} has no type annotation")

        constraints: list[Any] = list(field_info.metadata)

        # Optional[X] / X | None
        nullable = False
        if get_origin(annotation) in (Union, types.UnionType):
            non_none_args = [arg for arg in get_args(annotation) if arg is not type(None)]
            if len(non_none_args) != 1:
                raise SchemaError(f"Field {name}: complex Union types not supported")
            annotation = non_none_args[0]
            nullable = True

        annotation, extra = _strip_annotated(annotation)
        constraints.extend(extra)

        kind: FieldKind
        if get_origin(annotation) is tuple:
            args = get_args(annotation)
            if len(args) != 2 or args[1] is not Ellipsis:
                raise SchemaError(f"Field {name}: only variable-length tuple[X, ...] is supported")
            element, _ = _strip_annotated(args[0])
            if _is_positional(element):
                kind = "batch"
            elif element is int:
                kind = "sequence"
            else:
                raise SchemaError(f"Field {name}: unsupported sequence element {element}")
            annotation = element
        elif _is_positional(annotation):
            kind = "positional"
        elif annotation in _SCALAR_TYPES:
            kind = "scalar"
        else:
            raise SchemaError(
                f"Field {name}: unsupported type {annotation}. "
                f"Supported: int, float, str, PositionalRecord and tuples of them."
            )

        min_value, max_value = _collect_bounds(constraints)
        if (min_value is not None or max_value is not None) and annotation is not int:
            raise SchemaError(f"Field {name}: ge=/le= bounds are only supported on int")

        return FieldSchema(
            name=name,
            kind=kind,
            python_type=annotation,
            nullable=nullable,
            min_value=min_value,
            max_value=max_value,
        )


@functools.lru_cache(maxsize=None)
def schema_for(model_class: Type[BaseModel]) -> RecordSchema:
    """Build a model's schema once; schemas are immutable after construction."""
    return RecordSchema(model_class)


def _is_positional(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, PositionalRecord)


def _strip_annotated(annotation: Any) -> tuple[Any, list[Any]]:
    """Split ``Annotated[T, ...]`` into ``T`` and its metadata."""
    if get_origin(annotation) is Annotated:
        base, *metadata = get_args(annotation)
        return base, metadata
    return annotation, []


def _collect_bounds(constraints: Iterable[Any]) -> tuple[Optional[int], Optional[int]]:
    """Pull ge/le bounds out of Pydantic and annotated-types metadata."""
    min_value = None
    max_value = None
    for constraint in constraints:
        # Field(...) nested inside Annotated under an Optional keeps its own metadata
        if isinstance(constraint, FieldInfo):
            lo, hi = _collect_bounds(constraint.metadata)
            min_value = lo if lo is not None else min_value
            max_value = hi if hi is not None else max_value
            continue
        if getattr(constraint, "ge", None) is not None:
            min_value = constraint.ge
        if getattr(constraint, "le", None) is not None:
            max_value = constraint.le
    return min_value, max_value
