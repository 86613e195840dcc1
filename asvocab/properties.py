# asvocab/properties.py
"""
Property slots.

A property is either functional (holds at most one value) or
non-functional (an ordered list of values, duplicates allowed).

Slots are handed out by TypedObject.get_property as live references:
mutating a slot mutates the object that owns it.
"""

from typing import Any, Iterator, List, Optional, Union

from .errors import IndexOutOfRange
from .schema import PropertySpec
from .values import Value, ValueKind, coerce


class _Property:
    """Shared plumbing for both slot kinds."""

    functional = False

    def __init__(self, spec: PropertySpec):
        self.spec = spec

    @property
    def name(self) -> str:
        return self.spec.name

    def _to_value(self, value: Any) -> Value:
        # Explicit Values are stored as given; plain values are interpreted
        # against the kinds this slot allows.
        if isinstance(value, Value):
            return value
        return coerce(value, self.spec.kinds, property_name=self.spec.name)


class FunctionalProperty(_Property):
    """
    A property holding zero or one value.

    Setting replaces any prior value (last write wins).
    """

    functional = True

    def __init__(self, spec: PropertySpec):
        super().__init__(spec)
        self._value: Optional[Value] = None

    def set(self, value: Any) -> None:
        """Replace the current value."""
        self._value = self._to_value(value)

    def set_iri(self, uri: str) -> None:
        """Replace the current value with an external reference."""
        self._value = Value.iri(uri)

    def get(self) -> Optional[Value]:
        """Return the current value, or None if unset."""
        return self._value

    def clear(self) -> None:
        self._value = None

    def is_set(self) -> bool:
        return self._value is not None

    def is_iri(self) -> bool:
        return self._value is not None and self._value.kind is ValueKind.IRI

    def is_datetime(self) -> bool:
        return self._value is not None and self._value.kind is ValueKind.DATETIME

    def get_iri(self) -> Optional[str]:
        """The held IRI, or None if the value is unset or not a reference."""
        return self._value.payload if self.is_iri() else None

    def __eq__(self, other) -> bool:
        if not isinstance(other, FunctionalProperty):
            return NotImplemented
        return self.spec == other.spec and self._value == other._value

    def __repr__(self) -> str:
        return f"FunctionalProperty({self.name}={self._value!r})"


class NonFunctionalProperty(_Property):
    """
    A property holding an ordered sequence of values.

    Iteration works on a snapshot taken when it starts, so appending or
    removing while iterating does not affect the running loop.
    """

    def __init__(self, spec: PropertySpec):
        super().__init__(spec)
        self._values: List[Value] = []

    def append(self, value: Any) -> None:
        self._values.append(self._to_value(value))

    def prepend(self, value: Any) -> None:
        self._values.insert(0, self._to_value(value))

    def append_iri(self, uri: str) -> None:
        self._values.append(Value.iri(uri))

    def prepend_iri(self, uri: str) -> None:
        self._values.insert(0, Value.iri(uri))

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._values):
            raise IndexOutOfRange(
                f"Index {index} out of range for '{self.name}' "
                f"(length {len(self._values)})",
                property_name=self.name,
            )

    def at(self, index: int) -> Value:
        """Return the value at index."""
        self._check_index(index)
        return self._values[index]

    def remove(self, index: int) -> Value:
        """Remove and return the value at index."""
        self._check_index(index)
        return self._values.pop(index)

    def values(self) -> List[Value]:
        """A copy of the current values, in order."""
        return list(self._values)

    def clear(self) -> None:
        self._values.clear()

    def is_empty(self) -> bool:
        return not self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Value]:
        return iter(list(self._values))

    def __eq__(self, other) -> bool:
        if not isinstance(other, NonFunctionalProperty):
            return NotImplemented
        return self.spec == other.spec and self._values == other._values

    def __repr__(self) -> str:
        return f"NonFunctionalProperty({self.name}={self._values!r})"


Property = Union[FunctionalProperty, NonFunctionalProperty]


def new_property(spec: PropertySpec) -> Property:
    """Create an empty slot with the cardinality the spec declares."""
    if spec.functional:
        return FunctionalProperty(spec)
    return NonFunctionalProperty(spec)
