# asvocab/values.py
"""
Property values.

A Value is a tagged union: exactly one of a primitive scalar (string,
dateTime, number, boolean), an external reference (an absolute IRI that the
engine never dereferences) or an embedded typed object.

Values are immutable. Equality compares (kind, payload), so an embedded
object compares by value as well. Scalar and IRI values are hashable;
OBJECT values are not, because the embedded TypedObject is mutable.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, FrozenSet, Iterable, Optional
from urllib.parse import urlparse

from .errors import MalformedValue


class ValueKind(Enum):
    """What shape a property value has."""
    STRING = "string"
    DATETIME = "datetime"
    NUMBER = "number"
    BOOLEAN = "boolean"
    IRI = "iri"
    OBJECT = "object"


ALL_KINDS: FrozenSet[ValueKind] = frozenset(ValueKind)

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")


def is_absolute_uri(text: Any) -> bool:
    """True if text is a well-formed absolute URI (scheme plus a body)."""
    if not isinstance(text, str) or not text:
        return False
    if any(ch.isspace() for ch in text):
        return False
    try:
        parsed = urlparse(text)
    except ValueError:
        return False
    if not parsed.scheme or not _SCHEME_RE.match(parsed.scheme):
        return False
    return bool(parsed.netloc or parsed.path)


def parse_datetime(text: str) -> Optional[datetime]:
    """
    Parse an xsd:dateTime string.

    Accepts ISO-8601 with a time part; a trailing "Z" means UTC.
    Returns None when the text is not a dateTime.
    """
    if not isinstance(text, str) or "T" not in text:
        return None
    candidate = text
    if candidate.endswith(("Z", "z")):
        candidate = candidate[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(candidate)
    except ValueError:
        return None


def format_datetime(value: datetime) -> str:
    """Format a datetime as xsd:dateTime, using "Z" for UTC."""
    text = value.isoformat()
    if value.utcoffset() == timedelta(0):
        text = text[: -len("+00:00")] + "Z"
    return text


@dataclass(frozen=True)
class Value:
    """
    A single property value.

    Attributes:
        kind: Which variant is active
        payload: str for STRING and IRI, datetime for DATETIME, int or float
            for NUMBER, bool for BOOLEAN, TypedObject for OBJECT
    """
    kind: ValueKind
    payload: Any

    @classmethod
    def string(cls, text: str) -> "Value":
        if not isinstance(text, str):
            raise MalformedValue(f"Expected a string, got {type(text).__name__}")
        return cls(ValueKind.STRING, text)

    @classmethod
    def timestamp(cls, value: datetime) -> "Value":
        if not isinstance(value, datetime):
            raise MalformedValue(f"Expected a datetime, got {type(value).__name__}")
        return cls(ValueKind.DATETIME, value)

    @classmethod
    def number(cls, value: float) -> "Value":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise MalformedValue(f"Expected a number, got {type(value).__name__}")
        return cls(ValueKind.NUMBER, value)

    @classmethod
    def boolean(cls, value: bool) -> "Value":
        if not isinstance(value, bool):
            raise MalformedValue(f"Expected a boolean, got {type(value).__name__}")
        return cls(ValueKind.BOOLEAN, value)

    @classmethod
    def iri(cls, uri: str) -> "Value":
        if not is_absolute_uri(uri):
            raise MalformedValue(f"Not an absolute URI: {uri!r}")
        return cls(ValueKind.IRI, uri)

    @classmethod
    def embedded(cls, obj: "TypedObject") -> "Value":  # noqa: F821
        from .objects import TypedObject

        if not isinstance(obj, TypedObject):
            raise MalformedValue(f"Expected a TypedObject, got {type(obj).__name__}")
        return cls(ValueKind.OBJECT, obj)

    def is_iri(self) -> bool:
        return self.kind is ValueKind.IRI

    def is_object(self) -> bool:
        return self.kind is ValueKind.OBJECT

    def is_datetime(self) -> bool:
        return self.kind is ValueKind.DATETIME

    def __repr__(self) -> str:
        return f"Value({self.kind.value}, {self.payload!r})"


def coerce(
    raw: Any,
    kinds: Iterable[ValueKind] = ALL_KINDS,
    property_name: Optional[str] = None,
) -> Value:
    """
    Interpret a plain Python value as a Value of one of the allowed kinds.

    Strings are tried as an IRI first (when IRIs or objects are allowed),
    then as a dateTime, then as plain text. A Value is checked against kinds and
    returned unchanged. Dicts are not accepted here; the codec decodes them
    into TypedObjects first.

    Raises:
        MalformedValue: raw cannot be read as any allowed kind
    """
    from .objects import TypedObject

    kinds = frozenset(kinds)
    label = f" for '{property_name}'" if property_name else ""

    if isinstance(raw, Value):
        value = raw
    elif isinstance(raw, bool):
        value = Value(ValueKind.BOOLEAN, raw)
    elif isinstance(raw, (int, float)):
        value = Value(ValueKind.NUMBER, raw)
    elif isinstance(raw, datetime):
        value = Value(ValueKind.DATETIME, raw)
    elif isinstance(raw, TypedObject):
        value = Value(ValueKind.OBJECT, raw)
    elif isinstance(raw, str):
        # A slot that takes embedded objects also takes references to them.
        if kinds & {ValueKind.IRI, ValueKind.OBJECT} and is_absolute_uri(raw):
            return Value(ValueKind.IRI, raw)
        if ValueKind.DATETIME in kinds:
            parsed = parse_datetime(raw)
            if parsed is not None:
                return Value(ValueKind.DATETIME, parsed)
        if ValueKind.STRING in kinds:
            return Value(ValueKind.STRING, raw)
        if kinds & {ValueKind.IRI, ValueKind.OBJECT}:
            raise MalformedValue(
                f"Malformed URI{label}: {raw!r}", property_name=property_name
            )
        raise MalformedValue(
            f"String not allowed{label}: {raw!r}", property_name=property_name
        )
    else:
        raise MalformedValue(
            f"Unsupported value{label}: {type(raw).__name__}",
            property_name=property_name,
        )

    if value.kind not in kinds:
        allowed = ", ".join(sorted(k.value for k in kinds))
        raise MalformedValue(
            f"{value.kind.value} not allowed{label} (allowed: {allowed})",
            property_name=property_name,
        )
    return value
