# asvocab/errors.py
"""
Failure taxonomy for the vocabulary engine.

Every error is raised from the call that detects it and derives from
VocabError, so a host can catch the whole family at once. Value-shaped
errors also derive from ValueError, and IndexOutOfRange from IndexError,
so generic handlers keep working.

Resolution failures (NoCallbackMatch, UnhandledType) share ResolutionError
so inbound objects that nobody handles can be skipped with a single except.
"""

from typing import Optional


class VocabError(Exception):
    """Base class for all engine errors."""

    def __init__(
        self,
        message: str,
        type_tag: Optional[str] = None,
        property_name: Optional[str] = None,
    ):
        super().__init__(message)
        self.type_tag = type_tag
        self.property_name = property_name


class SchemaError(VocabError, ValueError):
    """The schema document itself is invalid."""


class UnknownType(VocabError, KeyError):
    """A type tag is not declared in the schema."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class MissingType(VocabError, ValueError):
    """A wire map has no `type` field."""


class CardinalityViolation(VocabError, ValueError):
    """Several wire values were given for a functional property."""


class MalformedValue(VocabError, ValueError):
    """A wire or caller value does not fit the property's allowed kinds."""


class IndexOutOfRange(VocabError, IndexError):
    """Indexed access past the end of a non-functional property."""


class DuplicateHandler(VocabError, ValueError):
    """A resolver already has a handler for this type tag."""


class ResolutionError(VocabError):
    """Base class for dispatch failures."""


class NoCallbackMatch(ResolutionError):
    """The type is known to the schema but no handler was registered."""


class UnhandledType(ResolutionError):
    """The type is not known to the schema at all."""
