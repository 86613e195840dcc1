# asvocab - Typed ActivityStreams objects with a wire codec and type resolver
#
# A small engine for building, (de)serializing and dispatching vocabulary
# objects such as Note, Person and Collection.
#
# Core concepts:
# - Schema: Declared types and their properties (cardinality + value kinds)
# - TypedObject: An instance of a type, with live property slots
# - Codec: TypedObject <-> wire map (JSON-compatible dict)
# - TypeResolver: Dispatches an object to the handler for its exact type

from .errors import (
    VocabError,
    SchemaError,
    UnknownType,
    MissingType,
    CardinalityViolation,
    MalformedValue,
    IndexOutOfRange,
    DuplicateHandler,
    ResolutionError,
    NoCallbackMatch,
    UnhandledType,
)
from .values import Value, ValueKind
from .schema import Schema, TypeSpec, PropertySpec, Cardinality
from .properties import FunctionalProperty, NonFunctionalProperty
from .objects import TypedObject, new_object
from .vocabulary import AS_CONTEXT, core_schema
from .codec import decode, encode, serialize, loads, dumps
from .resolver import TypeResolver

__all__ = [
    # Model
    "Value",
    "ValueKind",
    "Schema",
    "TypeSpec",
    "PropertySpec",
    "Cardinality",
    "FunctionalProperty",
    "NonFunctionalProperty",
    "TypedObject",
    "new_object",
    "AS_CONTEXT",
    "core_schema",
    # Codec
    "decode",
    "encode",
    "serialize",
    "loads",
    "dumps",
    # Dispatch
    "TypeResolver",
    # Errors
    "VocabError",
    "SchemaError",
    "UnknownType",
    "MissingType",
    "CardinalityViolation",
    "MalformedValue",
    "IndexOutOfRange",
    "DuplicateHandler",
    "ResolutionError",
    "NoCallbackMatch",
    "UnhandledType",
]

__version__ = "0.1.0"
