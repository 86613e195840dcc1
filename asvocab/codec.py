# asvocab/codec.py
"""
Wire codec.

Maps TypedObjects to and from wire maps: JSON-compatible dicts with a
required "type", an optional "id" and one key per property.

Cardinality rules:
- A functional property accepts a single wire value or a one-element list.
  Two or more elements raise CardinalityViolation.
- A non-functional property accepts a list or a single value; a single
  value is read as a one-element list.
- On encode, non-functional properties are always lists, even with one
  element, so decode(encode(x)) == x.

Wire keys the schema does not declare are kept verbatim on the object and
written back unchanged. "@context" is treated the same way.
"""

import copy
import json
import logging
from typing import Any, Dict, Optional

from .errors import CardinalityViolation, MalformedValue, MissingType
from .objects import TypedObject
from .schema import RESERVED_NAMES, PropertySpec, Schema
from .values import Value, ValueKind, coerce, format_datetime
from .vocabulary import AS_CONTEXT, core_schema

logger = logging.getLogger(__name__)


def decode(data: Dict[str, Any], schema: Optional[Schema] = None) -> TypedObject:
    """
    Decode a wire map into a TypedObject.

    Embedded objects are decoded recursively. Nothing is returned on
    failure, so a partially built object is never visible.

    Args:
        data: Wire map
        schema: Schema to decode against (default: the built-in vocabulary)

    Raises:
        MissingType: data has no "type", or it is null
        UnknownType: the type is not in the schema
        CardinalityViolation: several values for a functional property
        MalformedValue: a value does not fit its property, or the map is
            nested deeper than the interpreter can recurse
    """
    if schema is None:
        schema = core_schema()
    try:
        obj = _decode_object(data, schema)
    except RecursionError:
        raise MalformedValue("Wire map nested too deeply")
    logger.debug(f"Decoded {obj.type_tag} (id={obj.id}, extensions={list(obj.extensions)})")
    return obj


def _decode_object(data: Any, schema: Schema) -> TypedObject:
    if not isinstance(data, dict):
        raise MalformedValue(f"Expected a wire map, got {type(data).__name__}")

    type_tag = data.get("type")
    if type_tag is None:
        raise MissingType("Wire map has no 'type'")
    if not isinstance(type_tag, str):
        raise MalformedValue(f"'type' must be a string, got {type(type_tag).__name__}",
                             property_name="type")

    type_spec = schema.require(type_tag)
    obj = TypedObject(type_spec)

    object_id = data.get("id")
    if object_id is not None:
        obj.set_id(object_id)

    for key, raw in data.items():
        if key in RESERVED_NAMES:
            continue

        spec = type_spec.get(key)
        if spec is None:
            obj.extensions[key] = copy.deepcopy(raw)
            continue
        if raw is None:
            continue

        items = raw if isinstance(raw, list) else [raw]
        prop = obj.get_property(key)
        if spec.functional:
            if len(items) > 1:
                raise CardinalityViolation(
                    f"{type_tag}.{key} is functional but got {len(items)} values",
                    type_tag=type_tag, property_name=key,
                )
            if items:
                prop.set(_decode_value(items[0], spec, schema, type_tag))
        else:
            for item in items:
                prop.append(_decode_value(item, spec, schema, type_tag))

    return obj


def _decode_value(raw: Any, spec: PropertySpec, schema: Schema, type_tag: str) -> Value:
    if isinstance(raw, dict):
        if ValueKind.OBJECT not in spec.kinds:
            raise MalformedValue(f"{type_tag}.{spec.name} does not accept objects",
                                 type_tag=type_tag, property_name=spec.name)
        return Value(ValueKind.OBJECT, _decode_object(raw, schema))
    if isinstance(raw, list):
        raise MalformedValue(f"{type_tag}.{spec.name} has a nested list",
                             type_tag=type_tag, property_name=spec.name)
    try:
        return coerce(raw, spec.kinds, property_name=spec.name)
    except MalformedValue as e:
        e.type_tag = type_tag
        raise


def encode(obj: TypedObject) -> Dict[str, Any]:
    """
    Encode a TypedObject as a wire map.

    Emits "type", "id" when set, every non-empty property in schema order,
    then the extension data. Unset properties are omitted.
    """
    data: Dict[str, Any] = {"type": obj.type_tag}
    if obj.id is not None:
        data["id"] = obj.id

    for name, prop in obj.properties():
        if prop.functional:
            if prop.is_set():
                data[name] = _encode_value(prop.get())
        elif not prop.is_empty():
            data[name] = [_encode_value(v) for v in prop]

    for key, raw in obj.extensions.items():
        if key in data:
            logger.warning(f"Extension key '{key}' shadows a {obj.type_tag} field, skipped")
            continue
        data[key] = copy.deepcopy(raw)

    logger.debug(f"Encoded {obj.type_tag} ({len(data)} keys)")
    return data


def _encode_value(value: Value) -> Any:
    if value.kind is ValueKind.OBJECT:
        return encode(value.payload)
    if value.kind is ValueKind.DATETIME:
        return format_datetime(value.payload)
    return value.payload


def serialize(obj: TypedObject, context: Any = AS_CONTEXT) -> Dict[str, Any]:
    """
    Encode for publishing: like encode(), with a top-level "@context".

    An "@context" already carried in the extension data wins.
    """
    data = encode(obj)
    if "@context" in data:
        return data
    return {"@context": context, **data}


def loads(text: str | bytes, schema: Optional[Schema] = None) -> TypedObject:
    """Decode a JSON document."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedValue(f"Invalid JSON: {e}")
    except RecursionError:
        raise MalformedValue("JSON document nested too deeply")
    return decode(data, schema)


def dumps(obj: TypedObject, **kwargs) -> str:
    """Encode to a JSON string; kwargs go to json.dumps."""
    return json.dumps(encode(obj), **kwargs)
