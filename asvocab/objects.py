# asvocab/objects.py
"""
Typed objects.

A TypedObject is an instance of one schema type: an optional id (absolute
URI), an immutable type tag, one slot per declared property and any wire
keys the schema does not know about (kept as opaque extension data).

Property handles are live:

    note = new_object("Note")
    content = note.get_property("content")
    content.set("Hello, world!")
    assert note.get_property("content").get().payload == "Hello, world!"
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple

from .errors import MalformedValue
from .properties import Property, new_property
from .schema import Schema, TypeSpec
from .values import is_absolute_uri
from .vocabulary import core_schema


class TypedObject:
    """
    An object of a declared type.

    Create with new_object() or codec.decode() rather than directly.
    """

    def __init__(self, type_spec: TypeSpec, object_id: Optional[str] = None):
        self._type_spec = type_spec
        self._id: Optional[str] = None
        self._properties: Dict[str, Property] = {
            spec.name: new_property(spec) for spec in type_spec.properties
        }
        self.extensions: Dict[str, Any] = {}
        if object_id is not None:
            self.set_id(object_id)

    @property
    def type_tag(self) -> str:
        return self._type_spec.name

    @property
    def type_spec(self) -> TypeSpec:
        return self._type_spec

    @property
    def id(self) -> Optional[str]:
        return self._id

    def get_id(self) -> Optional[str]:
        return self._id

    def set_id(self, uri: Optional[str]) -> None:
        """Set the identifier; None clears it."""
        if uri is not None and not is_absolute_uri(uri):
            raise MalformedValue(f"id must be an absolute URI: {uri!r}",
                                 type_tag=self.type_tag, property_name="id")
        self._id = uri

    def get_property(self, name: str) -> Optional[Property]:
        """
        Get the live slot for a property.

        Returns None if the property is not declared for this type.
        """
        return self._properties.get(name)

    def set_property(self, name: str, value: Any) -> None:
        """
        Set a functional property or append to a non-functional one.

        Raises:
            MalformedValue: name is not declared for this type, or value
                does not fit the property
        """
        prop = self._properties.get(name)
        if prop is None:
            raise MalformedValue(f"{self.type_tag} has no property '{name}'",
                                 type_tag=self.type_tag, property_name=name)
        if prop.functional:
            prop.set(value)
        else:
            prop.append(value)

    def property_names(self) -> List[str]:
        return list(self._properties)

    def properties(self) -> Iterator[Tuple[str, Property]]:
        """Iterate (name, slot) pairs in schema order."""
        return iter(list(self._properties.items()))

    def __eq__(self, other) -> bool:
        if not isinstance(other, TypedObject):
            return NotImplemented
        return (
            self.type_tag == other.type_tag
            and self._id == other._id
            and self._properties == other._properties
            and self.extensions == other.extensions
        )

    def __repr__(self) -> str:
        set_names = [
            name for name, prop in self._properties.items()
            if (prop.is_set() if prop.functional else not prop.is_empty())
        ]
        return f"TypedObject({self.type_tag}, id={self._id!r}, set={set_names})"


def new_object(type_tag: str, schema: Optional[Schema] = None,
               object_id: Optional[str] = None) -> TypedObject:
    """
    Create an empty object of a declared type.

    Args:
        type_tag: Type to instantiate
        schema: Schema to use (default: the built-in vocabulary)
        object_id: Optional absolute URI identifier

    Raises:
        UnknownType: type_tag is not in the schema
    """
    if schema is None:
        schema = core_schema()
    return TypedObject(schema.require(type_tag), object_id=object_id)
