# asvocab/schema.py
"""
Vocabulary schema.

The schema declares which type tags exist and, for each type, its ordered
properties: name, cardinality (functional or not) and the value kinds a
property accepts. It is loaded once and never mutated afterwards, so it can
be shared freely between threads.

Schemas are plain data and can be loaded from YAML:

    types:
      Object:
        properties:
          name: {functional: true, kinds: [string]}
          tag: {kinds: [iri, object]}
      Note:
        extends: Object
        properties:
          content: {functional: true, kinds: [string]}

A type that `extends` another inherits its properties, in order, before its
own. Inheritance only shapes property lists; dispatch never looks at it.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple

import yaml

from .errors import SchemaError, UnknownType
from .values import ALL_KINDS, ValueKind

logger = logging.getLogger(__name__)

# Wire keys handled by the codec itself.
RESERVED_NAMES = frozenset({"id", "type"})


class Cardinality(Enum):
    """How many values a property holds."""
    FUNCTIONAL = "functional"
    NON_FUNCTIONAL = "non-functional"


@dataclass(frozen=True)
class PropertySpec:
    """
    Declaration of a single property.

    Attributes:
        name: Wire key and accessor name
        cardinality: FUNCTIONAL (at most one value) or NON_FUNCTIONAL
        kinds: Value kinds the property accepts
    """
    name: str
    cardinality: Cardinality = Cardinality.NON_FUNCTIONAL
    kinds: FrozenSet[ValueKind] = ALL_KINDS

    @property
    def functional(self) -> bool:
        return self.cardinality is Cardinality.FUNCTIONAL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "functional": self.functional,
            "kinds": sorted(k.value for k in self.kinds),
        }

    @classmethod
    def from_dict(cls, name: str, data: Optional[Dict[str, Any]]) -> "PropertySpec":
        """Parse one property entry; None means all defaults."""
        if not isinstance(name, str) or not name:
            raise SchemaError(f"Invalid property name: {name!r}")
        if name in RESERVED_NAMES:
            raise SchemaError(f"'{name}' is reserved and cannot be a property",
                              property_name=name)
        data = data or {}
        if not isinstance(data, dict):
            raise SchemaError(f"Property '{name}' must be a mapping", property_name=name)

        unknown = set(data) - {"functional", "kinds"}
        if unknown:
            raise SchemaError(f"Property '{name}' has unknown keys: {sorted(unknown)}",
                              property_name=name)

        functional = data.get("functional", False)
        if not isinstance(functional, bool):
            raise SchemaError(f"Property '{name}': functional must be true or false",
                              property_name=name)

        raw_kinds = data.get("kinds")
        if raw_kinds is None:
            kinds = ALL_KINDS
        else:
            if isinstance(raw_kinds, str):
                raw_kinds = [raw_kinds]
            try:
                kinds = frozenset(ValueKind(k) for k in raw_kinds)
            except (TypeError, ValueError):
                raise SchemaError(f"Property '{name}' has invalid kinds: {raw_kinds!r}",
                                  property_name=name)
            if not kinds:
                raise SchemaError(f"Property '{name}' allows no kinds", property_name=name)

        return cls(
            name=name,
            cardinality=Cardinality.FUNCTIONAL if functional else Cardinality.NON_FUNCTIONAL,
            kinds=kinds,
        )


@dataclass(frozen=True)
class TypeSpec:
    """
    Declaration of a type: its tag and its ordered properties.

    `properties` already includes everything inherited through `extends`.
    """
    name: str
    properties: Tuple[PropertySpec, ...] = ()
    extends: Optional[str] = None

    def get(self, name: str) -> Optional[PropertySpec]:
        for spec in self.properties:
            if spec.name == name:
                return spec
        return None

    @property
    def property_names(self) -> List[str]:
        return [spec.name for spec in self.properties]


class Schema:
    """
    Read-only registry of type declarations, keyed by type tag.
    """

    def __init__(self, types: Iterable[TypeSpec]):
        table: Dict[str, TypeSpec] = {}
        for type_spec in types:
            if type_spec.name in table:
                raise SchemaError(f"Type {type_spec.name} declared twice",
                                  type_tag=type_spec.name)
            table[type_spec.name] = type_spec
        self._types = MappingProxyType(table)

    @property
    def types(self) -> "MappingProxyType[str, TypeSpec]":
        return self._types

    def get(self, type_tag: str) -> Optional[TypeSpec]:
        """Get a type declaration, or None if the tag is unknown."""
        return self._types.get(type_tag)

    def require(self, type_tag: str) -> TypeSpec:
        """Get a type declaration, raising UnknownType if the tag is unknown."""
        type_spec = self._types.get(type_tag)
        if type_spec is None:
            raise UnknownType(f"Unknown type: {type_tag}", type_tag=type_tag)
        return type_spec

    def tags(self) -> List[str]:
        return list(self._types)

    def __contains__(self, type_tag: object) -> bool:
        return type_tag in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        return f"Schema({len(self._types)} types)"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the same shape from_dict reads (own properties only)."""
        types = {}
        for tag, type_spec in self._types.items():
            inherited = set()
            if type_spec.extends:
                inherited = set(self._types[type_spec.extends].properties)
            entry: Dict[str, Any] = {}
            if type_spec.extends:
                entry["extends"] = type_spec.extends
            entry["properties"] = {
                spec.name: spec.to_dict()
                for spec in type_spec.properties
                if spec not in inherited
            }
            types[tag] = entry
        return {"types": types}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Schema":
        """
        Build a schema from its plain-data form.

        Args:
            data: {"types": {tag: {"extends": tag, "properties": {...}}}}

        Raises:
            SchemaError: the document is malformed, a supertype is missing,
                or the `extends` chain is cyclic
        """
        if not isinstance(data, dict) or not isinstance(data.get("types"), dict):
            raise SchemaError("Schema document must have a 'types' mapping")
        declared: Dict[str, Any] = data["types"]

        resolved: Dict[str, TypeSpec] = {}
        visiting = set()

        def resolve(tag: str) -> TypeSpec:
            if tag in resolved:
                return resolved[tag]
            if tag in visiting:
                raise SchemaError(f"Cyclic extends chain at {tag}", type_tag=tag)
            visiting.add(tag)

            entry = declared[tag] or {}
            if not isinstance(entry, dict):
                raise SchemaError(f"Type {tag} must be a mapping", type_tag=tag)

            parent = entry.get("extends")
            properties: List[PropertySpec] = []
            if parent is not None:
                if not isinstance(parent, str):
                    raise SchemaError(f"Type {tag}: extends must be a type tag, got {parent!r}",
                                      type_tag=tag)
                if parent not in declared:
                    raise SchemaError(f"Type {tag} extends unknown type {parent}",
                                      type_tag=tag)
                properties = list(resolve(parent).properties)

            own = entry.get("properties") or {}
            if not isinstance(own, dict):
                raise SchemaError(f"Type {tag}: properties must be a mapping",
                                  type_tag=tag)
            for name, prop_data in own.items():
                spec = PropertySpec.from_dict(name, prop_data)
                for i, existing in enumerate(properties):
                    if existing.name == name:
                        properties[i] = spec
                        break
                else:
                    properties.append(spec)

            visiting.discard(tag)
            resolved[tag] = TypeSpec(name=tag, properties=tuple(properties), extends=parent)
            return resolved[tag]

        for tag in declared:
            if not isinstance(tag, str) or not tag:
                raise SchemaError(f"Invalid type tag: {tag!r}")
            resolve(tag)

        logger.info(f"Loaded schema with {len(resolved)} types")
        return cls(resolved[tag] for tag in declared)

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "Schema":
        """Parse a schema from a YAML string."""
        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise SchemaError(f"Invalid schema YAML: {e}")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Path | str) -> "Schema":
        """Load a schema from a YAML file."""
        with open(path, "rb") as f:
            raw = f.read()
        try:
            yaml_content = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SchemaError(f"Schema file {path} is not valid UTF-8: {e}")
        return cls.from_yaml(yaml_content)
