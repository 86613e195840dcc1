# asvocab/resolver.py
"""
Type resolver.

Dispatches a wire map or a TypedObject to the one handler registered for
its exact type tag:

    resolver = TypeResolver(schema)

    @resolver.handler("Person")
    def on_person(person):
        ...

    resolver.resolve({"type": "Person", "name": "Foo Bar"})

Three outcomes, kept distinct:
- a handler is registered for the tag: it is called and its result returned
- the tag is in the schema but has no handler: NoCallbackMatch
- the tag is not in the schema at all: UnhandledType

There is no supertype fallback: a handler for Collection never sees an
OrderedCollection. Finish registering before the first resolve(); the
handler table is not locked.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from .codec import decode
from .errors import DuplicateHandler, MalformedValue, MissingType, NoCallbackMatch, UnhandledType
from .objects import TypedObject
from .schema import Schema
from .vocabulary import core_schema

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]


class TypeResolver:
    """
    Exact-tag handler table over a schema.

    Args:
        schema: Schema that decides which tags are known (default: the
            built-in vocabulary)
        handlers: Optional initial {type_tag: handler} mapping
    """

    def __init__(self, schema: Optional[Schema] = None,
                 handlers: Optional[Mapping[str, Handler]] = None):
        self.schema = schema if schema is not None else core_schema()
        self._handlers: Dict[str, Handler] = {}
        for type_tag, fn in (handlers or {}).items():
            self.register(type_tag, fn)

    def register(self, type_tag: str, handler: Handler) -> None:
        """
        Register the handler for a type tag.

        Raises:
            DuplicateHandler: the tag already has a handler
            UnknownType: the tag is not in the schema, so the handler
                could never be called
        """
        if type_tag in self._handlers:
            raise DuplicateHandler(f"Handler for {type_tag} already registered",
                                   type_tag=type_tag)
        self.schema.require(type_tag)
        self._handlers[type_tag] = handler
        logger.debug(f"Registered handler for {type_tag}")

    def handler(self, type_tag: str) -> Callable[[Handler], Handler]:
        """
        Decorator form of register().

        Usage:
            @resolver.handler("Note")
            def on_note(note):
                ...
        """
        def decorator(fn: Handler) -> Handler:
            self.register(type_tag, fn)
            return fn
        return decorator

    def handles(self, type_tag: str) -> bool:
        return type_tag in self._handlers

    def registered_types(self) -> List[str]:
        return list(self._handlers)

    def resolve(self, data: TypedObject | Dict[str, Any], *args, **kwargs) -> Any:
        """
        Dispatch data to the handler for its type.

        Extra arguments are passed to the handler after the object. The
        handler's return value is returned and its exceptions propagate
        unchanged.

        Args:
            data: A wire map or an already decoded TypedObject

        Raises:
            MissingType: a wire map without "type", or with a null one
            UnhandledType: the type is not in the schema
            NoCallbackMatch: the type is known but has no handler
            Any decode error for a wire map whose type has a handler
        """
        type_tag = self._type_tag(data)

        if type_tag not in self.schema:
            logger.debug(f"Unhandled type: {type_tag}")
            raise UnhandledType(f"Type {type_tag} is not in the schema", type_tag=type_tag)

        fn = self._handlers.get(type_tag)
        if fn is None:
            logger.debug(f"No handler for {type_tag}")
            raise NoCallbackMatch(f"No handler registered for {type_tag}", type_tag=type_tag)

        obj = data if isinstance(data, TypedObject) else decode(data, self.schema)
        logger.debug(f"Dispatching {type_tag} to {getattr(fn, '__name__', fn)!s}")
        return fn(obj, *args, **kwargs)

    @staticmethod
    def _type_tag(data: Any) -> str:
        if isinstance(data, TypedObject):
            return data.type_tag
        if not isinstance(data, dict):
            raise MalformedValue(f"Cannot resolve a {type(data).__name__}")
        type_tag = data.get("type")
        if type_tag is None:
            raise MissingType("Wire map has no 'type'")
        if not isinstance(type_tag, str):
            raise MalformedValue(f"'type' must be a string, got {type(type_tag).__name__}",
                                 property_name="type")
        return type_tag

    def __len__(self) -> int:
        return len(self._handlers)
