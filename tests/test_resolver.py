# tests/test_resolver.py
"""Tests for type-based dispatch."""

import pytest

from asvocab.codec import decode
from asvocab.errors import (
    CardinalityViolation,
    DuplicateHandler,
    MalformedValue,
    MissingType,
    NoCallbackMatch,
    ResolutionError,
    UnhandledType,
    UnknownType,
)
from asvocab.objects import TypedObject, new_object
from asvocab.resolver import TypeResolver


class Recorder:
    """Handler that records what it was called with."""

    def __init__(self, result=None):
        self.calls = []
        self.result = result

    def __call__(self, obj, *args, **kwargs):
        self.calls.append((obj, args, kwargs))
        return self.result


@pytest.fixture
def person_handler():
    return Recorder(result="handled")


@pytest.fixture
def resolver(schema, person_handler):
    """Resolver over {Note, Person} with only a Person handler."""
    return TypeResolver(schema, {"Person": person_handler})


class TestThreeWayDispatch:
    """Test matched / known-but-unhandled / unknown outcomes."""

    def test_matched(self, resolver, person_handler):
        result = resolver.resolve({"type": "Person", "name": "Foo Bar"})

        assert result == "handled"
        assert len(person_handler.calls) == 1
        person = person_handler.calls[0][0]
        assert isinstance(person, TypedObject)
        assert person.get_property("name").get().payload == "Foo Bar"

    def test_known_but_unhandled(self, resolver):
        with pytest.raises(NoCallbackMatch) as exc:
            resolver.resolve({"type": "Note", "content": "hi"})
        assert exc.value.type_tag == "Note"

    def test_unknown_type(self, resolver):
        with pytest.raises(UnhandledType) as exc:
            resolver.resolve({"type": "Article"})
        assert exc.value.type_tag == "Article"

    def test_outcomes_are_distinguishable(self, resolver):
        with pytest.raises(ResolutionError) as unhandled:
            resolver.resolve({"type": "Article"})
        with pytest.raises(ResolutionError) as no_match:
            resolver.resolve({"type": "Note"})
        assert not isinstance(unhandled.value, NoCallbackMatch)
        assert not isinstance(no_match.value, UnhandledType)

    def test_skip_unknown_inbound(self, resolver, person_handler):
        inbound = [
            {"type": "Person", "name": "a"},
            {"type": "Article"},
            {"type": "Note"},
            {"type": "Person", "name": "b"},
        ]
        for data in inbound:
            try:
                resolver.resolve(data)
            except ResolutionError:
                continue
        assert len(person_handler.calls) == 2


class TestResolveInputs:
    """Test what resolve() accepts."""

    def test_typed_object(self, resolver, person_handler, schema):
        person = new_object("Person", schema)
        resolver.resolve(person)
        assert person_handler.calls[0][0] is person

    def test_typed_object_known_but_unhandled(self, resolver, schema):
        with pytest.raises(NoCallbackMatch):
            resolver.resolve(new_object("Note", schema))

    def test_typed_object_from_other_schema(self, resolver):
        with pytest.raises(UnhandledType):
            resolver.resolve(new_object("Article"))

    def test_missing_type(self, resolver):
        with pytest.raises(MissingType):
            resolver.resolve({"name": "nobody"})

    def test_null_type(self, resolver):
        with pytest.raises(MissingType):
            resolver.resolve({"type": None, "name": "nobody"})

    def test_not_a_map(self, resolver):
        with pytest.raises(MalformedValue):
            resolver.resolve("Person")

    def test_decode_errors_propagate(self, resolver):
        with pytest.raises(CardinalityViolation):
            resolver.resolve({"type": "Person", "name": ["a", "b"]})

    def test_extra_arguments_forwarded(self, resolver, person_handler):
        ctx = object()
        resolver.resolve({"type": "Person"}, ctx, trace=True)
        _, args, kwargs = person_handler.calls[0]
        assert args == (ctx,)
        assert kwargs == {"trace": True}

    def test_handler_exception_propagates(self, schema):
        def failing(note):
            raise RuntimeError("store unavailable")

        resolver = TypeResolver(schema, {"Note": failing})
        with pytest.raises(RuntimeError, match="store unavailable"):
            resolver.resolve({"type": "Note"})


class TestRegistration:
    """Test handler registration."""

    def test_duplicate_handler(self, resolver):
        with pytest.raises(DuplicateHandler):
            resolver.register("Person", lambda p: None)

    def test_register_twice(self, schema):
        resolver = TypeResolver(schema)
        resolver.register("Note", lambda n: None)
        with pytest.raises(DuplicateHandler):
            resolver.register("Note", lambda n: None)

    def test_unknown_tag_rejected(self, schema):
        resolver = TypeResolver(schema)
        with pytest.raises(UnknownType):
            resolver.register("Article", lambda a: None)
        assert not resolver.handles("Article")

    def test_decorator(self, schema):
        resolver = TypeResolver(schema)

        @resolver.handler("Note")
        def on_note(note):
            return note.type_tag

        assert on_note.__name__ == "on_note"
        assert resolver.resolve({"type": "Note"}) == "Note"
        assert resolver.registered_types() == ["Note"]
        assert len(resolver) == 1

    def test_handlers_are_per_resolver(self, schema):
        first = TypeResolver(schema)
        second = TypeResolver(schema)
        first.register("Note", lambda n: "first")
        second.register("Note", lambda n: "second")
        assert first.resolve({"type": "Note"}) == "first"
        assert second.resolve({"type": "Note"}) == "second"


class TestExactTagDispatch:
    """Test that supertypes never catch subtypes."""

    def test_supertype_handler_does_not_match_subtype(self):
        resolver = TypeResolver()
        resolver.register("Collection", lambda c: "collection")

        ordered = decode({"type": "OrderedCollection"})
        with pytest.raises(NoCallbackMatch):
            resolver.resolve(ordered)

    def test_subtype_handler_does_not_match_supertype(self):
        resolver = TypeResolver()
        resolver.register("OrderedCollection", lambda oc: "ordered")

        with pytest.raises(NoCallbackMatch):
            resolver.resolve(new_object("Collection"))

    def test_both_registered(self):
        resolver = TypeResolver(handlers={
            "OrderedCollection": lambda oc: "ordered",
            "Collection": lambda c: "collection",
        })
        assert resolver.resolve({"type": "Collection"}) == "collection"
        assert resolver.resolve({"type": "OrderedCollection"}) == "ordered"
