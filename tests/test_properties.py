# tests/test_properties.py
"""Tests for functional and non-functional property slots."""

from datetime import datetime, timezone

import pytest

from asvocab.errors import IndexOutOfRange, MalformedValue
from asvocab.properties import FunctionalProperty, NonFunctionalProperty, new_property
from asvocab.schema import Cardinality, PropertySpec
from asvocab.values import Value, ValueKind

PUBLISHED = PropertySpec(
    name="published",
    cardinality=Cardinality.FUNCTIONAL,
    kinds=frozenset({ValueKind.DATETIME, ValueKind.IRI}),
)
OBJECT = PropertySpec(
    name="object",
    kinds=frozenset({ValueKind.IRI, ValueKind.OBJECT, ValueKind.STRING}),
)


class TestFunctionalProperty:
    """Test FunctionalProperty."""

    def test_starts_unset(self):
        prop = FunctionalProperty(PUBLISHED)
        assert not prop.is_set()
        assert prop.get() is None

    def test_set_datetime(self):
        prop = FunctionalProperty(PUBLISHED)
        now = datetime.now(timezone.utc)
        prop.set(now)

        assert prop.is_set()
        assert prop.is_datetime()
        assert not prop.is_iri()
        assert prop.get().payload == now

    def test_set_iri(self):
        prop = FunctionalProperty(PUBLISHED)
        prop.set_iri("https://example.org/some/path")

        assert prop.is_iri()
        assert prop.get_iri() == "https://example.org/some/path"

    def test_last_write_wins(self):
        prop = FunctionalProperty(PUBLISHED)
        prop.set_iri("https://example.org/a")
        prop.set(datetime(2024, 1, 1, tzinfo=timezone.utc))

        assert prop.is_datetime()
        assert prop.get_iri() is None

    def test_set_explicit_value_unconditionally(self):
        prop = FunctionalProperty(PUBLISHED)
        prop.set(Value.string("not checked"))
        assert prop.get() == Value.string("not checked")

    def test_set_plain_value_checked(self):
        prop = FunctionalProperty(PUBLISHED)
        with pytest.raises(MalformedValue):
            prop.set("not a time or uri")
        assert not prop.is_set()

    def test_clear(self):
        prop = FunctionalProperty(PUBLISHED)
        prop.set_iri("https://example.org/a")
        prop.clear()
        assert not prop.is_set()


class TestNonFunctionalProperty:
    """Test NonFunctionalProperty."""

    def test_starts_empty(self):
        prop = NonFunctionalProperty(OBJECT)
        assert prop.is_empty()
        assert len(prop) == 0

    def test_append_and_prepend_order(self):
        prop = NonFunctionalProperty(OBJECT)
        prop.append("second")
        prop.prepend("first")
        prop.append_iri("https://example.org/third")

        assert [v.payload for v in prop] == [
            "first",
            "second",
            "https://example.org/third",
        ]
        assert prop.at(2).is_iri()

    def test_duplicates_allowed(self):
        prop = NonFunctionalProperty(OBJECT)
        prop.append_iri("https://example.org/a")
        prop.append_iri("https://example.org/a")
        assert len(prop) == 2

    def test_at_out_of_range(self):
        prop = NonFunctionalProperty(OBJECT)
        prop.append("only")
        with pytest.raises(IndexOutOfRange):
            prop.at(1)

    def test_negative_index_out_of_range(self):
        prop = NonFunctionalProperty(OBJECT)
        prop.append("only")
        with pytest.raises(IndexOutOfRange):
            prop.at(-1)

    def test_index_error_compatible(self):
        prop = NonFunctionalProperty(OBJECT)
        with pytest.raises(IndexError):
            prop.at(0)

    def test_remove(self):
        prop = NonFunctionalProperty(OBJECT)
        prop.append("a")
        prop.append("b")
        removed = prop.remove(0)

        assert removed.payload == "a"
        assert [v.payload for v in prop] == ["b"]

    def test_remove_out_of_range(self):
        prop = NonFunctionalProperty(OBJECT)
        with pytest.raises(IndexOutOfRange):
            prop.remove(0)

    def test_iteration_is_a_snapshot(self):
        prop = NonFunctionalProperty(OBJECT)
        prop.append("a")
        prop.append("b")

        seen = []
        for value in prop:
            seen.append(value.payload)
            prop.append("added during iteration")

        assert seen == ["a", "b"]
        assert len(prop) == 4

    def test_iteration_is_restartable(self):
        prop = NonFunctionalProperty(OBJECT)
        prop.append("a")
        assert list(prop) == list(prop)

    def test_values_is_a_copy(self):
        prop = NonFunctionalProperty(OBJECT)
        prop.append("a")
        prop.values().clear()
        assert len(prop) == 1


class TestNewProperty:
    """Test slot creation from a spec."""

    def test_functional_spec(self):
        assert isinstance(new_property(PUBLISHED), FunctionalProperty)

    def test_non_functional_spec(self):
        assert isinstance(new_property(OBJECT), NonFunctionalProperty)
