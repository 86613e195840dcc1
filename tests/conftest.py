"""Shared fixtures."""

import pytest

from asvocab.schema import Schema

NOTE_PERSON_YAML = """
types:
  Note:
    properties:
      content: {functional: true, kinds: [string]}
      published: {functional: true, kinds: [datetime, iri]}
      attributedTo: {kinds: [iri, object]}
      tag: {kinds: [iri, object]}
      likes: {functional: true, kinds: [number]}
      sensitive: {functional: true, kinds: [boolean]}
  Person:
    properties:
      name: {functional: true, kinds: [string]}
      inbox: {functional: true, kinds: [iri]}
      url: {kinds: [iri, object]}
"""


@pytest.fixture
def schema():
    """Schema that knows exactly Note and Person."""
    return Schema.from_yaml(NOTE_PERSON_YAML)


@pytest.fixture
def schema_yaml():
    """YAML text of the Note/Person schema."""
    return NOTE_PERSON_YAML
