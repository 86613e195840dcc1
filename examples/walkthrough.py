#!/usr/bin/env python3
"""
Walk through building, serializing and dispatching vocabulary objects.

Run from the repo root:
    python examples/walkthrough.py
"""

import json
import sys
from datetime import datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from asvocab import (  # noqa: E402
    NoCallbackMatch,
    ResolutionError,
    TypeResolver,
    encode,
    new_object,
    serialize,
)


def main():
    # A Note with an id
    note = new_object("Note")
    note.set_id("https://example.com/some/path/to/this/note")

    # Property slots are live: changing the slot changes the note
    content = note.get_property("content")
    content.set("Hello, world!")

    # "published" is functional: it holds a time or an IRI, never both
    published = note.get_property("published")
    published.set(datetime.now(timezone.utc))
    if published.is_iri():
        print(published.get_iri())
    elif published.is_datetime():
        print(published.get().payload)

    # "object" is non-functional: append, prepend, and IRIs too
    create = new_object("Create")
    objects = create.get_property("object")
    objects.append(note)
    objects.prepend(new_object("Article"))
    objects.append_iri("https://example.org/foo")
    for value in objects:
        print(value.kind.value, value.payload)

    # Dispatch an inbound document by type
    document = {
        "@context": "https://www.w3.org/ns/activitystreams",
        "id": "https://example.org/foo",
        "name": "Foo Bar",
        "inbox": "https://example.org/foo/inbox",
        "outbox": "https://example.org/foo/outbox",
        "type": "Person",
        "url": "https://example.org/foo",
    }
    received = {}

    resolver = TypeResolver()

    @resolver.handler("Person")
    def on_person(person):
        received["person"] = person

    @resolver.handler("Note")
    def on_note(note):
        print(note)

    try:
        resolver.resolve(document)
    except ResolutionError as e:
        print(f"Error: {e}")

    print(json.dumps(encode(received["person"]), indent=2))

    # Exact-type dispatch: a Collection handler does not see subtypes
    collection = new_object("Collection")
    print(json.dumps(serialize(collection)))

    type_resolver = TypeResolver()
    type_resolver.register("OrderedCollection", lambda oc: print("ordered", oc))
    try:
        type_resolver.resolve(collection)
    except NoCallbackMatch as e:
        print(f"Error: {e}")


if __name__ == "__main__":
    main()
