# asvocab/vocabulary.py
"""
Built-in ActivityStreams 2.0 vocabulary.

A compact table of the core and extended types, with the ActivityPub actor
properties (inbox, outbox, ...) folded into the actor types. Property
cardinalities follow the vocabulary where it is explicit; name, summary and
content are functional here because language maps are not modelled.
"""

from functools import lru_cache
from typing import Any, Dict

from .schema import Schema

AS_CONTEXT = "https://www.w3.org/ns/activitystreams"

# Shorthands for the property table below.
_REF = {"kinds": ["iri", "object"]}
_ONE_REF = {"functional": True, "kinds": ["iri", "object"]}
_ONE_IRI = {"functional": True, "kinds": ["iri"]}
_TEXT = {"functional": True, "kinds": ["string"]}
_TIME = {"functional": True, "kinds": ["datetime", "iri"]}
_NUMBER = {"functional": True, "kinds": ["number"]}

# ActivityPub actor properties, shared by every actor type.
_ACTOR = {
    "followers": _ONE_REF,
    "following": _ONE_REF,
    "inbox": _ONE_REF,
    "liked": _ONE_REF,
    "outbox": _ONE_REF,
    "preferredUsername": _TEXT,
    "streams": _REF,
}

ACTIVITYSTREAMS: Dict[str, Any] = {
    "types": {
        "Object": {
            "properties": {
                "attachment": _REF,
                "attributedTo": _REF,
                "audience": _REF,
                "bcc": _REF,
                "bto": _REF,
                "cc": _REF,
                "content": _TEXT,
                "context": _REF,
                "duration": _TEXT,
                "endTime": _TIME,
                "generator": _REF,
                "icon": _REF,
                "image": _REF,
                "inReplyTo": _REF,
                "location": _REF,
                "mediaType": _TEXT,
                "name": _TEXT,
                "preview": _REF,
                "published": _TIME,
                "replies": _ONE_REF,
                "startTime": _TIME,
                "summary": _TEXT,
                "tag": _REF,
                "to": _REF,
                "updated": _TIME,
                "url": _REF,
            },
        },
        "Link": {
            "properties": {
                "height": _NUMBER,
                "href": _ONE_IRI,
                "hreflang": _TEXT,
                "mediaType": _TEXT,
                "name": _TEXT,
                "preview": _REF,
                "rel": {"kinds": ["string"]},
                "width": _NUMBER,
            },
        },
        "Mention": {"extends": "Link"},

        # Activities
        "Activity": {
            "extends": "Object",
            "properties": {
                "actor": _REF,
                "instrument": _REF,
                "object": _REF,
                "origin": _REF,
                "result": _REF,
                "target": _REF,
            },
        },
        "IntransitiveActivity": {"extends": "Activity"},
        "Accept": {"extends": "Activity"},
        "Add": {"extends": "Activity"},
        "Announce": {"extends": "Activity"},
        "Arrive": {"extends": "IntransitiveActivity"},
        "Block": {"extends": "Activity"},
        "Create": {"extends": "Activity"},
        "Delete": {"extends": "Activity"},
        "Dislike": {"extends": "Activity"},
        "Flag": {"extends": "Activity"},
        "Follow": {"extends": "Activity"},
        "Ignore": {"extends": "Activity"},
        "Invite": {"extends": "Activity"},
        "Join": {"extends": "Activity"},
        "Leave": {"extends": "Activity"},
        "Like": {"extends": "Activity"},
        "Listen": {"extends": "Activity"},
        "Move": {"extends": "Activity"},
        "Offer": {"extends": "Activity"},
        "Question": {
            "extends": "IntransitiveActivity",
            "properties": {
                "anyOf": _REF,
                "closed": {"functional": True, "kinds": ["datetime", "boolean", "iri", "object"]},
                "oneOf": _REF,
            },
        },
        "Read": {"extends": "Activity"},
        "Reject": {"extends": "Activity"},
        "Remove": {"extends": "Activity"},
        "TentativeAccept": {"extends": "Accept"},
        "TentativeReject": {"extends": "Reject"},
        "Travel": {"extends": "IntransitiveActivity"},
        "Undo": {"extends": "Activity"},
        "Update": {"extends": "Activity"},
        "View": {"extends": "Activity"},

        # Actors
        "Application": {"extends": "Object", "properties": _ACTOR},
        "Group": {"extends": "Object", "properties": _ACTOR},
        "Organization": {"extends": "Object", "properties": _ACTOR},
        "Person": {"extends": "Object", "properties": _ACTOR},
        "Service": {"extends": "Object", "properties": _ACTOR},

        # Collections
        "Collection": {
            "extends": "Object",
            "properties": {
                "current": _ONE_REF,
                "first": _ONE_REF,
                "items": _REF,
                "last": _ONE_REF,
                "totalItems": _NUMBER,
            },
        },
        "OrderedCollection": {
            "extends": "Collection",
            "properties": {
                "orderedItems": _REF,
            },
        },
        "CollectionPage": {
            "extends": "Collection",
            "properties": {
                "next": _ONE_REF,
                "partOf": _ONE_REF,
                "prev": _ONE_REF,
            },
        },
        "OrderedCollectionPage": {
            "extends": "CollectionPage",
            "properties": {
                "orderedItems": _REF,
                "startIndex": _NUMBER,
            },
        },

        # Object types
        "Article": {"extends": "Object"},
        "Audio": {"extends": "Object"},
        "Document": {"extends": "Object"},
        "Event": {"extends": "Object"},
        "Image": {"extends": "Document"},
        "Note": {"extends": "Object"},
        "Page": {"extends": "Document"},
        "Place": {
            "extends": "Object",
            "properties": {
                "accuracy": _NUMBER,
                "altitude": _NUMBER,
                "latitude": _NUMBER,
                "longitude": _NUMBER,
                "radius": _NUMBER,
                "units": _TEXT,
            },
        },
        "Profile": {
            "extends": "Object",
            "properties": {
                "describes": _ONE_REF,
            },
        },
        "Relationship": {
            "extends": "Object",
            "properties": {
                "object": _REF,
                "relationship": _REF,
                "subject": _ONE_REF,
            },
        },
        "Tombstone": {
            "extends": "Object",
            "properties": {
                "deleted": _TIME,
                "formerType": {"kinds": ["string", "object"]},
            },
        },
        "Video": {"extends": "Document"},
    },
}


@lru_cache(maxsize=None)
def core_schema() -> Schema:
    """The built-in vocabulary, built once per process."""
    return Schema.from_dict(ACTIVITYSTREAMS)
