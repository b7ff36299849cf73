"""
Graph-related enums.

Defines the entry kinds reported by the network summary query and the
update verbs accepted by the node and relationship routes.
"""

from enum import Enum


class SummaryEntryType(str, Enum):
    """Kind of entry in the network summary."""

    NODE = "node"
    RELATIONSHIP = "relationship"


class UpdateMode(str, Enum):
    """
    HTTP verb an update arrived with.

    Both modes set only the listed properties; the mode is carried through
    for logging and response messages.
    """

    # PATCH: add/merge properties
    MERGE = "merge"

    # PUT: update properties
    REPLACE = "replace"
