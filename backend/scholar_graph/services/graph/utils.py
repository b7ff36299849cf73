"""
Knowledge Graph Utility Functions

Helpers for turning Neo4j driver values into JSON-ready Python values.

Functions:
    - to_plain: Convert nodes, relationships and temporal values recursively
    - record_to_dict: Convert a driver Record into a plain dict

Usage:
    from scholar_graph.services.graph.utils import record_to_dict

    rows = [record_to_dict(record) async for record in result]
"""

from typing import Any, Mapping

from neo4j.graph import Entity
from neo4j.time import Duration


def to_plain(value: Any) -> Any:
    """
    Convert a value returned by the Neo4j driver into plain Python.

    - Nodes and relationships become their property dicts
    - neo4j.time Date/DateTime/Time become datetime equivalents
    - Durations become ISO-8601 strings
    - Lists and maps are converted element by element

    Example:
        >>> to_plain({"n": node})
        {'n': {'id': 1, 'nombre': 'Ana'}}
    """
    if isinstance(value, Entity):
        return {key: to_plain(item) for key, item in value.items()}
    # Duration subclasses tuple, so it must be handled before sequences
    if isinstance(value, Duration):
        return value.iso_format()
    if isinstance(value, Mapping):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    if hasattr(value, "to_native"):
        return value.to_native()
    return value


def record_to_dict(record: Any) -> dict[str, Any]:
    """Convert a driver Record (or any mapping of columns) to a plain dict."""
    return {key: to_plain(item) for key, item in dict(record).items()}
