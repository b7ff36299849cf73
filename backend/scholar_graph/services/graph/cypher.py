"""
Cypher Construction Helpers

Small, pure helpers for building the dynamic parts of Cypher statements.

Labels and relationship types cannot be bound as query parameters in Cypher,
so they are interpolated into the query text after sanitize_identifier()
strips everything that is not a letter, digit or underscore. Property values
are always bound as parameters. Property keys are used verbatim, both as
field names and as parameter names.

Functions:
    - sanitize_identifier: Strip a label/relationship type to [letters, digits, _]
    - parse_labels: Split and sanitize a comma-separated label list
    - label_expression: Render labels as ":A:B"
    - coerce_query_value: Convert query-string values to bool/number/str
    - build_conditions: "a.k = $k AND ..." clause plus parameters
    - build_assignments: "a.k = $k, ..." clause plus parameters
    - build_removals: "REMOVE a.k, ..." clause

Usage:
    from scholar_graph.services.graph.cypher import (
        build_conditions,
        sanitize_identifier,
    )

    label = sanitize_identifier("Usuario!")        # "Usuario"
    where, params = build_conditions("n", {"rol": "estudiante"})
    query = f"MATCH (n:{label}) WHERE {where} RETURN n"
"""

import math
import re
from typing import Any, Iterable, Mapping


def sanitize_identifier(value: str) -> str:
    """
    Remove every character that is not a Unicode letter, digit or underscore.

    Args:
        value: Raw label or relationship type from the request path

    Returns:
        The sanitized identifier, possibly empty. Callers must reject an
        empty result before interpolating it.

    Example:
        >>> sanitize_identifier("Publicación; DROP")
        'PublicaciónDROP'
    """
    # str.isalnum() covers letters and digits in all scripts; combining
    # marks are dropped like any other punctuation.
    return "".join(ch for ch in value if ch == "_" or ch.isalnum())


def parse_labels(raw: str) -> list[str]:
    """
    Split a comma-separated label list, sanitizing each entry.

    Entries that are empty after sanitization are dropped.

    Example:
        >>> parse_labels("Usuario, Investigador,,!")
        ['Usuario', 'Investigador']
    """
    labels = (sanitize_identifier(part.strip()) for part in raw.split(","))
    return [label for label in labels if label]


def label_expression(labels: Iterable[str]) -> str:
    """Render sanitized labels as a Cypher label expression (":A:B")."""
    return "".join(f":{label}" for label in labels)


# Plain ASCII decimal or exponent literal; no digit separators
NUMBER_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def _parse_number(value: str) -> int | float | None:
    """Parse a complete numeric literal, or return None."""
    text = value.strip()
    if not NUMBER_PATTERN.fullmatch(text):
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def coerce_query_value(value: Any) -> Any:
    """
    Convert a query-string value to its natural type.

    - "true"/"false" (any case) become booleans
    - strings that parse entirely as a finite number become int or float
    - everything else, including non-string input, is returned unchanged

    Example:
        >>> coerce_query_value("TRUE"), coerce_query_value("42")
        (True, 42)
        >>> coerce_query_value("3.5"), coerce_query_value("abc123")
        (3.5, 'abc123')
    """
    if not isinstance(value, str):
        return value

    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False

    number = _parse_number(value)
    return value if number is None else number


def build_conditions(
    alias: str, mapping: Mapping[str, Any], prefix: str = ""
) -> tuple[str, dict[str, Any]]:
    """
    Build a conjunction of equality conditions against `alias`.

    Args:
        alias: Bound variable in the MATCH pattern (e.g. "n", "r")
        mapping: Field name → required value; must not be empty
        prefix: Prepended to each parameter name. With the default the
            parameter name equals the field name.

    Returns:
        Tuple of (clause, parameters)

    Raises:
        ValueError: If mapping is empty

    Example:
        >>> build_conditions("n", {"rol": "estudiante", "activo": True})
        ('n.rol = $rol AND n.activo = $activo', {'rol': 'estudiante', 'activo': True})
    """
    if not mapping:
        raise ValueError("build_conditions requires at least one field")

    clause = " AND ".join(f"{alias}.{key} = ${prefix}{key}" for key in mapping)
    return clause, {f"{prefix}{key}": value for key, value in mapping.items()}


def build_assignments(
    alias: str, mapping: Mapping[str, Any], prefix: str = ""
) -> tuple[str, dict[str, Any]]:
    """
    Build a comma-separated SET list against `alias`.

    Args:
        alias: Bound variable in the MATCH pattern
        mapping: Field name → new value; must not be empty
        prefix: Prepended to each parameter name

    Returns:
        Tuple of (clause, parameters); the clause has no SET keyword

    Raises:
        ValueError: If mapping is empty

    Example:
        >>> build_assignments("r", {"estado": "Activo"}, prefix="prop_")
        ('r.estado = $prop_estado', {'prop_estado': 'Activo'})
    """
    if not mapping:
        raise ValueError("build_assignments requires at least one field")

    clause = ", ".join(f"{alias}.{key} = ${prefix}{key}" for key in mapping)
    return clause, {f"{prefix}{key}": value for key, value in mapping.items()}


def build_removals(alias: str, keys: Iterable[str]) -> str:
    """
    Build a REMOVE clause for the given property keys.

    Raises:
        ValueError: If no keys are given

    Example:
        >>> build_removals("n", ["fecha", "estado"])
        'REMOVE n.fecha, n.estado'
    """
    items = [f"{alias}.{key}" for key in keys]
    if not items:
        raise ValueError("build_removals requires at least one key")
    return "REMOVE " + ", ".join(items)
