"""
Unit Tests for Cypher Construction Helpers

Tests for:
- sanitize_identifier: character filtering and idempotence
- parse_labels / label_expression: multi-label handling
- coerce_query_value: booleans, numbers and pass-through strings
- build_conditions / build_assignments / build_removals: clause text and parameters
"""

import pytest

from scholar_graph.services.graph.cypher import (
    build_assignments,
    build_conditions,
    build_removals,
    coerce_query_value,
    label_expression,
    parse_labels,
    sanitize_identifier,
)


# =============================================================================
# sanitize_identifier
# =============================================================================


class TestSanitizeIdentifier:
    """Tests for label / relationship type sanitization."""

    def test_keeps_plain_identifier(self) -> None:
        assert sanitize_identifier("Usuario") == "Usuario"

    def test_keeps_underscore_and_digits(self) -> None:
        assert sanitize_identifier("TIENE_INTERÉS_EN2") == "TIENE_INTERÉS_EN2"

    def test_keeps_unicode_letters(self) -> None:
        assert sanitize_identifier("Publicación") == "Publicación"
        assert sanitize_identifier("Категория") == "Категория"

    def test_strips_punctuation_and_whitespace(self) -> None:
        """Cypher metacharacters never survive sanitization."""
        assert sanitize_identifier("Usuario) DETACH DELETE (n") == "UsuarioDETACHDELETEn"
        assert sanitize_identifier("a-b.c:d`e{f}") == "abcdef"

    def test_can_return_empty(self) -> None:
        assert sanitize_identifier("!!!") == ""
        assert sanitize_identifier("") == ""

    @pytest.mark.parametrize(
        "raw", ["Usuario", "x;y", " Pub licación ", "__init__", "ñ-ü", "1:2"]
    )
    def test_idempotent(self, raw: str) -> None:
        once = sanitize_identifier(raw)
        assert sanitize_identifier(once) == once

    @pytest.mark.parametrize("raw", ["a b", "x;--y", "q'uote\"d", "t\tab\n"])
    def test_output_is_word_characters_only(self, raw: str) -> None:
        result = sanitize_identifier(raw)
        assert all(ch == "_" or ch.isalnum() for ch in result)


class TestLabelParsing:
    """Tests for comma-separated label lists."""

    def test_splits_and_sanitizes(self) -> None:
        assert parse_labels("Usuario, Investigador") == ["Usuario", "Investigador"]

    def test_drops_empty_entries(self) -> None:
        assert parse_labels("Usuario,,!!,") == ["Usuario"]
        assert parse_labels("") == []

    def test_label_expression(self) -> None:
        assert label_expression(["Usuario", "Investigador"]) == ":Usuario:Investigador"
        assert label_expression(["Usuario"]) == ":Usuario"


# =============================================================================
# coerce_query_value
# =============================================================================


class TestCoerceQueryValue:
    """Tests for query-string value coercion."""

    @pytest.mark.parametrize("raw", ["true", "TRUE", "True"])
    def test_true_any_case(self, raw: str) -> None:
        assert coerce_query_value(raw) is True

    @pytest.mark.parametrize("raw", ["false", "FALSE", "False"])
    def test_false_any_case(self, raw: str) -> None:
        assert coerce_query_value(raw) is False

    def test_integer_string(self) -> None:
        result = coerce_query_value("42")
        assert result == 42
        assert isinstance(result, int)

    def test_negative_integer_string(self) -> None:
        assert coerce_query_value("-7") == -7

    def test_float_string(self) -> None:
        result = coerce_query_value("3.5")
        assert result == 3.5
        assert isinstance(result, float)

    @pytest.mark.parametrize("raw", ["abc123", "12abc", "", "   ", "nan", "inf", "yes"])
    def test_other_strings_unchanged(self, raw: str) -> None:
        assert coerce_query_value(raw) == raw

    @pytest.mark.parametrize("raw", ["2024_01", "1_000", "\u0664\u0662", "\uff14\uff12", "0x1A"])
    def test_non_plain_numeric_literals_unchanged(self, raw: str) -> None:
        assert coerce_query_value(raw) == raw

    @pytest.mark.parametrize("raw, expected", [("1e3", 1000.0), (".5", 0.5), ("+8", 8)])
    def test_plain_numeric_forms(self, raw: str, expected: float) -> None:
        assert coerce_query_value(raw) == expected

    def test_non_string_unchanged(self) -> None:
        assert coerce_query_value(5) == 5
        assert coerce_query_value(None) is None
        assert coerce_query_value(["a"]) == ["a"]


# =============================================================================
# Clause Builders
# =============================================================================


class TestBuildConditions:
    """Tests for WHERE clause construction."""

    def test_single_field(self) -> None:
        clause, params = build_conditions("n", {"rol": "estudiante"})

        assert clause == "n.rol = $rol"
        assert params == {"rol": "estudiante"}

    def test_multiple_fields_joined_with_and(self) -> None:
        clause, params = build_conditions("r", {"estado": "Activo", "anio": 2024})

        assert clause == "r.estado = $estado AND r.anio = $anio"
        assert params == {"estado": "Activo", "anio": 2024}

    def test_prefix_applies_to_parameters_only(self) -> None:
        clause, params = build_conditions("n", {"rol": "x"}, prefix="filter_")

        assert clause == "n.rol = $filter_rol"
        assert params == {"filter_rol": "x"}

    def test_empty_mapping_raises(self) -> None:
        with pytest.raises(ValueError):
            build_conditions("n", {})


class TestBuildAssignments:
    """Tests for SET list construction."""

    def test_comma_separated(self) -> None:
        clause, params = build_assignments("n", {"activo": True, "nivel": 3})

        assert clause == "n.activo = $activo, n.nivel = $nivel"
        assert params == {"activo": True, "nivel": 3}

    def test_prefixed_parameters_do_not_collide_with_filter(self) -> None:
        where, filter_params = build_conditions("n", {"rol": "a"}, prefix="filter_")
        assignments, prop_params = build_assignments("n", {"rol": "b"}, prefix="prop_")

        assert where == "n.rol = $filter_rol"
        assert assignments == "n.rol = $prop_rol"
        assert {**filter_params, **prop_params} == {"filter_rol": "a", "prop_rol": "b"}

    def test_empty_mapping_raises(self) -> None:
        with pytest.raises(ValueError):
            build_assignments("n", {})


class TestBuildRemovals:
    """Tests for REMOVE clause construction."""

    def test_remove_clause(self) -> None:
        assert build_removals("n", ["fecha", "estado"]) == "REMOVE n.fecha, n.estado"

    def test_empty_keys_raise(self) -> None:
        with pytest.raises(ValueError):
            build_removals("r", [])
