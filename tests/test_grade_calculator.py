"""
Tests for services/grade_calculator.py
"""
import pytest

from schemas.common import ErrorCode
from services.grade_calculator import (
    calculate_final_grade, derive_status, format_grade, parse_component_value
)


class TestCalculateFinalGrade:
    def test_programming_all_full_marks(self, catalog):
        result = calculate_final_grade(catalog.get("programming"), {"exam": 100, "project": 100, "homework": 100})
        assert result.ok
        assert format_grade(result.data) == "100.00"

    def test_programming_all_half_marks(self, catalog):
        result = calculate_final_grade(catalog.get("programming"), {"exam": 50, "project": 50, "homework": 50})
        assert format_grade(result.data) == "50.00"

    def test_weighted_sum(self, catalog):
        result = calculate_final_grade(catalog.get("math"), {"exam": 90, "homework": 50})
        assert result.data == pytest.approx(90 * 0.8 + 50 * 0.2)
        assert format_grade(result.data) == "82.00"

    def test_accepts_numeric_strings(self, catalog):
        result = calculate_final_grade(catalog.get("web_development"), {"project": " 75.5 ", "homework": "100"})
        assert result.ok
        assert format_grade(result.data) == "80.40"

    def test_extra_inputs_are_ignored(self, catalog):
        result = calculate_final_grade(catalog.get("math"), {"exam": 100, "homework": 100, "project": "junk"})
        assert result.ok

    @pytest.mark.parametrize("bad", [-1, 100.01, "abc", "", None, float("nan"), True])
    def test_invalid_value_names_component(self, catalog, bad):
        result = calculate_final_grade(catalog.get("math"), {"exam": bad, "homework": 50})
        assert not result.ok
        assert result.error.code == ErrorCode.INVALID_COMPONENT_GRADE
        assert "exam" in result.error.message

    def test_missing_component_is_invalid(self, catalog):
        result = calculate_final_grade(catalog.get("programming"), {"exam": 80, "homework": 80})
        assert not result.ok
        assert "project" in result.error.message

    def test_first_invalid_in_course_order(self, catalog):
        result = calculate_final_grade(catalog.get("programming"), {"exam": 500, "project": -3, "homework": 1})
        assert result.error.message.startswith("exam")

    def test_bounds_inclusive(self, catalog):
        assert calculate_final_grade(catalog.get("math"), {"exam": 0, "homework": 100}).ok


class TestStatus:
    def test_exactly_sixty_passes(self):
        assert derive_status(60.0) == "Passed"
        assert derive_status("60.00") == "Passed"

    def test_just_below_fails(self):
        assert derive_status(59.99) == "Failed"

    def test_status_follows_displayed_grade(self):
        assert format_grade(59.996) == "60.00"
        assert derive_status(59.996) == "Passed"

    def test_sixty_from_weights(self, catalog):
        result = calculate_final_grade(catalog.get("math"), {"exam": 60, "homework": 60})
        assert format_grade(result.data) == "60.00"
        assert derive_status(result.data) == "Passed"


def test_parse_component_value():
    assert parse_component_value("42") == 42.0
    assert parse_component_value(7) == 7.0
    assert parse_component_value("  ") is None
    assert parse_component_value([1]) is None
    assert parse_component_value("inf") is None
