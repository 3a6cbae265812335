"""
Unit tests for the SQL fragment builders.

Tests:
- Partial update SET clause and value ordering
- Company filter WHERE clause, positions and validation
"""

import pytest

from app.core.exceptions import ValidationError
from app.core.sql import CompanyFilter, build_filter_clause, build_set_clause


class TestBuildSetClause:
    """Tests for build_set_clause"""

    def test_single_translated_field(self):
        result = build_set_clause({"firstName": "Joel"}, {"firstName": "first_name"})

        assert result.set_clause == '"first_name"=$1'
        assert result.values == ["Joel"]

    def test_untranslated_fields_keep_their_names(self):
        set_clause, values = build_set_clause({"name": "X", "description": "Y"}, {})

        assert set_clause == '"name"=$1, "description"=$2'
        assert values == ["X", "Y"]

    def test_positions_follow_insertion_order(self):
        """Values stay in the order keys were inserted, not sorted"""
        update = {"zeta": 1, "alpha": 2, "numEmployees": 3}

        set_clause, values = build_set_clause(update, {"numEmployees": "num_employees"})

        assert set_clause == '"zeta"=$1, "alpha"=$2, "num_employees"=$3'
        assert values == [1, 2, 3]

    def test_does_not_mutate_inputs(self):
        update = {"firstName": "Aliya", "age": 32}
        translation = {"firstName": "first_name"}

        build_set_clause(update, translation)

        assert update == {"firstName": "Aliya", "age": 32}
        assert translation == {"firstName": "first_name"}

    @pytest.mark.parametrize("translation", [{}, {"firstName": "first_name"}])
    def test_empty_update_fails(self, translation):
        with pytest.raises(ValidationError) as exc_info:
            build_set_clause({}, translation)

        assert exc_info.value.status_code == 400
        assert "no data" in exc_info.value.message.lower()


class TestBuildFilterClause:
    """Tests for build_filter_clause"""

    def test_name_only(self):
        result = build_filter_clause({"name": "c1"})

        assert result.where_clause == "name ILIKE $1"
        assert result.params == ["%c1%"]

    def test_min_and_max(self):
        where_clause, params = build_filter_clause({"minEmployees": 10, "maxEmployees": 100})

        assert where_clause == "num_employees >= $1 AND num_employees <= $2"
        assert params == [10, 100]

    def test_all_filters(self):
        where_clause, params = build_filter_clause(
            {"name": "net", "minEmployees": "5", "maxEmployees": "50"}
        )

        assert where_clause == "name ILIKE $1 AND num_employees >= $2 AND num_employees <= $3"
        assert params == ["%net%", 5, 50]

    def test_fixed_order_regardless_of_input_order(self):
        where_clause, params = build_filter_clause({"maxEmployees": 9, "name": "a"})

        assert where_clause == "name ILIKE $1 AND num_employees <= $2"
        assert params == ["%a%", 9]

    def test_max_only_starts_at_position_one(self):
        where_clause, params = build_filter_clause({"maxEmployees": "3"})

        assert where_clause == "num_employees <= $1"
        assert params == [3]

    def test_numeric_strings_are_coerced(self):
        _, params = build_filter_clause({"minEmployees": " 12 ", "maxEmployees": "7.5"})

        assert params == [12, 7.5]

    def test_min_greater_than_max_is_not_rejected(self):
        _, params = build_filter_clause({"minEmployees": 100, "maxEmployees": 1})

        assert params == [100, 1]

    def test_accepts_filter_struct(self):
        where_clause, params = build_filter_clause(CompanyFilter(name="x", min_employees=2))

        assert where_clause == "name ILIKE $1 AND num_employees >= $2"
        assert params == ["%x%", 2]

    def test_unknown_keys_are_ignored(self):
        where_clause, params = build_filter_clause({"name": "c", "potato": True})

        assert where_clause == "name ILIKE $1"
        assert params == ["%c%"]

    def test_does_not_mutate_input(self):
        filters = {"name": "c1", "minEmployees": "10"}

        build_filter_clause(filters)

        assert filters == {"name": "c1", "minEmployees": "10"}

    @pytest.mark.parametrize("filters", [{}, {"potato": True}, CompanyFilter()])
    def test_no_recognized_key_fails(self, filters):
        with pytest.raises(ValidationError):
            build_filter_clause(filters)

    @pytest.mark.parametrize("value", ["onehundred", "", "nan", "inf", True, [1]])
    def test_non_numeric_min_fails(self, value):
        with pytest.raises(ValidationError):
            build_filter_clause({"minEmployees": value})

    def test_non_numeric_max_fails(self):
        with pytest.raises(ValidationError) as exc_info:
            build_filter_clause({"name": "c", "maxEmployees": "lots"})

        assert "maxEmployees" in exc_info.value.message

    def test_min_is_validated_before_max(self):
        with pytest.raises(ValidationError) as exc_info:
            build_filter_clause({"minEmployees": "a", "maxEmployees": "b"})

        assert "minEmployees" in exc_info.value.message
