"""Tests for input parsing, typed field updates and share strings."""
from urllib.parse import parse_qs

import pytest

import config as cfg
from params import (
    OptionField,
    decode_query,
    encode_query,
    has_parameters,
    parse_int,
    parse_number,
    update_option,
)
from projection import GlobalParameters, OptionModel


class TestParseNumber:
    @pytest.mark.parametrize("raw, expected", [
        ("75000", 75_000),
        ("$75,000", 75_000),
        ("£1,250.50", 1_250.5),
        ("7%", 7),
        ("  3.5 ", 3.5),
        ("-12", -12),
        (42, 42),
        (2.5, 2.5),
    ])
    def test_valid(self, raw, expected):
        assert parse_number(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", None, "nan", "inf", "1.2.3", True])
    def test_invalid_defaults_to_zero(self, raw):
        assert parse_number(raw) == 0.0

    def test_huge_int_defaults_to_zero(self):
        assert parse_number(10 ** 400) == 0.0
        assert parse_int(10 ** 400) == 0

    def test_parse_int_truncates(self):
        assert parse_int("2.9") == 2
        assert parse_int("") == 0


class TestUpdateOption:
    def test_returns_new_record(self):
        opt = OptionModel.from_defaults(cfg.DEFAULT_OPTION_A)
        updated = update_option(opt, OptionField.INITIAL_SALARY, "$60,000")
        assert updated.initial_salary == 60_000
        assert opt.initial_salary == cfg.DEFAULT_OPTION_A["initial_salary"]

    def test_blank_numeric_field_is_zero(self):
        opt = OptionModel.from_defaults(cfg.DEFAULT_OPTION_B)
        assert update_option(opt, OptionField.TUITION_COST, "").tuition_cost == 0

    def test_year_fields_are_ints(self):
        opt = OptionModel.from_defaults(cfg.DEFAULT_OPTION_B)
        updated = update_option(opt, OptionField.YEARS_DELAY, "3.7")
        assert updated.years_delay == 3
        assert isinstance(updated.years_delay, int)

    def test_name_keeps_text(self):
        opt = OptionModel.from_defaults(cfg.DEFAULT_OPTION_A)
        assert update_option(opt, OptionField.NAME, "MBA 2027").name == "MBA 2027"

    def test_every_field_maps_to_attribute(self):
        opt = OptionModel.from_defaults(cfg.DEFAULT_OPTION_A)
        for field in OptionField:
            assert hasattr(opt, field.value)


class TestQueryString:
    def test_round_trip(self):
        a = OptionModel("Work", 55_000.0, 2.5, 0.0, 0, 1)
        b = OptionModel("PhD & more", 95_000.0, 4.0, 12_000.0, 5, 0)
        params = GlobalParameters(years=25, market_rate=6.5)
        assert decode_query(encode_query(a, b, params)) == (a, b, params)

    def test_flat_keys(self):
        a = OptionModel.from_defaults(cfg.DEFAULT_OPTION_A)
        b = OptionModel.from_defaults(cfg.DEFAULT_OPTION_B)
        parsed = parse_qs(encode_query(a, b, GlobalParameters(10, 5)))
        assert parsed["years"] == ["10"]
        assert parsed["b_tuition_years"] == ["2"]
        assert parsed["a_name"] == ["Work now"]

    def test_missing_keys_use_defaults(self):
        a, b, params = decode_query("")
        assert a == OptionModel.from_defaults(cfg.DEFAULT_OPTION_A)
        assert b == OptionModel.from_defaults(cfg.DEFAULT_OPTION_B)
        assert params == GlobalParameters(cfg.DEFAULT_YEARS, cfg.DEFAULT_MARKET_RATE)

    def test_invalid_values_become_zero(self):
        a, b, params = decode_query("?a_salary=abc&years=&rate=lots")
        assert a.initial_salary == 0
        assert params.years == 0
        assert params.market_rate == 0
        assert b.initial_salary == cfg.DEFAULT_OPTION_B["initial_salary"]

    def test_accepts_mapping(self):
        a, _, params = decode_query({"a_salary": ["61000"], "years": "12"})
        assert a.initial_salary == 61_000
        assert params.years == 12

    def test_has_parameters(self):
        assert has_parameters({"b_delay": "1"})
        assert not has_parameters({"utm_source": "x"})
