"""
Input handling for the calculator front ends.

Converts raw user text into engine inputs and back. Invalid or empty
numeric input is treated as 0, never as an error, so a blank field and
an explicit zero behave the same.
"""

from __future__ import annotations

import math
from dataclasses import replace
from enum import Enum
from typing import Any, Mapping, Tuple
from urllib.parse import parse_qs, urlencode

import config as cfg
from projection import GlobalParameters, OptionModel


# ─── Number parsing ───────────────────────────────────────────────────

def _strip_number(s: str) -> str:
    """Remove currency symbols, thousands separators, spaces and percent signs."""
    for ch in ("$", "£", "€", ",", " ", "%"):
        s = s.replace(ch, "")
    return s


def parse_number(raw: Any) -> float:
    """Parse user input as a float, falling back to 0.0."""
    if raw is None:
        return 0.0
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        try:
            val = float(raw)
        except OverflowError:
            return 0.0
    else:
        try:
            val = float(_strip_number(str(raw)))
        except ValueError:
            return 0.0
    if not math.isfinite(val):
        return 0.0
    return val


def parse_int(raw: Any) -> int:
    return int(parse_number(raw))


# ─── Typed field updates ──────────────────────────────────────────────

class OptionField(Enum):
    """Editable OptionModel fields. Values are the dataclass attribute names."""

    NAME = "name"
    INITIAL_SALARY = "initial_salary"
    SALARY_GROWTH_RATE = "salary_growth_rate"
    TUITION_COST = "tuition_cost"
    TUITION_YEARS = "tuition_years"
    YEARS_DELAY = "years_delay"


_INT_FIELDS = (OptionField.TUITION_YEARS, OptionField.YEARS_DELAY)


def coerce_field(field: OptionField, raw: Any) -> Any:
    """Convert raw input to the type stored for ``field``."""
    if field is OptionField.NAME:
        return "" if raw is None else str(raw)
    if field in _INT_FIELDS:
        return parse_int(raw)
    return parse_number(raw)


def update_option(option: OptionModel, field: OptionField, raw: Any) -> OptionModel:
    """Return a copy of ``option`` with one field replaced."""
    return replace(option, **{field.value: coerce_field(field, raw)})


def option_from_mapping(values: Mapping[str, Any], defaults: Mapping[str, Any]) -> OptionModel:
    """Build an option from attribute-named values; missing keys use ``defaults``."""
    option = OptionModel.from_defaults(dict(defaults))
    for field in OptionField:
        if field.value in values:
            option = update_option(option, field, values[field.value])
    return option


# ─── Query string ─────────────────────────────────────────────────────

def _flatten(query: Mapping[str, Any]) -> dict:
    """Take the first value of list-valued entries (parse_qs / MultiDict)."""
    flat = {}
    for key, val in query.items():
        if isinstance(val, (list, tuple)):
            val = val[0] if val else ""
        flat[key] = val
    return flat


def encode_query(a: OptionModel, b: OptionModel, params: GlobalParameters) -> str:
    """Encode the full parameter set as a flat, shareable query string."""
    pairs = [
        (cfg.QUERY_YEARS, params.years),
        (cfg.QUERY_RATE, params.market_rate),
    ]
    for prefix, option in (("a_", a), ("b_", b)):
        for attr, key in cfg.QUERY_OPTION_KEYS.items():
            pairs.append((prefix + key, getattr(option, attr)))
    return urlencode(pairs)


def decode_query(
    query: str | Mapping[str, Any],
) -> Tuple[OptionModel, OptionModel, GlobalParameters]:
    """Decode a query string (or parsed mapping) into engine inputs.

    Keys that are absent fall back to the configured defaults; keys that
    are present but not numeric become 0.
    """
    if isinstance(query, str):
        query = parse_qs(query.lstrip("?"), keep_blank_values=True)
    flat = _flatten(query)

    options = []
    for prefix, defaults in (("a_", cfg.DEFAULT_OPTION_A), ("b_", cfg.DEFAULT_OPTION_B)):
        values = {
            attr: flat[prefix + key]
            for attr, key in cfg.QUERY_OPTION_KEYS.items()
            if prefix + key in flat
        }
        options.append(option_from_mapping(values, defaults))

    years = parse_int(flat[cfg.QUERY_YEARS]) if cfg.QUERY_YEARS in flat else cfg.DEFAULT_YEARS
    rate = parse_number(flat[cfg.QUERY_RATE]) if cfg.QUERY_RATE in flat else cfg.DEFAULT_MARKET_RATE

    return options[0], options[1], GlobalParameters(years=years, market_rate=rate)


def has_parameters(query: Mapping[str, Any]) -> bool:
    """True if any calculator key is present in ``query``."""
    keys = {cfg.QUERY_YEARS, cfg.QUERY_RATE}
    for prefix in ("a_", "b_"):
        keys.update(prefix + k for k in cfg.QUERY_OPTION_KEYS.values())
    return any(k in query for k in keys)
