"""Utility functions for tillbook."""

from tillbook.utils.date_parser import parse_date, parse_datetime, get_date_range
from tillbook.utils.amount_parser import parse_amount, parse_minor_units, to_minor_units
from tillbook.utils.entity_resolver import resolve_entity

__all__ = [
    "parse_date",
    "parse_datetime",
    "get_date_range",
    "parse_amount",
    "parse_minor_units",
    "to_minor_units",
    "resolve_entity",
]
