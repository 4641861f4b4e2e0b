"""Adapter exports."""

from .callsign import (
    CallsignParser,
    classify_indicator,
    get_callsign_parser,
    merge_callsign_info,
    parse_callsign,
    resolve_prefix,
)
from .entities import EntityTable, get_entity_table, load_entity_table
from .indicators import IndicatorClassifier
from .prefix import PrefixResolver

__all__ = [
    "CallsignParser",
    "EntityTable",
    "IndicatorClassifier",
    "PrefixResolver",
    "classify_indicator",
    "get_callsign_parser",
    "get_entity_table",
    "load_entity_table",
    "merge_callsign_info",
    "parse_callsign",
    "resolve_prefix",
]
