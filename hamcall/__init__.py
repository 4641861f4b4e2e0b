"""Structural parser for amateur radio callsigns."""

from .adapters import (
    CallsignParser,
    EntityTable,
    classify_indicator,
    get_entity_table,
    load_entity_table,
    merge_callsign_info,
    parse_callsign,
    resolve_prefix,
)
from .models import ParsedCallsign, PrefixState

__all__ = [
    "CallsignParser",
    "EntityTable",
    "ParsedCallsign",
    "PrefixState",
    "classify_indicator",
    "get_entity_table",
    "load_entity_table",
    "merge_callsign_info",
    "parse_callsign",
    "resolve_prefix",
]
