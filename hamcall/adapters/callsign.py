"""Callsign parsing.

A callsign consists of a prefix and a suffix, optionally decorated with
pre- and post-indicators separated by slashes (``YV5/N0CALL/P/QRP``) and a
packet radio SSID (``N0CALL-7``).

* There can be only one pre-indicator, and it replaces the prefix entirely
  (``YV5/N0CALL`` has a ``YV5`` prefix).
* There can be many post-indicators; see :mod:`hamcall.adapters.indicators`
  for how each of them is interpreted.  Later indicators win.

The parser does not try to validate callsigns against national rules.  Some
countries issue special calls with several digits or trailing numbers
(``3X2021``, ``VE1SPECIAL2000``), and those are accepted as they are.
"""

from __future__ import annotations

import re
from functools import reduce
from typing import Any, Dict, Optional, Tuple, Union

from hamcall.adapters.entities import EntityTable, get_entity_table
from hamcall.adapters.indicators import IndicatorClassifier
from hamcall.adapters.prefix import PrefixResolver
from hamcall.middleware.logging import log_debug
from hamcall.models import ParsedCallsign, PrefixState


# Pre-indicator, prefix core, rest of the call, post-indicators.
#
# The prefix core is one of:
#   - 5U followed by letters, Niger issues calls with no separating digit
#   - digit letter(s) digit, such as 9A4 or 3DA0
#   - a letter+digit entity, such as V3 or C6
#   - one or two letters and a digit
CALLSIGN_REGEXP = re.compile(
    r"^([A-Z0-9]+/)?"
    r"(5U[A-Z]*|[0-9][A-Z]{1,2}[0-9]|[ACDEHJLOPQSTUVXYZ][0-9]|[A-Z]{1,2}[0-9])"
    r"([A-Z0-9]+)"
    r"(/[A-Z0-9/]+)?$"
)

SSID_REGEXP = re.compile(r"-([A-Z0-9-]+)$")

CALLSIGN_INFO_KEYS = (
    "call",
    "baseCall",
    "prefix",
    "extendedPrefix",
    "ituPrefix",
    "digit",
    "preindicator",
    "postindicators",
    "prefixOverride",
    "indicators",
    "ssid",
)


def normalize_callsign(callsign: str) -> str:
    """Trim and uppercase a raw callsign."""
    return callsign.strip().upper()


def split_ssid(callsign: str) -> Tuple[str, Optional[str]]:
    """Split a trailing ``-SSID`` off a normalized callsign."""
    m = SSID_REGEXP.search(callsign)
    if not m:
        return callsign, None
    return callsign[: m.start()], m.group(1)


class CallsignParser:
    """Parse callsigns against a given entity table."""

    def __init__(self, entities: EntityTable) -> None:
        self.entities = entities
        self.resolver = PrefixResolver(entities)
        self.classifier = IndicatorClassifier(entities, self.resolver)

    def resolve_prefix(self, token: Optional[str], info: Optional[ParsedCallsign] = None) -> ParsedCallsign:
        """Resolve a lone prefix or callsign fragment such as ``YV5`` or ``KH6``."""
        return self.resolver.resolve(token, info)

    def _initial_state(self, base_call: str, preindicator: Optional[str]) -> PrefixState:
        # A pre-indicator that does not resolve (``10/N0CALL``) is ignored
        # as a prefix source.
        if preindicator:
            prefix_parts = self.resolver.match(preindicator)
            if prefix_parts is not None:
                return PrefixState(prefixOverride=preindicator, **prefix_parts._asdict())

        prefix_parts = self.resolver.match(base_call)
        if prefix_parts is None:
            return PrefixState()
        return PrefixState(**prefix_parts._asdict())

    def parse(self, callsign: Optional[str], info: Optional[ParsedCallsign] = None) -> ParsedCallsign:
        """Parse ``callsign`` into ``info`` (a new record by default).

        A string that does not look like a callsign leaves ``info`` as it
        was; with no ``info`` that means an empty record.
        """
        if info is None:
            info = ParsedCallsign()
        if not callsign or not callsign.strip():
            return info

        call, ssid = split_ssid(normalize_callsign(callsign))

        parts = CALLSIGN_REGEXP.match(call)
        if not parts:
            log_debug("callsign_unparsed", callsign=call)
            return info

        pre, core, rest, post = parts.groups()
        preindicator = pre[:-1] if pre else None
        postindicators = [p for p in post[1:].split("/") if p] if post else []
        base_call = core + rest

        info.call = call
        info.ssid = ssid

        if preindicator and self.entities.contains(base_call):
            # An entity prefix written where the operator call belongs, as in
            # ``AA7V/VP2V``; it is handled as a post-indicator instead.
            info.baseCall = preindicator
            info.preindicator = None
            postindicators.append(base_call)
            state = PrefixState()
        else:
            info.baseCall = base_call
            info.preindicator = preindicator
            state = self._initial_state(base_call, preindicator)

        state = reduce(
            lambda acc, token: self.classifier.classify(token, acc), postindicators, state
        )

        info.apply_state(state)
        info.postindicators = postindicators or None

        log_debug("callsign_parsed", callsign=call, record=info.model_dump(exclude_none=True))
        return info


def merge_callsign_info(
    destination: Union[ParsedCallsign, Dict[str, Any]],
    fresh: ParsedCallsign,
) -> Union[ParsedCallsign, Dict[str, Any]]:
    """Merge a fresh parse into a long-lived record.

    Fields that ``fresh`` has are copied over, and fields it does not have
    are removed from ``destination``, so nothing from an earlier, more
    specific parse is left behind.  ``destination`` may be a
    :class:`ParsedCallsign` or a plain dict; keys that are not callsign
    fields are left alone.
    """
    for key in CALLSIGN_INFO_KEYS:
        value = getattr(fresh, key)
        if isinstance(value, list):
            value = list(value)

        if isinstance(destination, dict):
            if value is not None:
                destination[key] = value
            else:
                destination.pop(key, None)
        else:
            setattr(destination, key, value)

    return destination


# Default parser, built on the process-wide entity table
_parser: Optional[CallsignParser] = None


def get_callsign_parser() -> CallsignParser:
    """Get the singleton parser instance."""
    global _parser
    if _parser is None:
        _parser = CallsignParser(get_entity_table())
    return _parser


def parse_callsign(callsign: Optional[str], info: Optional[ParsedCallsign] = None) -> ParsedCallsign:
    """Parse a callsign with the default entity table."""
    return get_callsign_parser().parse(callsign, info)


def resolve_prefix(token: Optional[str], info: Optional[ParsedCallsign] = None) -> ParsedCallsign:
    """Resolve a lone prefix with the default entity table."""
    return get_callsign_parser().resolve_prefix(token, info)


def classify_indicator(token: str, state: PrefixState) -> PrefixState:
    """Apply one post-indicator to ``state`` with the default entity table."""
    return get_callsign_parser().classifier.classify(token, state)
