"""Prefix resolution.

Splits the leading characters of a callsign (or of a lone prefix such as a
pre-indicator) into the entity letters, the separating digit and any extra
digits that follow it.

Prefixes are usually one or two letters, optionally preceded by a digit,
followed by the separating digit (``N0``, ``YV5``, ``9A4``).  The rules below
are tried in order and the first one that applies wins:

1. Irregular three character entities that start with a digit, such as
   ``3DA`` (Eswatini) or ``3D2`` (Fiji).  These only apply when the three
   characters are in the entity table.
2. Entities that have no separating digit of their own: ``5U`` (Niger, which
   issues calls such as ``5UAIHM``), and any letter+digit prefix such as
   ``V3``, ``D9``, ``C6`` or ``H2``.  The only single letters allocated as
   prefixes that are followed by a separating digit are B, F, G, I, K, M, N,
   R and W, so any other single letter followed by a digit is a letter+digit
   entity.
3. The general case, one optional digit and one or two letters.
"""

from __future__ import annotations

import re
from typing import Callable, List, NamedTuple, Optional

from hamcall.adapters.entities import EntityTable
from hamcall.models import ParsedCallsign


class PrefixMatch(NamedTuple):
    """Result of a successful prefix resolution."""

    ituPrefix: str
    digit: str
    prefix: str
    extendedPrefix: Optional[str] = None


class PrefixRule(NamedTuple):
    """A named pattern with an optional predicate on the entity letters.

    ``pattern`` must define three groups: entity letters, separating digit
    and extended digits (the last two may match the empty string).
    """

    name: str
    pattern: re.Pattern
    accepts: Optional[Callable[[str, EntityTable], bool]] = None


PREFIX_RULES: List[PrefixRule] = [
    PrefixRule(
        "irregular_entity",
        re.compile(r"^([0-9][A-Z][A-Z0-9])([0-9]?)([0-9]*)"),
        lambda letters, entities: entities.contains(letters),
    ),
    PrefixRule("niger", re.compile(r"^(5U)()()(?=[A-Z])")),
    PrefixRule("letter_digit_entity", re.compile(r"^([ACDEHJLOPQSTUVXYZ][0-9])([0-9]?)([0-9]*)")),
    PrefixRule("general", re.compile(r"^([0-9]?[A-Z]{1,2})([0-9]?)([0-9]*)")),
]


class PrefixResolver:
    """Resolve prefixes against an entity table."""

    def __init__(self, entities: EntityTable, rules: Optional[List[PrefixRule]] = None) -> None:
        self.entities = entities
        self.rules = PREFIX_RULES if rules is None else rules

    def match(self, token: Optional[str]) -> Optional[PrefixMatch]:
        """Return the prefix parts of ``token`` or ``None`` if no rule applies."""
        if not token:
            return None
        token = token.strip().upper()

        for rule in self.rules:
            m = rule.pattern.match(token)
            if not m:
                continue
            letters, digit, extended = m.groups()
            if rule.accepts is not None and not rule.accepts(letters, self.entities):
                continue

            # An exact entity hit is used verbatim (``KH7K``, ``VP2V``)
            if self.entities.contains(token):
                return PrefixMatch(letters, digit, token)

            prefix = letters + digit
            return PrefixMatch(
                letters, digit, prefix, prefix + extended if extended else None
            )

        return None

    def resolve(self, token: Optional[str], info: Optional[ParsedCallsign] = None) -> ParsedCallsign:
        """Fill the prefix fields of ``info`` from ``token``.

        When nothing matches, ``info`` is returned untouched.
        """
        if info is None:
            info = ParsedCallsign()

        parts = self.match(token)
        if parts is not None:
            info.ituPrefix = parts.ituPrefix
            info.digit = parts.digit
            info.prefix = parts.prefix
            info.extendedPrefix = parts.extendedPrefix
        return info
