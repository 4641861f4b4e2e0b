"""Post-indicator classification.

Each token after the base call (``N0CALL/1/QRP/P``) is checked in this
order, and the first class that matches decides its effect:

1. Digits only (``/1``): replaces the separating digit of the current prefix.
2. Well-known operating indicators (``/P``, ``/QRP``, ``/MM``, ...): recorded
   in ``indicators``.  ``AA``, ``AG``, ``AE`` and ``KT`` are the FCC license
   class indicators of 47 CFR 97.119.
3. Prefixes that are conventionally used after the call: US and Canadian
   areas and reciprocal operation (``/KH6``, ``/KL``, ``/VE5``, ``/CY``),
   Peru (``/OA``) and Bermuda (``/VP9``).  These replace the prefix.
4. Anything else replaces the prefix only if it is a known entity, or if the
   entity letters it resolves to are (``/YV7`` is accepted because ``YV``
   is an entity, ``/NA3`` is not).  Otherwise the token has no effect.
"""

from __future__ import annotations

import re
from typing import Optional

from hamcall.adapters.entities import EntityTable
from hamcall.adapters.prefix import PrefixMatch, PrefixResolver
from hamcall.models import PrefixState


DIGITS_REGEXP = re.compile(r"^[0-9]+$")

SUFFIXED_COUNTRY_REGEXP = re.compile(r"^([AKNW][LHPG]|K|W|V[AEYO]|CY|O[ABC]|VP9)[0-9]*$")

KNOWN_INDICATORS = frozenset(["QRP", "P", "M", "AM", "MM", "AA", "AG", "AE", "KT", "R"])


def _override(state: PrefixState, token: str, parts: PrefixMatch) -> PrefixState:
    return state.model_copy(
        update={
            "ituPrefix": parts.ituPrefix,
            "digit": parts.digit,
            "prefix": parts.prefix,
            "extendedPrefix": parts.extendedPrefix,
            "prefixOverride": token,
        }
    )


class IndicatorClassifier:
    """Fold post-indicators into a :class:`PrefixState`."""

    def __init__(self, entities: EntityTable, resolver: Optional[PrefixResolver] = None) -> None:
        self.entities = entities
        self.resolver = resolver or PrefixResolver(entities)

    def classify(self, token: str, state: PrefixState) -> PrefixState:
        """Return the state that results from applying ``token`` to ``state``.

        ``state`` itself is left unchanged.
        """
        if DIGITS_REGEXP.match(token):
            if state.ituPrefix is None:
                return state
            return state.model_copy(
                update={
                    "digit": token,
                    "prefix": state.ituPrefix + token,
                    "extendedPrefix": None,
                }
            )

        if token in KNOWN_INDICATORS:
            return state.model_copy(
                update={"indicators": [*(state.indicators or []), token]}
            )

        if SUFFIXED_COUNTRY_REGEXP.match(token):
            parts = self.resolver.match(token)
            if parts is not None:
                return _override(state, token, parts)
            return state

        parts = self.resolver.match(token)
        if parts is None:
            return state
        if self.entities.contains(token) or self.entities.contains(parts.ituPrefix):
            return _override(state, token, parts)
        return state
