"""Pydantic models for parsed callsign records.

Field names use the same camelCase spelling as the JSON returned by the
HTTP API, so ``model_dump(exclude_none=True)`` is the wire format.  Every
field is optional: a field that could not be derived stays ``None``, and a
record with no fields set means "not a callsign".
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class PrefixState(BaseModel):
    """Prefix-related fields threaded through post-indicator processing."""

    ituPrefix: Optional[str] = None
    digit: Optional[str] = None  # "" means no separating digit
    prefix: Optional[str] = None
    extendedPrefix: Optional[str] = None
    prefixOverride: Optional[str] = None
    indicators: Optional[List[str]] = None

    @classmethod
    def from_record(cls, record: "ParsedCallsign") -> "PrefixState":
        """Take the prefix fields out of a parsed record."""
        return cls(
            ituPrefix=record.ituPrefix,
            digit=record.digit,
            prefix=record.prefix,
            extendedPrefix=record.extendedPrefix,
            prefixOverride=record.prefixOverride,
            indicators=list(record.indicators) if record.indicators else None,
        )


class ParsedCallsign(BaseModel):
    """Structural decomposition of an amateur radio callsign."""

    call: Optional[str] = None
    baseCall: Optional[str] = None
    prefix: Optional[str] = None
    extendedPrefix: Optional[str] = None
    ituPrefix: Optional[str] = None
    digit: Optional[str] = None
    preindicator: Optional[str] = None
    postindicators: Optional[List[str]] = None
    prefixOverride: Optional[str] = None
    indicators: Optional[List[str]] = None
    ssid: Optional[str] = None

    def apply_state(self, state: PrefixState) -> "ParsedCallsign":
        """Copy every prefix field of ``state`` onto this record."""
        for name in PrefixState.model_fields:
            setattr(self, name, getattr(state, name))
        return self

    def is_empty(self) -> bool:
        """True when no field has been derived."""
        return not self.model_dump(exclude_none=True)
