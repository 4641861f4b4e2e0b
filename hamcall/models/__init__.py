"""Model exports."""

from .callsign import ParsedCallsign, PrefixState

__all__ = [
    "ParsedCallsign",
    "PrefixState",
]
