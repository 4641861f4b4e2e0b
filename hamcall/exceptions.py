"""Exceptions raised by hamcall.

Callsign parsing itself never raises; these cover start-up problems such as
a missing entity table or an invalid setting.
"""


class HamcallError(Exception):
    """Base exception for the hamcall package."""

    pass


class EntityTableError(HamcallError):
    """Raised when the entity prefix table cannot be loaded."""

    pass


class ConfigurationError(HamcallError):
    """Raised when configuration is invalid."""

    pass
