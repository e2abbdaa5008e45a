"""Exceptions raised by the game core."""


class MilleBornesError(Exception):
    """Base class for game errors."""


class ProtocolViolation(MilleBornesError):
    """A mutating operation was called in the wrong phase or state.

    Only raised when ``rules.strict_protocol`` is enabled; otherwise the
    call is logged and ignored.
    """


class StrategyFault(MilleBornesError):
    """The automated opponent's decision step failed."""
