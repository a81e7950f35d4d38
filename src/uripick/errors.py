"""Errors raised by uripick."""


class UripickError(Exception):
    """Base class for uripick errors."""


class UnknownProtocolError(UripickError, LookupError):
    """No adapter is registered for a location's protocol."""

    def __init__(self, protocol: str | None):
        self.protocol = protocol
        super().__init__(f"Unknown protocol: {protocol}")
