"""Errors raised by the Hub do Desenvolvedor client."""


class HubDoDevError(Exception):
    """Base error for every failed lookup."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UpstreamError(HubDoDevError):
    """The API answered without success and said why (`erro` or `message`)."""


class UnknownUpstreamError(HubDoDevError):
    """The API answered without success and without any error text."""


class TransportError(HubDoDevError):
    """No response envelope: DNS, connection, timeout or redirect failure."""
