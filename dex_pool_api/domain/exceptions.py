from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class ConfigurationError(DomainError):
    """A required endpoint or key is not configured."""


class ConnectivityError(DomainError):
    """RPC endpoint unreachable or connectivity probe failed."""


class ChainQueryError(DomainError):
    """An on-chain read call was rejected or failed."""


class TransportError(DomainError):
    """Subgraph request failed at the HTTP or GraphQL level."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class UnexpectedResponseError(DomainError):
    """Upstream payload does not have the expected shape."""


class InvalidInputError(DomainError):
    """Invalid parameters for a pool query."""
