from __future__ import annotations


class RelayError(Exception):
    """Base error; rendered to the caller as {"error": message}."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(RelayError):
    status_code = 400


class ConfigurationError(RelayError):
    pass


class UpstreamError(RelayError):
    pass


class PersistenceError(RelayError):
    # only logged, the caller never sees it
    pass
