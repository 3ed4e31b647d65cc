"""Exception hierarchy for zk-deposit."""

from typing import Any


class ZkDepositError(Exception):
    """Base exception for all deposit provider errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class IncorrectCredentialsError(ZkDepositError):
    """Raised when the signer rejects a transaction or is misconfigured."""

    def __init__(self, message: str = "Incorrect credentials", details: dict | None = None):
        super().__init__(message, details)


class NetworkError(ZkDepositError):
    """Raised when a query or submission fails at the transport/node layer."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint


class EncodingError(ZkDepositError):
    """Raised when call data cannot be built from a contract interface."""

    def __init__(
        self,
        message: str,
        function_name: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.function_name = function_name


class ValidationError(ZkDepositError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value
