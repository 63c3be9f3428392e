"""
Custom Exceptions.

Error taxonomy for the device server client. Every error carries a stable
code so the CLI (or any other caller) can decide whether to retry, report,
or abort without parsing messages.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class ConfigError(ApplicationError):
    """Raised when the client or its signer is misconfigured."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message, code="CFG_INVALID")


class AuthError(ApplicationError):
    """Raised when a request cannot be authorized."""

    def __init__(self, message: str = "Authorization failed", code: str = "AUTH_FAILED") -> None:
        super().__init__(message, code=code)


class SigningError(AuthError):
    """Raised when a claim cannot be serialized or signed."""

    def __init__(self, message: str = "Token signing failed") -> None:
        super().__init__(message, code="AUTH_SIGNING_FAILED")


class TransportError(ApplicationError):
    """Raised on network-level failure (DNS, connection, TLS, timeout)."""

    def __init__(self, message: str = "Transport error") -> None:
        super().__init__(message, code="NET_TRANSPORT_ERROR")


class HTTPStatusError(ApplicationError):
    """Raised when the device server answers with a failure status."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        message = f"http status: {status_code}"
        if reason:
            message = f"{message} {reason}"
        super().__init__(message, code="HTTP_STATUS_ERROR")


class DecodeError(ApplicationError):
    """Raised when a response body is not the expected JSON document."""

    def __init__(self, message: str = "Malformed response body") -> None:
        super().__init__(message, code="RES_DECODE_ERROR")


class NotFoundError(ApplicationError):
    """Raised when a hypermedia relation cannot be found."""

    def __init__(self, message: str = "Relation not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class MissingRelationError(ApplicationError):
    """Raised when a relation required to carry out an operation is absent."""

    def __init__(self, relation: str) -> None:
        self.relation = relation
        super().__init__(f"missing required relation: {relation}", code="RES_MISSING_RELATION")


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")
