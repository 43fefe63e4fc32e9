"""Errors raised by the identity module."""

from __future__ import annotations


class IdentityError(Exception):
    """Base class of every error the identity module raises."""

    codespace = "identity"
    code = 1
    description = "internal error"

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.detail}: {self.description}"
        return self.description


class InvalidSignerError(IdentityError):
    """The message was not signed by the module authority."""

    code = 1100
    description = "expected gov account as only signer for proposal message"


class InvalidAddressError(IdentityError):
    """An address could not be parsed."""

    codespace = "sdk"
    code = 7
    description = "invalid address"


class InvalidRequestError(IdentityError):
    """A request was malformed or not allowed."""

    codespace = "sdk"
    code = 18
    description = "invalid request"


class _StatusError(IdentityError):
    status_code = "Unknown"
    default_detail = ""

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(self.default_detail if detail is None else detail)

    def __str__(self) -> str:
        return f"rpc error: code = {self.status_code} desc = {self.detail}"


class NotFoundError(_StatusError):
    """A query asked for something that does not exist."""

    status_code = "NotFound"
    default_detail = "not found"


class InvalidArgumentError(_StatusError):
    """A query was called without a valid request."""

    status_code = "InvalidArgument"
    default_detail = "invalid request"


class InternalError(_StatusError):
    """A query failed while reading the store."""

    status_code = "Internal"