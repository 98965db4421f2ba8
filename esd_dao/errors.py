"""Errors raised while querying the DAO contract."""

from typing import Optional


class DaoQueryError(Exception):
    """Base class for every error this tool raises itself."""


class ConfigError(DaoQueryError):
    """Invalid configuration (ABI file, contract address, worker count...)."""


class GatewayError(DaoQueryError):
    """A remote read or event query against the node failed."""

    def __init__(self, message: str, method: Optional[str] = None):
        super().__init__(message)
        self.method = method


class DecodeError(DaoQueryError):
    """The contract returned a status code outside the known range."""

    def __init__(self, code):
        super().__init__(f"Unknown status code: {code!r}")
        self.code = code
