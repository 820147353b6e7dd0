"""Custom exceptions for nginx-server-manager."""

from __future__ import annotations


class NsmError(Exception):
    """Base exception for all nginx-server-manager operations."""

    def __init__(self, message: str, *, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class MalformedDocumentError(NsmError):
    """No http { ... } section could be located in the document."""


class UnsupportedServerTypeError(NsmError):
    """Server type is neither 'static' nor 'proxy'."""


class UnsupportedFormatError(NsmError):
    """Server config file extension has no known decoder."""


class ConfigParseError(NsmError):
    """Server config file could not be decoded."""


class FileIOError(NsmError):
    """Reading, backing up or writing a file failed."""


class NginxNotFoundError(NsmError):
    """No nginx configuration file could be auto-detected."""
