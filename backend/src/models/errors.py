"""
Error taxonomy for chart normalization and download.

Every error carries a ``kind`` and an ``invalid_params`` flag. The protocol
surfaces use the flag to choose between an invalid-parameters signal
(HTTP 400 / ``Invalid parameters:`` tool error) and an internal-error signal.
"""
from typing import Iterable, Optional


class ChartError(Exception):
    """Base class for all chart errors"""

    kind: str = "ChartError"
    invalid_params: bool = True

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class MissingInput(ChartError):
    kind = "MissingInput"

    def __init__(self, message: str = "No arguments provided for chart configuration"):
        super().__init__(message)


class MissingField(ChartError):
    kind = "MissingField"

    def __init__(self, name: str, message: Optional[str] = None):
        self.name = name
        super().__init__(message or f"Chart {name} is required")


class InvalidField(ChartError):
    kind = "InvalidField"

    def __init__(self, name: str, message: Optional[str] = None):
        self.name = name
        super().__init__(message or f"Invalid value for {name}")


class InvalidEnum(ChartError):
    kind = "InvalidEnum"

    def __init__(self, name: str, allowed: Iterable[str]):
        self.name = name
        self.allowed = list(allowed)
        super().__init__(f"Invalid chart {name}. Must be one of: {', '.join(self.allowed)}")


class InvalidConfig(ChartError):
    kind = "InvalidConfig"


class UnwritableDirectory(ChartError):
    kind = "UnwritableDirectory"

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Output directory does not exist or is not writable: {path}")


class WritePermissionDenied(ChartError):
    kind = "WritePermissionDenied"

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Cannot write to {path}: Permission denied")


class DirectoryNotFound(ChartError):
    kind = "DirectoryNotFound"

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Cannot write to {path}: Directory does not exist")


class TransferFailure(ChartError):
    kind = "TransferFailure"
    invalid_params = False


class InternalError(ChartError):
    kind = "InternalError"
    invalid_params = False


__all__ = [
    "ChartError",
    "MissingInput",
    "MissingField",
    "InvalidField",
    "InvalidEnum",
    "InvalidConfig",
    "UnwritableDirectory",
    "WritePermissionDenied",
    "DirectoryNotFound",
    "TransferFailure",
    "InternalError",
]
