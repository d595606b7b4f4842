# rx_companion/core/errors.py
"""
Errors raised by the prescription scanning pipeline.

Every failure the pipeline knows how to show the user is a PrescriptionError.
`retryable` tells the UI whether a "try again" button makes sense without
picking a new photo.
"""
from typing import Optional


class PrescriptionError(RuntimeError):
    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(PrescriptionError):
    """The selected file cannot be used as a prescription photo."""

    NOT_AN_IMAGE = "not_an_image"
    EMPTY_IMAGE = "empty_image"

    def __init__(self, kind: str, message: Optional[str] = None):
        super().__init__(message or f"Invalid input: {kind}")
        self.kind = kind


class NetworkError(PrescriptionError):
    retryable = True


class ServiceError(PrescriptionError):
    retryable = True

    def __init__(self, status: int, message: Optional[str] = None):
        super().__init__(message or f"Server error: {status}")
        self.status = status


class ParseError(PrescriptionError):
    retryable = True
