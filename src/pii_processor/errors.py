"""Exceptions raised while validating and processing requests."""

from __future__ import annotations


class PiiError(Exception):
    """Base class for all pii-processor errors."""


class InvalidRequestError(PiiError):
    """The request envelope is malformed; nothing was scanned."""


class MissingFieldError(InvalidRequestError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Missing required field: {name}")
        self.name = name


class InvalidFieldTypeError(InvalidRequestError):
    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid PII field type: {value}")
        self.value = value


class InvalidPolicyError(InvalidRequestError):
    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid privacy policy: {value}")
        self.value = value


class TextTooLargeError(InvalidRequestError):
    def __init__(self, length: int, limit: int) -> None:
        super().__init__(f"Text length {length} exceeds limit of {limit}")
        self.length = length
        self.limit = limit
