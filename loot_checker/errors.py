"""Exceptions raised for input that cannot be reconciled."""

from __future__ import annotations


class FormatError(ValueError):
    """Input text or a field value does not have the expected format."""


class EmptyInputError(FormatError):
    """Log text has no non-blank lines."""

    def __init__(self, label: str) -> None:
        super().__init__(f"{label} file is empty")
        self.label = label


class HeaderMismatchError(FormatError):
    """First non-blank line is not the exact header of the expected log format."""

    def __init__(self, label: str, header: str) -> None:
        super().__init__(f"Invalid {label} file format")
        self.label = label
        self.header = header
