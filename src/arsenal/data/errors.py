"""Custom exceptions for data loading and validation."""
from __future__ import annotations


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """Raised when definition files are missing or unreadable."""


class RonSyntaxError(DataLoadError):
    """Raised when a definition file is not well-formed RON."""

    def __init__(self, message: str, line: int, column: int, source: str = "<string>") -> None:
        super().__init__(f"{source}:{line}:{column}: {message}")
        self.message = message
        self.line = line
        self.column = column
        self.source = source


class DataValidationError(DataError):
    """Raised when definition content fails structural validation."""

    def __init__(self, message: str, *, weapon_id: str | None = None, field: str | None = None) -> None:
        super().__init__(message)
        self.weapon_id = weapon_id
        self.field = field


class DuplicateIdentifierError(DataValidationError):
    """Raised when the same identifier is defined more than once."""

    def __init__(self, weapon_id: str) -> None:
        super().__init__(f"duplicate identifier '{weapon_id}'", weapon_id=weapon_id)


class WeaponNotFoundError(DataError, KeyError):
    """Raised when looking up an identifier the catalog does not contain."""

    def __init__(self, weapon_id: str) -> None:
        super().__init__(weapon_id)
        self.weapon_id = weapon_id

    def __str__(self) -> str:
        return f"weapon '{self.weapon_id}' not found"
