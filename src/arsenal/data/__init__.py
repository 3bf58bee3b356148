"""Data layer utilities for loading RON definitions."""

from .errors import (
    DataLoadError,
    DataValidationError,
    DuplicateIdentifierError,
    RonSyntaxError,
    WeaponNotFoundError,
)
from .paths import get_definitions_path, get_repo_root

__all__ = [
    "DataLoadError",
    "DataValidationError",
    "DuplicateIdentifierError",
    "RonSyntaxError",
    "WeaponNotFoundError",
    "get_definitions_path",
    "get_repo_root",
]
