"""Repository exports."""

from .weapons_repo import WeaponsRepository

__all__ = [
    "WeaponsRepository",
]
