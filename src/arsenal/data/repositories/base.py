"""Base repository implementation for RON definition data."""
from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Generic, Mapping, TypeVar

from arsenal.data import paths
from arsenal.data.errors import DataError, DataValidationError, WeaponNotFoundError
from arsenal.data.ron_loader import RonMap, RonStruct, load_ron, parse_ron

T = TypeVar("T")

logger = logging.getLogger(__name__)


class RepositoryBase(Generic[T]):
    """Common caching and loading behavior for repositories.

    Definitions are loaded lazily on first access. A load either succeeds as a
    whole or raises, leaving the repository unloaded.
    """

    def __init__(self, filename: str, base_path: Path | str | None = None) -> None:
        self._filename = filename
        self._base_path = Path(base_path) if base_path is not None else None
        self._source_text: str | None = None
        self._definitions: Mapping[str, T] | None = None

    @classmethod
    def from_text(cls, text: str):
        """Return a repository that loads from ``text`` instead of a file."""
        repo = cls()
        repo._source_text = text
        return repo

    @classmethod
    def from_file(cls, path: Path | str):
        """Return a repository that loads from an explicit file path."""
        path = Path(path)
        repo = cls(base_path=path.parent)
        repo._filename = path.name
        return repo

    @property
    def file_path(self) -> Path:
        """Return the definition file this repository reads."""
        definitions_dir = paths.get_definitions_path(self._base_path)
        return definitions_dir / self._filename

    def _load_raw(self) -> RonMap:
        if self._source_text is not None:
            source = "<string>"
            raw = parse_ron(self._source_text, source)
        else:
            file_path = self.file_path
            source = str(file_path)
            raw = load_ron(file_path)
        # The table may be wrapped in a struct: ``(map: { ... })``.
        if isinstance(raw, RonStruct) and set(raw.fields) == {"map"}:
            raw = raw.fields["map"]
        if not isinstance(raw, RonMap):
            raise DataValidationError(f"Expected top-level map in {source}")
        return raw

    def _build(self, raw: RonMap) -> dict[str, T]:
        """Convert a raw map into typed definitions."""
        raise NotImplementedError

    def _ensure_loaded(self) -> Mapping[str, T]:
        if self._definitions is None:
            try:
                definitions = self._build(self._load_raw())
            except DataError as exc:
                logger.warning("Failed to load %s: %s", self._describe_source(), exc)
                raise
            logger.info("Loaded %d definitions from %s", len(definitions), self._describe_source())
            self._definitions = MappingProxyType(definitions)
        return self._definitions

    def _describe_source(self) -> str:
        if self._source_text is not None:
            return "<string>"
        return str(self.file_path)

    def load(self) -> Mapping[str, T]:
        """Load eagerly and return a read-only view of all definitions."""
        return self._ensure_loaded()

    def get(self, def_id: str) -> T:
        """Return a definition by id."""
        definitions = self._ensure_loaded()
        try:
            return definitions[def_id]
        except KeyError as exc:
            raise WeaponNotFoundError(def_id) from exc

    def all(self) -> list[T]:
        """Return all definitions sorted deterministically by id."""
        definitions = self._ensure_loaded()
        return [definitions[key] for key in sorted(definitions.keys())]

    def ids(self) -> list[str]:
        """Return identifiers in table order."""
        return list(self._ensure_loaded().keys())

    def __contains__(self, def_id: object) -> bool:
        return def_id in self._ensure_loaded()

    def __len__(self) -> int:
        return len(self._ensure_loaded())
