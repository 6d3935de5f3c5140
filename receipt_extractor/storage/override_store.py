"""
Persistence boundary for user-correction override maps.

Both the merchant lexicon and the categorizer keep a small
`normalized merchant -> value` map that is loaded whole at construction and
re-serialized whole on every correction. Stores are injected so tests can use
the in-memory variant.
"""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from ..exceptions import OverrideStoreError
from ..utils.logging_config import logger


class OverrideStore(ABC):
    """Key-value blob holding one override map."""

    @abstractmethod
    def load(self) -> Dict[str, str]:
        """Returns the persisted map, or an empty map when nothing usable is stored."""

    @abstractmethod
    def save(self, overrides: Mapping[str, str]) -> None:
        """Replaces the persisted map with `overrides`."""


class InMemoryOverrideStore(OverrideStore):
    """Process-local store used by default and in tests."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self.save_count = 0

    def load(self) -> Dict[str, str]:
        return dict(self._data)

    def save(self, overrides: Mapping[str, str]) -> None:
        self._data = dict(overrides)
        self.save_count += 1


class JsonFileOverrideStore(OverrideStore):
    """
    Stores the override map as a single JSON object on disk.

    A missing file is an empty map. Unreadable or malformed content is logged
    and treated as an empty map so a corrupted local store never blocks
    extraction.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            with self.path.open('r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable override store {self.path}: {e}")
            return {}

        if not isinstance(data, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in data.items()
        ):
            logger.warning(f"Ignoring malformed override store {self.path}: expected a string-to-string object")
            return {}

        return data

    def save(self, overrides: Mapping[str, str]) -> None:
        payload = json.dumps(dict(overrides), ensure_ascii=False, indent=2, sort_keys=True)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    f.write(payload)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            logger.error(f"Failed to persist overrides to {self.path}: {e}")
            raise OverrideStoreError(f"Could not write override store {self.path}: {e}") from e

        logger.debug(f"Persisted {len(overrides)} overrides to {self.path}")
