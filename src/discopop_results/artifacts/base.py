"""Common behaviour of all artifact readers.

Every reader owns exactly one file inside a ``.discopop`` directory. Calling
``update()`` re-reads that file from scratch; the reader is then either valid
(and its accessor returns the parsed data) or invalid (and ``error`` says why).
Nothing is raised past ``update()``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ..config import DEFAULT_CONFIG, ResultsConfig
from ..exceptions import ArtifactError, ArtifactMissingError, ArtifactParseError

logger = logging.getLogger(__name__)

NO_DIRECTORY_ERROR = "no .discopop directory provided"


class ArtifactReader(ABC):
    """Base class for the readers of individual artifact files.

    Subclasses provide ``_locate`` (which file to read), ``_reset`` (drop the
    parsed data) and ``_parse`` (fill it from a file).
    """

    #: Human-readable artifact name used in error summaries
    name: str = "Artifact"

    def __init__(
        self, dot_discopop: Optional[str | Path] = None, config: Optional[ResultsConfig] = None
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self._dot_discopop: Optional[Path] = None
        self._path: Optional[Path] = None
        self._valid = False
        self._error: Optional[str] = NO_DIRECTORY_ERROR
        self._reset()
        if dot_discopop is not None:
            self.update(dot_discopop)

    @property
    def dot_discopop(self) -> Optional[Path]:
        """Directory the reader was last pointed at."""
        return self._dot_discopop

    @property
    def path(self) -> Optional[Path]:
        """File read on the last update, if one was found."""
        return self._path

    @property
    def error(self) -> Optional[str]:
        return self._error

    def valid(self) -> bool:
        return self._valid

    def update(self, dot_discopop: Optional[str | Path] = None) -> None:
        """Re-read the artifact, optionally from a different directory."""
        if dot_discopop is not None:
            self._dot_discopop = Path(dot_discopop)
        self._reset()
        self._path = None

        if self._dot_discopop is None:
            self._invalidate(NO_DIRECTORY_ERROR)
            return

        try:
            self._path = self._locate(self._dot_discopop)
            logger.debug("Reading %s from %s", self.name, self._path)
            self._parse(self._path)
        except ArtifactError as e:
            self._invalidate(str(e))
            return
        except (OSError, UnicodeDecodeError, ValueError, KeyError, TypeError) as e:
            # json.JSONDecodeError is a ValueError
            self._invalidate(str(ArtifactParseError(self._path or self._dot_discopop, str(e))))
            return

        self._valid = True
        self._error = None

    def _invalidate(self, error: str) -> None:
        self._reset()
        self._valid = False
        self._error = error
        logger.warning("%s invalid: %s", self.name, error)

    def _require(self, dot_discopop: Path, relative: str) -> Path:
        path = dot_discopop / relative
        if not path.is_file():
            raise ArtifactMissingError(path, f"expected in {dot_discopop}")
        return path

    @abstractmethod
    def _locate(self, dot_discopop: Path) -> Path:
        """Return the file to read or raise ArtifactMissingError."""

    @abstractmethod
    def _reset(self) -> None:
        """Drop all parsed data."""

    @abstractmethod
    def _parse(self, path: Path) -> None:
        """Parse ``path`` into the reader's data, raising on malformed input."""


def parse_file_line(value: str, path: Path) -> tuple[int, int]:
    """Split a ``"fileId:line"`` location into its two integers."""
    file_id, sep, line = str(value).partition(":")
    if not sep:
        raise ArtifactParseError(path, f"expected 'fileId:line', got {value!r}")
    try:
        return int(file_id), int(line)
    except ValueError:
        raise ArtifactParseError(path, f"expected 'fileId:line', got {value!r}") from None
