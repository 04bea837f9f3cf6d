"""Artifact-related exceptions: missing files, malformed content, failed joins."""

from pathlib import Path
from typing import Union

from .base import DiscopopResultsError


class ArtifactError(DiscopopResultsError):
    """Base class for errors raised while reading an analysis artifact."""

    pass


class ArtifactMissingError(ArtifactError):
    """Raised when an artifact file does not exist or cannot be located."""

    def __init__(self, path: Union[Path, str], reason: str):
        super().__init__(
            f"{Path(path).name} does not exist",
            details={"path": str(path), "reason": reason},
        )
        self.path = Path(path)
        self.reason = reason


class ArtifactParseError(ArtifactError):
    """Raised when an artifact file exists but its content is malformed."""

    def __init__(self, path: Union[Path, str], reason: str):
        super().__init__(
            f"Error parsing {Path(path).name}",
            details={"path": str(path), "reason": reason},
        )
        self.path = Path(path)
        self.reason = reason


class CombineError(DiscopopResultsError):
    """Raised when joining valid raw artifacts into a combined view fails."""

    def __init__(self, category: str, reason: str):
        super().__init__(
            f"Failed to combine {category}",
            details={"category": category, "reason": reason},
        )
        self.category = category
        self.reason = reason
