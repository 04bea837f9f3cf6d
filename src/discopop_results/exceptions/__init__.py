"""Exception hierarchy for DiscoPoP Results."""

from .artifacts import (
    ArtifactError,
    ArtifactMissingError,
    ArtifactParseError,
    CombineError,
)
from .base import DiscopopResultsError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "DiscopopResultsError",
    "ArtifactError",
    "ArtifactMissingError",
    "ArtifactParseError",
    "CombineError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
