from __future__ import annotations


class CodeSymphonyError(Exception):
    """Base error for the codesymphony library."""


class InvalidEigenvalueError(CodeSymphonyError):
    """Raised when a spectrum contains a negative or non-finite eigenvalue."""


class InvalidFrequencyError(CodeSymphonyError):
    """Raised when a frequency cannot be placed on the pitch grid."""


class InvalidConfigError(CodeSymphonyError):
    """Raised when a harmony config cannot be parsed or validated."""


class PlaybackError(CodeSymphonyError):
    """Raised when no audio playback backend is available."""
