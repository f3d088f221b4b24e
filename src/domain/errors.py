"""Errors raised to callers that break the editor's contract."""

from __future__ import annotations


class EditorError(Exception):
    """Base class for caller-contract violations."""

    code = "editor_error"


class UnsupportedFormatError(EditorError):
    """Raised when a content or export format is not recognised."""

    code = "unsupported_format"


class InvalidSettingsError(EditorError):
    """Raised when a persisted-state document cannot be read."""

    code = "invalid_settings"


class UnsupportedCommandError(EditorError):
    """Raised when a surface is asked to perform an unknown command kind."""

    code = "unsupported_command"


class UnknownPresetError(EditorError):
    """Raised when a style preset id does not exist."""

    code = "unknown_preset"


class InvalidImageError(EditorError):
    """Raised when an image source is unsafe or not an image."""

    code = "invalid_image"


class UnsupportedModeError(EditorError):
    """Raised when switching to an editor mode that does not exist."""

    code = "unsupported_mode"
