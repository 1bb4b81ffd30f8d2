"""Exception types raised by the theme composition engine."""

from __future__ import annotations


class ThemeError(Exception):
    """Base class for every error raised by theme_pages."""


class MalformedSchemaError(ThemeError, ValueError):
    """Raised when an embedded schema block exists but cannot be parsed."""


class DocumentError(ThemeError, ValueError):
    """Raised when a template or section group document is not usable."""


class MissingTemplateError(ThemeError, LookupError):
    """Raised when no template document is available to compose a page."""


class ConditionSyntaxError(ThemeError, ValueError):
    """Raised when an asset conditional cannot be parsed."""


class ProjectConfigError(ThemeError, ValueError):
    """Raised when the project configuration is invalid or incomplete."""


__all__ = [
    "ConditionSyntaxError",
    "DocumentError",
    "MalformedSchemaError",
    "MissingTemplateError",
    "ProjectConfigError",
    "ThemeError",
]
