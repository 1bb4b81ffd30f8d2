"""Filesystem access to theme directories.

Examples
--------
>>> from pathlib import Path
>>> from theme_pages.theme import ThemeDirectory
>>> ThemeDirectory(Path("theme")).compose("index").layout  # doctest: +SKIP
'theme'
"""

from .cache import SchemaCache
from .loader import SectionInfo, ThemeDirectory

__all__ = ["SchemaCache", "SectionInfo", "ThemeDirectory"]
