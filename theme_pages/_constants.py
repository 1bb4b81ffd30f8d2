"""Common literal values used across theme_pages.

These constants keep sentinel values, theme file locations, and default
identifiers centralized so the composer, loader, and tests can import the
same values without drifting. Intended for internal use within the
theme_pages package.

Examples
--------
>>> from theme_pages import _constants
>>> _constants.GROUP_FILE_TEMPLATE.format(kind="header")
'header-group.json'
>>> _constants.LAYOUT_NONE
'none'
"""

LAYOUT_NONE = "none"
LAYOUT_THEME = "theme"
DEFAULT_FONT = "assistant_n4"
DEFAULT_COLOR = "#000000"
DEFAULT_TEMPLATE = "index"
ENABLED_EVERYWHERE = "*"

SECTIONS_DIR = "sections"
TEMPLATES_DIR = "templates"
CONFIG_DIR = "config"
ASSETS_DIR = "assets"
SECTION_SUFFIX = ".liquid"
GROUP_FILE_TEMPLATE = "{kind}-group.json"
SETTINGS_DATA_FILE = "settings_data.json"
SETTINGS_SCHEMA_FILE = "settings_schema.json"
