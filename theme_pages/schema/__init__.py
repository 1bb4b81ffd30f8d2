"""Parse section schemas, compute their defaults, and validate settings.

This subpackage is the schema half of the composition engine. It extracts the
JSON document embedded in a section's ``{% schema %}`` block, converts it into
a closed family of typed setting dataclasses, derives type-directed default
values, and checks resolved values against declared constraints. Every
function here is pure and operates on in-memory text or structures.

Examples
--------
>>> from theme_pages.schema import compute_defaults, extract_schema
>>> source = '''{% schema %}
... {"name": "Hero", "settings": [{"type": "checkbox", "id": "show"}]}
... {% endschema %}'''
>>> compute_defaults(extract_schema(source).settings)
{'show': False}
"""

from .comments import strip_json_comments
from .defaults import (
    compute_block_defaults,
    compute_defaults,
    theme_settings_defaults,
    type_default,
)
from .extractor import (
    extract_schema,
    find_schema_block,
    load_schema,
    parse_schema_payload,
    parse_setting,
    parse_settings,
)
from .models import (
    UNSET,
    BlockDefinition,
    BooleanSetting,
    ChoiceOption,
    ChoiceSetting,
    ColorSetting,
    DisplaySetting,
    FontSetting,
    NumberSetting,
    OpaqueSetting,
    PresetBlock,
    RangeSetting,
    ResourceListSetting,
    ResourceSetting,
    SectionPreset,
    SectionSchema,
    SettingDefinition,
    TemplateRestriction,
    TextSetting,
)
from .validation import ValidationIssue, validate, validate_schema, validate_section

__all__ = [
    "UNSET",
    "BlockDefinition",
    "BooleanSetting",
    "ChoiceOption",
    "ChoiceSetting",
    "ColorSetting",
    "DisplaySetting",
    "FontSetting",
    "NumberSetting",
    "OpaqueSetting",
    "PresetBlock",
    "RangeSetting",
    "ResourceListSetting",
    "ResourceSetting",
    "SectionPreset",
    "SectionSchema",
    "SettingDefinition",
    "TemplateRestriction",
    "TextSetting",
    "ValidationIssue",
    "compute_block_defaults",
    "compute_defaults",
    "extract_schema",
    "find_schema_block",
    "load_schema",
    "parse_schema_payload",
    "parse_setting",
    "parse_settings",
    "strip_json_comments",
    "theme_settings_defaults",
    "type_default",
    "validate",
    "validate_schema",
    "validate_section",
]
