"""Typed dataclasses describing section schemas and their settings.

Setting definitions form a closed tagged union: each declared setting type
maps onto exactly one variant below, so default computation and validation
can ``match`` on the variant instead of branching on type strings.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ


class _Unset:
    """Marker for a setting that declares no ``default`` key at all."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "UNSET"


UNSET: typ.Final = _Unset()


@dc.dataclass(slots=True, kw_only=True)
class _SettingBase:
    """Fields shared by every setting variant."""

    type: str
    id: str | None = None
    label: str = ""
    info: str | None = None
    default: typ.Any = UNSET

    @property
    def has_default(self) -> bool:
        """Return True when the schema declared a ``default`` (even ``null``)."""
        return self.default is not UNSET


@dc.dataclass(slots=True, kw_only=True)
class BooleanSetting(_SettingBase):
    """A ``checkbox`` setting."""


@dc.dataclass(slots=True, kw_only=True)
class NumberSetting(_SettingBase):
    """A free-form ``number`` setting."""

    placeholder: float | None = None


@dc.dataclass(slots=True, kw_only=True)
class RangeSetting(_SettingBase):
    """A bounded numeric ``range`` setting."""

    min: float | None = None
    max: float | None = None
    step: float | None = None
    unit: str | None = None


@dc.dataclass(slots=True, kw_only=True)
class TextSetting(_SettingBase):
    """Text-like settings: plain text, rich text, HTML, liquid, and URLs."""

    placeholder: str | None = None


@dc.dataclass(slots=True)
class ChoiceOption:
    """One selectable option of a ``select`` or ``radio`` setting."""

    value: typ.Any
    label: str = ""
    group: str | None = None


@dc.dataclass(slots=True, kw_only=True)
class ChoiceSetting(_SettingBase):
    """An enumerated ``select`` or ``radio`` setting."""

    options: list[ChoiceOption] = dc.field(default_factory=list)

    def option_values(self) -> list[typ.Any]:
        """Return the declared option values in order."""
        return [option.value for option in self.options]


@dc.dataclass(slots=True, kw_only=True)
class ColorSetting(_SettingBase):
    """A ``color`` or ``color_background`` setting."""


@dc.dataclass(slots=True, kw_only=True)
class FontSetting(_SettingBase):
    """A ``font_picker`` setting."""


@dc.dataclass(slots=True, kw_only=True)
class ResourceSetting(_SettingBase):
    """A reference to a store resource or media item (image, product, ...)."""


@dc.dataclass(slots=True, kw_only=True)
class ResourceListSetting(_SettingBase):
    """A list of store resources (``product_list``, ``collection_list``)."""

    limit: int | None = None


@dc.dataclass(slots=True, kw_only=True)
class DisplaySetting(_SettingBase):
    """Sidebar-only ``header`` or ``paragraph`` entries; they hold no value."""

    content: str = ""


@dc.dataclass(slots=True, kw_only=True)
class OpaqueSetting(_SettingBase):
    """A setting whose declared type this engine does not model."""


SettingDefinition = (
    BooleanSetting
    | NumberSetting
    | RangeSetting
    | TextSetting
    | ChoiceSetting
    | ColorSetting
    | FontSetting
    | ResourceSetting
    | ResourceListSetting
    | DisplaySetting
    | OpaqueSetting
)


@dc.dataclass(slots=True)
class BlockDefinition:
    """A repeatable content unit declared by a section schema."""

    type: str
    name: str = ""
    limit: int | None = None
    settings: list[SettingDefinition] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class PresetBlock:
    """A block entry inside a section preset."""

    type: str
    settings: dict[str, typ.Any] = dc.field(default_factory=dict)


@dc.dataclass(slots=True)
class SectionPreset:
    """A starter configuration offered when a section is added."""

    name: str
    settings: dict[str, typ.Any] = dc.field(default_factory=dict)
    blocks: list[PresetBlock] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class TemplateRestriction:
    """Template and group names listed by ``enabled_on`` / ``disabled_on``."""

    templates: list[str] | None = None
    groups: list[str] | None = None


@dc.dataclass(slots=True)
class SectionSchema:
    """A parsed ``{% schema %}`` block.

    Attributes
    ----------
    name : str
        Human-friendly section name shown in the editor.
    settings : list[SettingDefinition]
        Section-level settings in declaration order.
    blocks : list[BlockDefinition]
        Block types the section accepts, in declaration order.
    presets : list[SectionPreset]
        Starter presets offered when adding the section.
    tag, class_name : str | None
        Wrapper element tag and CSS class.
    limit, max_blocks : int | None
        Per-page section limit and total block limit.
    enabled_on, disabled_on : TemplateRestriction | None
        Where the section may (or may not) be used.
    locales : dict
        Schema translation strings, kept verbatim.
    raw : dict
        The decoded JSON payload the schema was built from.
    """

    name: str
    settings: list[SettingDefinition] = dc.field(default_factory=list)
    blocks: list[BlockDefinition] = dc.field(default_factory=list)
    presets: list[SectionPreset] = dc.field(default_factory=list)
    tag: str | None = None
    class_name: str | None = None
    limit: int | None = None
    max_blocks: int | None = None
    enabled_on: TemplateRestriction | None = None
    disabled_on: TemplateRestriction | None = None
    locales: dict[str, typ.Any] = dc.field(default_factory=dict)
    raw: dict[str, typ.Any] = dc.field(default_factory=dict)

    def setting_ids(self) -> list[str]:
        """Return the ids of every value-holding setting in order."""
        return [setting.id for setting in self.settings if setting.id]

    def block_types(self) -> list[str]:
        """Return the declared block types in order."""
        return [block.type for block in self.blocks]

    def find_block(self, block_type: str) -> BlockDefinition | None:
        """Return the first block definition declaring ``block_type``."""
        return next((b for b in self.blocks if b.type == block_type), None)


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
]
