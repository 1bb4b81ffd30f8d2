"""Dataclasses for authored page documents and the composed page model."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from theme_pages.schema import SectionSchema

Region = typ.Literal["header", "template", "footer"]
GroupKind = typ.Literal["header", "footer", "aside"]
REGIONS: tuple[Region, ...] = ("header", "template", "footer")


@dc.dataclass(slots=True)
class BlockStub:
    """A block entry as authored inside a section stub."""

    type: str
    settings: dict[str, typ.Any] = dc.field(default_factory=dict)
    disabled: bool = False


@dc.dataclass(slots=True)
class SectionStub:
    """A section entry as authored in a template or section group document."""

    type: str
    settings: dict[str, typ.Any] = dc.field(default_factory=dict)
    blocks: dict[str, BlockStub] = dc.field(default_factory=dict)
    block_order: list[str] = dc.field(default_factory=list)
    disabled: bool = False


@dc.dataclass(slots=True)
class TemplateDocument:
    """A page template: sections keyed by id plus their render order.

    ``layout`` is ``None`` when the document omits it and ``False`` when the
    template opts out of the theme layout.
    """

    sections: dict[str, SectionStub] = dc.field(default_factory=dict)
    order: list[str] = dc.field(default_factory=list)
    layout: str | typ.Literal[False] | None = None
    wrapper: str | None = None


@dc.dataclass(slots=True)
class SectionGroupDocument:
    """Sections shared across pages in one region (header, footer, aside)."""

    kind: GroupKind
    sections: dict[str, SectionStub] = dc.field(default_factory=dict)
    order: list[str] = dc.field(default_factory=list)
    name: str = ""


@dc.dataclass(slots=True)
class BlockInstance:
    """A block with every declared setting resolved."""

    id: str
    type: str
    settings: dict[str, typ.Any]
    disabled: bool = False


@dc.dataclass(slots=True)
class SectionInstance:
    """A section with resolved settings, expanded blocks, and page position.

    Attributes
    ----------
    id : str
        Section id from the owning document.
    type : str
        Section type; names the section source file.
    schema : SectionSchema | None
        Schema the settings were resolved against, if the section has one.
    settings : dict[str, Any]
        Schema defaults overlaid with the authored overrides.
    blocks : list[BlockInstance]
        Blocks in ``block_order`` order; dangling ids are dropped.
    block_order : list[str]
        The authored block order, kept verbatim.
    disabled : bool
        Whether the author disabled the section.
    index : int
        Zero-based position across the whole page.
    region : Region
        Which document the section came from.
    """

    id: str
    type: str
    schema: SectionSchema | None
    settings: dict[str, typ.Any]
    blocks: list[BlockInstance]
    block_order: list[str]
    disabled: bool
    index: int
    region: Region


@dc.dataclass(slots=True)
class ResolvedPage:
    """The composed page: a normalised layout and the ordered sections."""

    layout: str
    sections: list[SectionInstance] = dc.field(default_factory=list)

    def in_region(self, region: Region) -> list[SectionInstance]:
        """Return the sections that came from ``region``, in page order."""
        return [section for section in self.sections if section.region == region]

    @property
    def header_sections(self) -> list[SectionInstance]:
        return self.in_region("header")

    @property
    def template_sections(self) -> list[SectionInstance]:
        return self.in_region("template")

    @property
    def footer_sections(self) -> list[SectionInstance]:
        return self.in_region("footer")

    def get_section(self, section_id: str, region: Region | None = None) -> SectionInstance:
        """Return the first section with ``section_id`` (optionally per region)."""
        for section in self.sections:
            if section.id == section_id and region in (None, section.region):
                return section
        msg = f"Unknown section '{section_id}'."
        raise KeyError(msg)


__all__ = [
    "REGIONS",
    "BlockInstance",
    "BlockStub",
    "GroupKind",
    "Region",
    "ResolvedPage",
    "SectionGroupDocument",
    "SectionInstance",
    "SectionStub",
    "TemplateDocument",
]
