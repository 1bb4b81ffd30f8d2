"""Compose header, template, and footer documents into one resolved page.

The composer walks the three order lists in the fixed sequence header →
template → footer. Every referenced section is resolved against its schema:
schema defaults are merged under the authored overrides, blocks are expanded
in ``block_order`` order against their block definitions, and each section is
stamped with a page-wide index from a single counter shared by all regions.

Dangling ids in an order list, blocks whose type the schema does not declare,
and sections without a schema are all tolerated; none of them stops the rest
of the page from composing.

Example
-------
>>> from theme_pages.composer import SectionStub, TemplateDocument, compose_page
>>> template = TemplateDocument(
...     sections={"main": SectionStub(type="rich-text")}, order=["main", "gone"]
... )
>>> page = compose_page(template, None, None, lambda section_type: None)
>>> [(s.id, s.index, s.region) for s in page.sections]
[('main', 0, 'template')]
>>> page.layout
'theme'
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import itertools
import logging
import typing as typ

from theme_pages._constants import ENABLED_EVERYWHERE, LAYOUT_NONE, LAYOUT_THEME
from theme_pages.errors import MissingTemplateError
from theme_pages.schema import compute_block_defaults, compute_defaults

from .models import (
    BlockInstance,
    Region,
    ResolvedPage,
    SectionGroupDocument,
    SectionInstance,
    SectionStub,
    TemplateDocument,
)

if typ.TYPE_CHECKING:
    from theme_pages.schema import SectionSchema, TemplateRestriction

log = logging.getLogger(__name__)

SchemaLookup = cabc.Callable[[str], "SectionSchema | None"]


def compose_page(
    template: TemplateDocument | None,
    header_group: SectionGroupDocument | None,
    footer_group: SectionGroupDocument | None,
    lookup_schema: SchemaLookup,
) -> ResolvedPage:
    """Compose the documents of one page into a :class:`ResolvedPage`.

    Parameters
    ----------
    template : TemplateDocument | None
        The main page template. Required.
    header_group, footer_group : SectionGroupDocument | None
        Shared header and footer groups; ``None`` behaves like an empty group.
    lookup_schema : Callable[[str], SectionSchema | None]
        Resolves a section type to its schema; may return ``None``.

    Returns
    -------
    ResolvedPage
        Header, template, then footer sections with contiguous indexes
        starting at 0, and the normalised layout name.

    Raises
    ------
    MissingTemplateError
        If ``template`` is ``None``.
    """
    if template is None:
        msg = "A template document is required to compose a page."
        raise MissingTemplateError(msg)

    counter = itertools.count()
    sources: list[tuple[Region, cabc.Mapping[str, SectionStub], list[str]]] = [
        ("template", template.sections, template.order)
    ]
    if header_group is not None:
        sources.insert(0, ("header", header_group.sections, header_group.order))
    if footer_group is not None:
        sources.append(("footer", footer_group.sections, footer_group.order))

    sections: list[SectionInstance] = []
    for region, section_map, order in sources:
        for section_id in order:
            stub = section_map.get(section_id)
            if stub is None:
                log.debug("Skipping dangling %s section reference '%s'", region, section_id)
                continue
            sections.append(
                _resolve_section(
                    section_id,
                    stub,
                    region=region,
                    index=next(counter),
                    lookup_schema=lookup_schema,
                )
            )
    return ResolvedPage(layout=normalize_layout(template.layout), sections=sections)


def normalize_layout(layout: str | typ.Literal[False] | None) -> str:
    """Map ``False`` to ``"none"`` and an absent layout to ``"theme"``."""
    if layout is False:
        return LAYOUT_NONE
    if layout is None:
        return LAYOUT_THEME
    return layout


def is_usable_in_template(schema: SectionSchema, template_name: str) -> bool:
    """Return whether a section may be added to the named template."""
    return _is_usable(schema, template_name, "templates")


def is_usable_in_group(schema: SectionSchema, group_kind: str) -> bool:
    """Return whether a section may be added to the named section group."""
    return _is_usable(schema, group_kind, "groups")


def _is_usable(
    schema: SectionSchema, name: str, field: typ.Literal["templates", "groups"]
) -> bool:
    if schema.enabled_on is None and schema.disabled_on is None:
        return True
    disabled = _restriction_names(schema.disabled_on, field)
    if disabled is not None and name in disabled:
        return False
    enabled = _restriction_names(schema.enabled_on, field)
    if enabled is not None:
        return name in enabled or ENABLED_EVERYWHERE in enabled
    return True


def _restriction_names(
    restriction: TemplateRestriction | None, field: typ.Literal["templates", "groups"]
) -> list[str] | None:
    if restriction is None:
        return None
    return getattr(restriction, field)


def _resolve_section(
    section_id: str,
    stub: SectionStub,
    *,
    region: Region,
    index: int,
    lookup_schema: SchemaLookup,
) -> SectionInstance:
    schema = lookup_schema(stub.type)
    defaults = compute_defaults(schema.settings) if schema is not None else {}
    return SectionInstance(
        id=section_id,
        type=stub.type,
        schema=schema,
        settings={**defaults, **copy.deepcopy(stub.settings)},
        blocks=_resolve_blocks(stub, schema),
        block_order=list(stub.block_order),
        disabled=stub.disabled,
        index=index,
        region=region,
    )


def _resolve_blocks(stub: SectionStub, schema: SectionSchema | None) -> list[BlockInstance]:
    blocks: list[BlockInstance] = []
    for block_id in stub.block_order:
        block = stub.blocks.get(block_id)
        if block is None:
            log.debug("Skipping dangling block reference '%s' in '%s'", block_id, stub.type)
            continue
        definition = schema.find_block(block.type) if schema is not None else None
        if definition is None and schema is not None:
            log.debug("Section '%s' declares no block type '%s'", stub.type, block.type)
        defaults = compute_block_defaults(definition) if definition is not None else {}
        blocks.append(
            BlockInstance(
                id=block_id,
                type=block.type,
                settings={**defaults, **copy.deepcopy(block.settings)},
                disabled=block.disabled,
            )
        )
    return blocks


__all__ = [
    "SchemaLookup",
    "compose_page",
    "is_usable_in_group",
    "is_usable_in_template",
    "normalize_layout",
]
