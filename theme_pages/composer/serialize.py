"""Convert a resolved page into plain JSON-ready data."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from .models import ResolvedPage, SectionInstance


def page_to_payload(page: ResolvedPage) -> dict[str, typ.Any]:
    """Return ``page`` as nested dicts and lists.

    Section schemas are reduced to their display name so the payload stays
    small; everything else is kept verbatim.
    """
    return {
        "layout": page.layout,
        "sections": [section_to_payload(section) for section in page.sections],
    }


def section_to_payload(section: SectionInstance) -> dict[str, typ.Any]:
    """Return one section instance as nested dicts and lists."""
    return {
        "id": section.id,
        "type": section.type,
        "name": section.schema.name if section.schema is not None else None,
        "region": section.region,
        "index": section.index,
        "disabled": section.disabled,
        "settings": section.settings,
        "block_order": section.block_order,
        "blocks": [dc.asdict(block) for block in section.blocks],
    }


__all__ = ["page_to_payload", "section_to_payload"]
