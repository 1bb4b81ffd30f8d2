"""Compose template and section group documents into a resolved page.

The composer is the centre of the engine: it takes the authored page
documents (a :class:`TemplateDocument` plus optional header and footer
:class:`SectionGroupDocument` instances), resolves every referenced section
against its schema, and returns a :class:`ResolvedPage` whose sections carry
fully populated settings, expanded blocks, and a page-wide index.

Examples
--------
>>> from theme_pages.composer import normalize_layout
>>> normalize_layout(False), normalize_layout(None), normalize_layout("custom")
('none', 'theme', 'custom')
"""

from .documents import (
    GROUP_KINDS,
    load_json_document,
    parse_section_group,
    parse_section_stub,
    parse_template_document,
)
from .models import (
    REGIONS,
    BlockInstance,
    BlockStub,
    GroupKind,
    Region,
    ResolvedPage,
    SectionGroupDocument,
    SectionInstance,
    SectionStub,
    TemplateDocument,
)
from .page import (
    SchemaLookup,
    compose_page,
    is_usable_in_group,
    is_usable_in_template,
    normalize_layout,
)
from .serialize import page_to_payload, section_to_payload

__all__ = [
    "GROUP_KINDS",
    "REGIONS",
    "BlockInstance",
    "BlockStub",
    "GroupKind",
    "Region",
    "ResolvedPage",
    "SchemaLookup",
    "SectionGroupDocument",
    "SectionInstance",
    "SectionStub",
    "TemplateDocument",
    "compose_page",
    "is_usable_in_group",
    "is_usable_in_template",
    "load_json_document",
    "normalize_layout",
    "page_to_payload",
    "parse_section_group",
    "parse_section_stub",
    "parse_template_document",
    "section_to_payload",
]
