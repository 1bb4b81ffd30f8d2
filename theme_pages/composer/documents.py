"""Build template and section group documents from decoded JSON payloads."""

from __future__ import annotations

import collections.abc as cabc
import json
import logging
import typing as typ

from theme_pages.errors import DocumentError
from theme_pages.schema.comments import strip_json_comments

from .models import BlockStub, GroupKind, SectionGroupDocument, SectionStub, TemplateDocument

log = logging.getLogger(__name__)

GROUP_KINDS: tuple[GroupKind, ...] = ("header", "footer", "aside")


def load_json_document(text: str, *, source_name: str = "document") -> typ.Any:
    """Decode JSON-with-comments text.

    Raises
    ------
    DocumentError
        If the text is not valid JSON once comments are removed.
    """
    try:
        return json.loads(strip_json_comments(text))
    except json.JSONDecodeError as exc:
        msg = f"Failed to parse {source_name}: {exc}"
        raise DocumentError(msg) from exc


def parse_template_document(payload: object) -> TemplateDocument:
    """Convert a decoded ``templates/*.json`` payload into a TemplateDocument.

    ``order`` falls back to the section map's keys when omitted. ``layout`` is
    kept as ``False`` when explicitly disabled and ``None`` when absent.
    """
    data = _require_mapping(payload, "Template")
    sections = _parse_section_map(data.get("sections"))
    layout = data.get("layout")
    if layout is not False and layout is not None:
        layout = str(layout)
    return TemplateDocument(
        sections=sections,
        order=_parse_order(data.get("order"), sections),
        layout=layout,
        wrapper=_optional_str(data.get("wrapper")),
    )


def parse_section_group(
    payload: object, *, kind: GroupKind | None = None
) -> SectionGroupDocument:
    """Convert a decoded ``sections/*-group.json`` payload.

    The group kind comes from the payload's ``type`` when it names a known
    kind, falling back to ``kind``.
    """
    data = _require_mapping(payload, "Section group")
    declared = data.get("type")
    resolved_kind = declared if declared in GROUP_KINDS else kind
    if resolved_kind is None:
        msg = f"Section group type {declared!r} is not one of {', '.join(GROUP_KINDS)}."
        raise DocumentError(msg)
    sections = _parse_section_map(data.get("sections"))
    return SectionGroupDocument(
        kind=typ.cast("GroupKind", resolved_kind),
        sections=sections,
        order=_parse_order(data.get("order"), sections),
        name=str(data.get("name") or resolved_kind),
    )


def parse_section_stub(payload: cabc.Mapping[str, typ.Any]) -> SectionStub:
    """Build a SectionStub; blocks without a ``type`` are dropped.

    Raises
    ------
    DocumentError
        If ``settings``, ``blocks``, ``block_order``, or ``disabled`` has the
        wrong JSON type.
    """
    section_type = str(payload["type"])
    where = f"section type '{section_type}'"
    blocks: dict[str, BlockStub] = {}
    raw_blocks = payload.get("blocks") or {}
    if not isinstance(raw_blocks, cabc.Mapping):
        msg = f"'blocks' of {where} must be an object."
        raise DocumentError(msg)
    for block_id, block in raw_blocks.items():
        if not isinstance(block, cabc.Mapping) or not block.get("type"):
            log.warning("Dropping block '%s' without a type", block_id)
            continue
        block_where = f"block '{block_id}' of {where}"
        blocks[str(block_id)] = BlockStub(
            type=str(block["type"]),
            settings=_settings_mapping(block.get("settings"), block_where),
            disabled=_flag(block.get("disabled"), block_where),
        )
    return SectionStub(
        type=section_type,
        settings=_settings_mapping(payload.get("settings"), where),
        blocks=blocks,
        block_order=_id_list(payload.get("block_order"), f"'block_order' of {where}"),
        disabled=_flag(payload.get("disabled"), where),
    )


def _parse_section_map(value: object) -> dict[str, SectionStub]:
    if value is None:
        return {}
    if not isinstance(value, cabc.Mapping):
        msg = "'sections' must be an object keyed by section id."
        raise DocumentError(msg)
    sections: dict[str, SectionStub] = {}
    for section_id, stub in value.items():
        if not isinstance(stub, cabc.Mapping) or not stub.get("type"):
            log.warning("Dropping section '%s' without a type", section_id)
            continue
        sections[str(section_id)] = parse_section_stub(stub)
    return sections


def _parse_order(value: object, sections: cabc.Mapping[str, SectionStub]) -> list[str]:
    if value is None:
        return list(sections)
    return _id_list(value, "'order'")


def _id_list(value: object, label: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        msg = f"{label} must be a list of ids."
        raise DocumentError(msg)
    return [str(item) for item in value]


def _settings_mapping(value: object, where: str) -> dict[str, typ.Any]:
    if value is None:
        return {}
    return dict(_require_mapping(value, f"'settings' of {where}", suffix=""))


def _flag(value: object, where: str) -> bool:
    match value:
        case None:
            return False
        case bool():
            return value
        case _:
            msg = f"'disabled' of {where} must be true or false, got {value!r}."
            raise DocumentError(msg)


def _require_mapping(
    payload: object, label: str, *, suffix: str = " document"
) -> cabc.Mapping[str, typ.Any]:
    match payload:
        case cabc.Mapping():
            return payload
        case _:
            msg = f"{label}{suffix} must be a JSON object."
            raise DocumentError(msg)


def _optional_str(value: object | None) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


__all__ = [
    "GROUP_KINDS",
    "load_json_document",
    "parse_section_group",
    "parse_section_stub",
    "parse_template_document",
]
