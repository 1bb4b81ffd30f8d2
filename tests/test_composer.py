"""Unit tests for page composition from template and group documents."""

from __future__ import annotations

import pytest

from theme_pages.composer import (
    SectionGroupDocument,
    SectionStub,
    TemplateDocument,
    compose_page,
    is_usable_in_group,
    is_usable_in_template,
    load_json_document,
    normalize_layout,
    page_to_payload,
    parse_section_group,
    parse_template_document,
)
from theme_pages.errors import DocumentError, MissingTemplateError
from theme_pages.schema import SectionSchema, parse_schema_payload

HERO = parse_schema_payload(
    {
        "name": "Hero",
        "settings": [
            {"type": "text", "id": "heading", "default": "Welcome"},
            {"type": "range", "id": "padding", "min": 0, "max": 100, "default": 40},
            {"type": "product_list", "id": "products"},
        ],
        "blocks": [
            {
                "type": "button",
                "settings": [
                    {"type": "url", "id": "link"},
                    {"type": "checkbox", "id": "outline", "default": True},
                ],
            }
        ],
    }
)
SCHEMAS: dict[str, SectionSchema] = {"hero": HERO}


def _lookup(section_type: str) -> SectionSchema | None:
    return SCHEMAS.get(section_type)


def _group(kind: str, *types: str) -> SectionGroupDocument:
    return parse_section_group(
        {
            "type": kind,
            "sections": {f"{kind}-{n}": {"type": t} for n, t in enumerate(types)},
            "order": [f"{kind}-{n}" for n in range(len(types))],
        }
    )


def test_dangling_order_entries_are_skipped() -> None:
    template = parse_template_document(
        {"sections": {"a": {"type": "hero"}}, "order": ["a", "b"]}
    )
    page = compose_page(template, None, None, _lookup)
    assert [section.id for section in page.sections] == ["a"], (
        "dangling id 'b' should be skipped without error"
    )


def test_indexes_are_contiguous_across_regions() -> None:
    template = parse_template_document(
        {
            "sections": {"main": {"type": "hero"}, "extra": {"type": "hero"}},
            "order": ["main", "missing", "extra"],
        }
    )
    page = compose_page(template, _group("header", "bar"), _group("footer", "foot"), _lookup)
    assert [(s.region, s.index) for s in page.sections] == [
        ("header", 0),
        ("template", 1),
        ("template", 2),
        ("footer", 3),
    ], "indexes should run 0..n-1 in header, template, footer order"
    assert [s.id for s in page.header_sections] == ["header-0"]
    assert [s.id for s in page.footer_sections] == ["footer-0"]


def test_overrides_merge_over_schema_defaults() -> None:
    template = parse_template_document(
        {
            "sections": {
                "hero": {
                    "type": "hero",
                    "settings": {"padding": 80, "custom": "kept"},
                    "blocks": {
                        "b1": {"type": "button", "settings": {"link": "/sale"}},
                        "b2": {"type": "badge", "settings": {"text": "New"}},
                    },
                    "block_order": ["b2", "gone", "b1"],
                }
            }
        }
    )
    section = compose_page(template, None, None, _lookup).get_section("hero")
    assert section.settings == {
        "heading": "Welcome",
        "padding": 80,
        "products": [],
        "custom": "kept",
    }, "undeclared override keys should be carried through"
    assert [block.id for block in section.blocks] == ["b2", "b1"], (
        "blocks follow block_order and drop dangling ids"
    )
    assert section.blocks[1].settings == {"link": "/sale", "outline": True}
    assert section.blocks[0].settings == {"text": "New"}, (
        "undeclared block types keep only their authored settings"
    )
    assert section.block_order == ["b2", "gone", "b1"], "block_order is kept verbatim"


def test_sections_without_schema_keep_authored_settings() -> None:
    template = parse_template_document(
        {"sections": {"x": {"type": "custom-liquid", "settings": {"code": "<b>"}}}}
    )
    section = compose_page(template, None, None, _lookup).sections[0]
    assert section.schema is None
    assert section.settings == {"code": "<b>"}


def test_composition_does_not_alias_inputs() -> None:
    template = parse_template_document(
        {"sections": {"a": {"type": "hero", "settings": {"products": ["p1"]}}}}
    )
    page = compose_page(template, None, None, _lookup)
    page.sections[0].settings["products"].append("p2")
    assert template.sections["a"].settings["products"] == ["p1"], (
        "resolved settings must be independent of the template document"
    )


def test_missing_template_raises() -> None:
    with pytest.raises(MissingTemplateError):
        compose_page(None, None, None, _lookup)


def test_disabled_flags_are_preserved() -> None:
    template = TemplateDocument(
        sections={"a": SectionStub(type="hero", disabled=True)}, order=["a"]
    )
    assert compose_page(template, None, None, _lookup).sections[0].disabled is True


@pytest.mark.parametrize(
    ("layout", "expected"),
    [(False, "none"), (None, "theme"), ("custom", "custom")],
)
def test_layout_normalization(layout: object, expected: str) -> None:
    template = parse_template_document({"layout": layout, "sections": {}})
    assert compose_page(template, None, None, _lookup).layout == expected
    assert normalize_layout(template.layout) == expected


def test_order_defaults_to_section_keys() -> None:
    template = parse_template_document(
        {"sections": {"b": {"type": "hero"}, "a": {"type": "hero"}}}
    )
    assert template.order == ["b", "a"]


def test_document_parsing_rejects_non_objects() -> None:
    with pytest.raises(DocumentError):
        parse_template_document(["not", "a", "template"])
    with pytest.raises(DocumentError):
        parse_template_document({"sections": [], "order": []})
    with pytest.raises(DocumentError):
        parse_section_group({"type": "sidebar", "sections": {}})
    with pytest.raises(DocumentError):
        load_json_document("{oops", source_name="templates/index.json")


@pytest.mark.parametrize(
    "stub",
    [
        {"type": "hero", "settings": "oops"},
        {"type": "hero", "settings": ["a", "b"]},
        {"type": "hero", "block_order": "abc"},
        {"type": "hero", "disabled": "false"},
        {"type": "hero", "blocks": {"b1": {"type": "text", "settings": "oops"}}},
        {"type": "hero", "blocks": {"b1": {"type": "text", "disabled": 1}}},
    ],
)
def test_wrongly_typed_stub_members_raise_document_errors(
    stub: dict[str, object],
) -> None:
    with pytest.raises(DocumentError):
        parse_template_document({"sections": {"a": stub}, "order": ["a"]})


def test_stub_flags_accept_json_booleans() -> None:
    document = parse_template_document(
        {
            "sections": {
                "a": {
                    "type": "hero",
                    "disabled": True,
                    "blocks": {"b1": {"type": "text", "disabled": False}},
                    "block_order": ["b1"],
                }
            }
        }
    )
    stub = document.sections["a"]
    assert stub.disabled is True
    assert stub.blocks["b1"].disabled is False
    assert stub.block_order == ["b1"]


def test_group_kind_falls_back_to_argument() -> None:
    group = parse_section_group({"sections": {}}, kind="aside")
    assert group.kind == "aside"


def test_json_documents_may_carry_comments() -> None:
    payload = load_json_document('{/* hi */ "sections": {}, "order": []} // end')
    assert parse_template_document(payload).order == []


def test_template_and_group_restrictions() -> None:
    schema = parse_schema_payload(
        {
            "enabled_on": {"templates": ["*"], "groups": ["footer"]},
            "disabled_on": {"templates": ["password"]},
        }
    )
    assert is_usable_in_template(schema, "product")
    assert not is_usable_in_template(schema, "password"), "disabled_on wins"
    assert is_usable_in_group(schema, "footer")
    assert not is_usable_in_group(schema, "header")
    assert is_usable_in_template(parse_schema_payload({}), "anything"), (
        "unrestricted sections are usable everywhere"
    )


def test_page_payload_is_json_ready() -> None:
    template = parse_template_document({"sections": {"a": {"type": "hero"}}})
    payload = page_to_payload(compose_page(template, None, None, _lookup))
    assert payload["layout"] == "theme"
    assert payload["sections"][0]["name"] == "Hero"
    assert payload["sections"][0]["region"] == "template"
