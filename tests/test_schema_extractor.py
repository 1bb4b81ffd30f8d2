"""Unit tests for schema block extraction and comment stripping."""

from __future__ import annotations

import json
import logging
import typing as typ

import pytest

from theme_pages.errors import MalformedSchemaError
from theme_pages.schema import (
    UNSET,
    ChoiceSetting,
    DisplaySetting,
    OpaqueSetting,
    RangeSetting,
    ResourceSetting,
    extract_schema,
    load_schema,
    parse_schema_payload,
    strip_json_comments,
)

if typ.TYPE_CHECKING:
    from pathlib import Path


def _wrap(payload: object) -> str:
    return f"<div></div>\n{{% schema %}}\n{json.dumps(payload)}\n{{% endschema %}}\n"


def test_extracts_typed_settings_from_section_source(theme_root: Path) -> None:
    """The hero schema yields one typed dataclass per declared setting."""
    source = (theme_root / "sections" / "hero.liquid").read_text(encoding="utf-8")
    schema = extract_schema(source)
    assert schema is not None, "expected the hero section to carry a schema"
    assert schema.name == "Hero", f"unexpected schema name {schema.name!r}"
    kinds = [type(setting).__name__ for setting in schema.settings]
    assert kinds == [
        "TextSetting",
        "RangeSetting",
        "ColorSetting",
        "DisplaySetting",
        "ChoiceSetting",
    ], f"unexpected setting variants {kinds}"
    padding = schema.settings[1]
    assert isinstance(padding, RangeSetting)
    assert (padding.min, padding.max, padding.step) == (0, 100, 4)
    assert schema.block_types() == ["button"], "expected the button block definition"
    assert schema.max_blocks == 3, "expected max_blocks to be parsed"


def test_raw_payload_matches_parsed_payload() -> None:
    """``raw`` keeps the decoded payload and parsing is the same either way."""
    payload = {
        "name": "Gallery",
        "tag": "section",
        "class": "gallery",
        "settings": [{"type": "checkbox", "id": "autoplay", "default": True}],
        "blocks": [{"type": "image", "name": "Image", "settings": []}],
    }
    extracted = extract_schema(_wrap(payload))
    assert extracted is not None
    assert extracted.raw == payload, "raw payload should round-trip unchanged"
    assert extracted == parse_schema_payload(payload), (
        "extracting from source should equal parsing the payload directly"
    )
    assert extracted.class_name == "gallery"


def test_schema_tags_are_case_insensitive_and_allow_whitespace_control() -> None:
    source = '{%- SCHEMA -%}{"name": "Loud"}{%- EndSchema -%}'
    schema = extract_schema(source)
    assert schema is not None and schema.name == "Loud"


def test_source_without_schema_returns_none() -> None:
    assert extract_schema("<p>static</p>") is None
    assert load_schema("<p>static</p>") is None


def test_malformed_schema_is_logged_and_treated_as_absent(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """A broken schema never raises from ``extract_schema``."""
    source = '{% schema %}{"name": "Broken",}{% endschema %}'
    with caplog.at_level(logging.WARNING, logger="theme_pages.schema.extractor"):
        assert extract_schema(source, source_name="broken.liquid") is None
    assert "broken.liquid" in caplog.text, "warning should name the source"


def test_load_schema_raises_for_malformed_json() -> None:
    with pytest.raises(MalformedSchemaError, match="invalid"):
        load_schema('{% schema %}{"name": }{% endschema %}')


def test_structurally_invalid_payload_raises() -> None:
    with pytest.raises(MalformedSchemaError):
        parse_schema_payload({"name": "Bad", "settings": {"type": "text"}})
    with pytest.raises(MalformedSchemaError):
        parse_schema_payload(["not", "an", "object"])
    with pytest.raises(MalformedSchemaError):
        parse_schema_payload({"settings": [{"type": "range", "id": "x", "min": "low"}]})


@pytest.mark.parametrize(
    "body",
    [
        '{"name": "Hero", "locales": "en"}',
        '{"name": "Hero", "limit": Infinity}',
        '{"name": "Hero", "settings": [{"type": "range", "id": "x", "max": NaN}]}',
        '{"name": "Hero", "presets": [{"name": "Default", "settings": "x"}]}',
        (
            '{"name": "Hero", "presets": [{"name": "P",'
            ' "blocks": [{"type": "t", "settings": [1]}]}]}'
        ),
        '{"name": "Hero", "presets": [{"name": "P", "blocks": "t"}]}',
    ],
)
def test_wrongly_shaped_members_are_malformed(
    body: str, caplog: pytest.LogCaptureFixture
) -> None:
    """Shape errors anywhere in the payload surface as MalformedSchemaError."""
    source = f"{{% schema %}}{body}{{% endschema %}}"
    with pytest.raises(MalformedSchemaError):
        load_schema(source)
    with caplog.at_level(logging.WARNING, logger="theme_pages.schema.extractor"):
        assert extract_schema(source, source_name="hero.liquid") is None
    assert "hero.liquid" in caplog.text, "recovery should log a warning"


def test_unknown_setting_types_are_kept_opaque() -> None:
    schema = parse_schema_payload(
        {"name": "Odd", "settings": [{"type": "metaobject", "id": "ref", "label": "Ref"}]}
    )
    setting = schema.settings[0]
    assert isinstance(setting, OpaqueSetting), "unknown types map to OpaqueSetting"
    assert setting.type == "metaobject"
    assert setting.default is UNSET, "no default declared means UNSET"


def test_display_settings_never_carry_an_id() -> None:
    schema = parse_schema_payload(
        {"settings": [{"type": "paragraph", "id": "ignored", "content": "Hello"}]}
    )
    setting = schema.settings[0]
    assert isinstance(setting, DisplaySetting)
    assert setting.id is None
    assert schema.setting_ids() == []


def test_choice_options_and_restrictions_are_parsed() -> None:
    schema = parse_schema_payload(
        {
            "name": "Choice",
            "settings": [
                {
                    "type": "radio",
                    "id": "size",
                    "options": [{"value": "s", "label": "Small"}, "junk"],
                }
            ],
            "enabled_on": {"templates": ["index", "product"], "groups": "header"},
            "disabled_on": {"templates": ["password"]},
        }
    )
    size = schema.settings[0]
    assert isinstance(size, ChoiceSetting)
    assert size.option_values() == ["s"], "non-object options should be skipped"
    assert schema.enabled_on is not None
    assert schema.enabled_on.templates == ["index", "product"]
    assert schema.enabled_on.groups == ["header"]
    assert schema.disabled_on is not None and schema.disabled_on.groups is None


def test_color_scheme_settings_are_resources() -> None:
    schema = parse_schema_payload({"settings": [{"type": "color_scheme", "id": "scheme"}]})
    assert isinstance(schema.settings[0], ResourceSetting)


def test_strip_comments_preserves_urls_inside_strings() -> None:
    text = '{"url": "https://cdn.test/a.png", /* note */ "n": 1} // tail'
    assert json.loads(strip_json_comments(text)) == {
        "url": "https://cdn.test/a.png",
        "n": 1,
    }


def test_strip_comments_handles_escaped_quotes() -> None:
    text = '{"quote": "say \\"hi\\" // not a comment"}'
    assert strip_json_comments(text) == text, "escaped quotes must not end the string"


def test_strip_comments_keeps_line_breaks() -> None:
    text = '{\n  // first\n  "a": 1\n}'
    stripped = strip_json_comments(text)
    assert stripped.count("\n") == text.count("\n"), "line numbers should be preserved"
    assert json.loads(stripped) == {"a": 1}


def test_unterminated_block_comment_swallows_remainder() -> None:
    assert strip_json_comments('{"a": 1} /* open') == '{"a": 1} '
