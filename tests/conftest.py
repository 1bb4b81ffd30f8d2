"""Shared fixtures that lay out a small theme directory on disk."""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path

import pytest

HERO_SOURCE = """\
<section class="hero">{{ section.settings.heading }}</section>
{% schema %}
{
  // Banner shown at the top of the home page
  "name": "Hero",
  "settings": [
    {"type": "text", "id": "heading", "default": "Welcome"},
    {"type": "range", "id": "padding", "min": 0, "max": 100, "step": 4, "default": 40},
    {"type": "color", "id": "accent"},
    {"type": "header", "content": "Layout"},
    {
      "type": "select",
      "id": "alignment",
      "options": [
        {"value": "left", "label": "Left"},
        {"value": "center", "label": "Center"}
      ],
      "default": "left"
    }
  ],
  "blocks": [
    {
      "type": "button",
      "name": "Button",
      "limit": 2,
      "settings": [
        {"type": "url", "id": "link"},
        {"type": "checkbox", "id": "outline", "default": true}
      ]
    }
  ],
  "max_blocks": 3,
  "presets": [{"name": "Hero"}]
}
{% endschema %}
"""

ANNOUNCEMENT_SOURCE = """\
<div class="announcement">{{ section.settings.message }}</div>
{% schema %}
{
  "name": "Announcement bar",
  "settings": [{"type": "text", "id": "message", "default": "Free shipping"}],
  "enabled_on": {"groups": ["header"]}
}
{% endschema %}
"""

FOOTER_SOURCE = """\
<footer>{{ section.settings.copyright }}</footer>
{% schema %}
{
  "name": "Footer",
  "settings": [
    {"type": "text", "id": "copyright"},
    {"type": "checkbox", "id": "show_payment_icons", "default": true}
  ]
}
{% endschema %}
"""

PLAIN_SOURCE = "<p>A section without a schema.</p>\n"
BROKEN_SOURCE = '{% schema %}{"name": "Broken",}{% endschema %}\n'

THEME_CSS = """\
body { color: {{ settings.text_color }}; background: url({{ 'bg.png' | asset_url }}); }
{% if settings.show_banner %}.banner { display: block; }{% else %}.banner { display: none; }{% endif %}
{% if settings.layout == 'narrow' %}.page { max-width: 40rem; }{% endif %}
"""

INDEX_TEMPLATE: dict[str, typ.Any] = {
    "sections": {
        "hero": {
            "type": "hero",
            "settings": {"padding": 150},
            "blocks": {
                "b1": {"type": "button", "settings": {"link": "/shop"}},
                "b2": {"type": "button"},
            },
            "block_order": ["b1", "b2", "missing"],
        },
        "text": {"type": "plain"},
    },
    "order": ["hero", "text", "ghost"],
}

PRODUCT_TEMPLATE: dict[str, typ.Any] = {
    "layout": False,
    "sections": {"main": {"type": "hero", "settings": {"heading": "Product"}}},
    "order": ["main"],
}

HEADER_GROUP: dict[str, typ.Any] = {
    "type": "header",
    "name": "Header group",
    "sections": {"announcement": {"type": "announcement"}},
    "order": ["announcement"],
}

FOOTER_GROUP: dict[str, typ.Any] = {
    "type": "footer",
    "name": "Footer group",
    "sections": {"footer": {"type": "footer", "settings": {"copyright": "ACME"}}},
    "order": ["footer"],
}

SETTINGS_DATA: dict[str, typ.Any] = {
    "current": {
        "accent_color": {"red": 10, "green": 20, "blue": 30},
        "show_banner": True,
        "layout": "wide",
    },
    "presets": {"Default": {"show_banner": False}},
}

SETTINGS_SCHEMA: list[dict[str, typ.Any]] = [
    {"name": "theme_info", "theme_name": "Demo"},
    {
        "name": "Colors",
        "settings": [
            {"type": "color", "id": "text_color", "default": "#111111"},
            {"type": "checkbox", "id": "show_banner"},
        ],
    },
]


def _write_json(path: Path, payload: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def build_theme(root: Path) -> Path:
    """Write the sample theme below ``root`` and return ``root``."""
    sections = root / "sections"
    sections.mkdir(parents=True)
    (sections / "hero.liquid").write_text(HERO_SOURCE, encoding="utf-8")
    (sections / "announcement.liquid").write_text(ANNOUNCEMENT_SOURCE, encoding="utf-8")
    (sections / "footer.liquid").write_text(FOOTER_SOURCE, encoding="utf-8")
    (sections / "plain.liquid").write_text(PLAIN_SOURCE, encoding="utf-8")
    (sections / "broken.liquid").write_text(BROKEN_SOURCE, encoding="utf-8")
    _write_json(sections / "header-group.json", HEADER_GROUP)
    _write_json(sections / "footer-group.json", FOOTER_GROUP)
    _write_json(root / "templates" / "index.json", INDEX_TEMPLATE)
    _write_json(root / "templates" / "product.json", PRODUCT_TEMPLATE)
    _write_json(root / "config" / "settings_data.json", SETTINGS_DATA)
    _write_json(root / "config" / "settings_schema.json", SETTINGS_SCHEMA)

    assets = root / "assets"
    assets.mkdir()
    (assets / "theme.css.liquid").write_text(THEME_CSS, encoding="utf-8")
    (assets / "base.css").write_text("html { margin: 0; }\n", encoding="utf-8")
    (assets / "component-card.css").write_text(".card { padding: 1rem; }\n", encoding="utf-8")
    (assets / "section-hero.css").write_text(".hero { min-height: 50vh; }\n", encoding="utf-8")
    (assets / "app.js").write_text("console.log('app');\n", encoding="utf-8")
    (assets / "app.min.js").write_text("console.log('app')\n", encoding="utf-8")
    (assets / "vendor.min.js").write_text("var vendor=1;\n", encoding="utf-8")
    (assets / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    return root


@pytest.fixture
def theme_root(tmp_path: Path) -> Path:
    """Return the root of a freshly written sample theme."""
    return build_theme(tmp_path / "theme")
