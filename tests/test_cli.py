"""Tests for the theme-pages command-line commands.

The Cyclopts commands are plain functions, so the tests call them directly
and decode the JSON they print with ``msgspec``.
"""

from __future__ import annotations

from pathlib import Path

import msgspec.json as msgspec_json
import pytest

from theme_pages import cli


@pytest.fixture
def project_dir(theme_root: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Write ``theme-pages.yaml`` beside the sample theme and chdir into it."""
    root = theme_root.parent
    (root / "theme-pages.yaml").write_text(
        'theme_dir: theme\nasset_url_template: "/cdn/{filename}"\n',
        encoding="utf-8",
    )
    monkeypatch.chdir(root)
    return root


def test_compose_prints_resolved_page(
    project_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.compose()
    payload = msgspec_json.decode(capsys.readouterr().out)
    assert payload["layout"] == "theme"
    ids = [section["id"] for section in payload["sections"]]
    assert ids == ["announcement", "hero", "text", "footer"], f"unexpected ids {ids}"
    assert [section["index"] for section in payload["sections"]] == [0, 1, 2, 3]
    hero = payload["sections"][1]
    assert hero["name"] == "Hero"
    assert [block["id"] for block in hero["blocks"]] == ["b1", "b2"]


def test_compose_writes_output_file(
    project_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.compose(template="product", output=Path("out/product.json"))
    assert capsys.readouterr().out.strip() == "wrote out/product.json"
    payload = msgspec_json.decode((project_dir / "out" / "product.json").read_bytes())
    assert payload["layout"] == "none"


def test_theme_dir_override_without_config(
    theme_root: Path,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    empty = tmp_path / "elsewhere"
    empty.mkdir()
    monkeypatch.chdir(empty)
    cli.compose(theme_dir=theme_root, template="product")
    payload = msgspec_json.decode(capsys.readouterr().out)
    assert [section["id"] for section in payload["sections"]] == [
        "announcement",
        "main",
        "footer",
    ]


def test_explicit_missing_config_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        cli.compose(config=tmp_path / "missing.yaml")


def test_validate_reports_issues(
    project_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.validate(json_output=True)
    issues = msgspec_json.decode(capsys.readouterr().out)
    assert issues == [
        {
            "section": "hero",
            "type": "hero",
            "region": "template",
            "setting": "padding",
            "severity": "warning",
            "message": "Value 150 is outside range [0, 100]",
        }
    ], f"unexpected issues {issues}"

    cli.validate()
    out = capsys.readouterr().out
    assert "hero (hero) warning padding" in out


def test_validate_without_issues(
    project_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.validate(template="product")
    assert capsys.readouterr().out.strip() == "3 sections, no issues"


def test_sections_lists_catalog(
    project_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.sections()
    lines = capsys.readouterr().out.splitlines()
    assert "hero\tHero\tbutton" in lines
    assert "plain\tplain\t-" in lines
    assert len(lines) == 5


def test_asset_command_processes_liquid(
    project_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.asset(project_dir / "theme" / "assets" / "theme.css.liquid")
    out = capsys.readouterr().out
    assert "url(/cdn/bg.png)" in out
    assert "color: #111111" in out
    assert ".banner { display: block; }" in out


def test_asset_command_resolves_relative_to_assets(
    project_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.asset(Path("theme.css.liquid"))
    assert "url(/cdn/bg.png)" in capsys.readouterr().out
    with pytest.raises(FileNotFoundError):
        cli.asset(Path("missing.css"))


def test_bundle_command(project_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.bundle(kind="js")
    out = capsys.readouterr().out
    assert "/* app.js */" in out
    assert "/* app.min.js */" not in out
    assert "/* vendor.min.js */" in out


def test_report_command(project_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.report()
    assert capsys.readouterr().out.strip() == "wrote public/report.html"
    assert (project_dir / "public" / "report.html").is_file()
