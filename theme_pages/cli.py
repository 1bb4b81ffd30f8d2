"""Cyclopts CLI entrypoint for composing and inspecting theme pages.

The ``theme-pages`` console script composes a template with its header and
footer groups, validates resolved settings, lists the theme's sections,
processes and bundles assets, and renders an HTML diagnostics report. Every
command reads ``theme-pages.yaml`` when present; command-line options and
``INPUT_*`` environment variables override its values.

Examples
--------
Compose the product template and print the resolved page as JSON:

>>> from theme_pages.cli import app
>>> app(["compose", "--template", "product"])  # doctest: +SKIP

Bundle the theme's stylesheets:

>>> app(["bundle", "--kind", "css", "--output", "dist/theme.css"])  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import json
import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .assets import bundle_assets, css_assets, js_assets, process_asset
from .composer import page_to_payload
from .config import DEFAULT_CONFIG_PATH, ProjectConfig, load_project_config
from .report import PageReportBuilder
from .schema import validate_section
from .theme import ThemeDirectory

log = logging.getLogger(__name__)

app = App(name="theme-pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to the project config", env_var="INPUT_CONFIG")
]
ThemeDirOption = typ.Annotated[
    Path | None,
    Parameter(help="Override the theme directory", env_var="INPUT_THEME_DIR"),
]
TemplateOption = typ.Annotated[
    str | None,
    Parameter(help="Template to compose (defaults to the configured one)"),
]
VerboseOption = typ.Annotated[bool, Parameter(help="Log debug output")]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _resolve_project(
    config: Path, *, theme_dir: Path | None = None, verbose: bool = False
) -> ProjectConfig:
    """Load the project config and apply command-line overrides.

    A missing config file is only tolerated when it is the default path; the
    built-in defaults are used then.
    """
    _configure_logging(verbose=verbose)
    if config.exists() or config != DEFAULT_CONFIG_PATH:
        project = load_project_config(config)
    else:
        log.debug("No %s found; using defaults", config)
        project = ProjectConfig()
    if theme_dir is not None:
        project = dc.replace(project, theme_dir=theme_dir)
    return project


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        print(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    print(f"wrote {_format_path(output)}")


@app.command(help="Compose a template into a resolved page and print it as JSON.")
def compose(
    *,
    template: TemplateOption = None,
    config: ConfigOption = DEFAULT_CONFIG_PATH,
    theme_dir: ThemeDirOption = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Write the JSON to a file instead of stdout")
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Compose the header group, template, and footer group of one page.

    Parameters
    ----------
    template : str or None, optional
        Template name under ``templates/``; the configured template is used
        when ``None``.
    config : Path, optional
        Path to ``theme-pages.yaml`` (overridable via ``INPUT_CONFIG``).
    theme_dir : Path or None, optional
        Theme directory overriding the configured one.
    output : Path or None, optional
        Destination file for the JSON document.
    verbose : bool, optional
        Enable debug logging.
    """
    project = _resolve_project(config, theme_dir=theme_dir, verbose=verbose)
    page = ThemeDirectory(project.theme_dir).compose(template or project.template)
    _emit(json.dumps(page_to_payload(page), indent=2), output)


@app.command(help="Validate resolved section settings against their schemas.")
def validate(
    *,
    template: TemplateOption = None,
    config: ConfigOption = DEFAULT_CONFIG_PATH,
    theme_dir: ThemeDirOption = None,
    json_output: typ.Annotated[
        bool, Parameter(name="--json", help="Print issues as a JSON list")
    ] = False,
    verbose: VerboseOption = False,
) -> None:
    """Print validation issues for every section of a composed page."""
    project = _resolve_project(config, theme_dir=theme_dir, verbose=verbose)
    page = ThemeDirectory(project.theme_dir).compose(template or project.template)
    findings = [
        (section, issue) for section in page.sections for issue in validate_section(section)
    ]
    if json_output:
        payload = [
            {
                "section": section.id,
                "type": section.type,
                "region": section.region,
                "setting": issue.setting_id,
                "severity": issue.severity,
                "message": issue.message,
            }
            for section, issue in findings
        ]
        print(json.dumps(payload, indent=2))
        return
    if not findings:
        print(f"{len(page.sections)} sections, no issues")
        return
    for section, issue in findings:
        print(f"{section.id} ({section.type}) {issue.severity} {issue.setting_id}: {issue.message}")


@app.command(help="List the theme's section types with their names and blocks.")
def sections(
    *,
    config: ConfigOption = DEFAULT_CONFIG_PATH,
    theme_dir: ThemeDirOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print one tab-separated line per section file."""
    project = _resolve_project(config, theme_dir=theme_dir, verbose=verbose)
    for info in ThemeDirectory(project.theme_dir).section_catalog():
        blocks = ", ".join(info.block_types) if info.block_types else "-"
        print(f"{info.type}\t{info.name}\t{blocks}")


@app.command(help="Resolve the template directives in one theme asset.")
def asset(
    path: typ.Annotated[
        Path, Parameter(help="Asset file, absolute or relative to the assets folder")
    ],
    /,
    *,
    config: ConfigOption = DEFAULT_CONFIG_PATH,
    theme_dir: ThemeDirOption = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Write the processed asset to a file")
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Process ``path`` through the asset directive processor."""
    project = _resolve_project(config, theme_dir=theme_dir, verbose=verbose)
    theme = ThemeDirectory(project.theme_dir)
    source = path if path.is_file() else theme.assets_dir / path
    if not source.is_file():
        msg = f"Asset '{path}' not found."
        raise FileNotFoundError(msg)
    context = theme.asset_context(
        project.asset_url_template, legacy_conditionals=project.legacy_conditionals
    )
    _emit(process_asset(source.read_text(encoding="utf-8"), context), output)


@app.command(help="Bundle the theme's stylesheets or scripts in load order.")
def bundle(
    *,
    kind: typ.Annotated[
        typ.Literal["css", "js"], Parameter(help="Which assets to bundle")
    ] = "css",
    config: ConfigOption = DEFAULT_CONFIG_PATH,
    theme_dir: ThemeDirOption = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Write the bundle to a file")
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Concatenate processed stylesheets or scripts into a single bundle."""
    project = _resolve_project(config, theme_dir=theme_dir, verbose=verbose)
    theme = ThemeDirectory(project.theme_dir)
    select = css_assets if kind == "css" else js_assets
    context = theme.asset_context(
        project.asset_url_template, legacy_conditionals=project.legacy_conditionals
    )
    _emit(bundle_assets(select(theme.assets()), context), output)


@app.command(help="Render the HTML diagnostics report for a template.")
def report(
    *,
    template: TemplateOption = None,
    config: ConfigOption = DEFAULT_CONFIG_PATH,
    theme_dir: ThemeDirOption = None,
    output: typ.Annotated[
        Path | None,
        Parameter(help="Override the report path", env_var="INPUT_REPORT_OUTPUT"),
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Write the report and print its location."""
    project = _resolve_project(config, theme_dir=theme_dir, verbose=verbose)
    written = PageReportBuilder(
        ThemeDirectory(project.theme_dir),
        output_path=output or project.report_output,
        template_name=template or project.template,
    ).run()
    print(f"wrote {_format_path(written)}")


def main() -> None:
    """Invoke the Cyclopts application behind the ``theme-pages`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
