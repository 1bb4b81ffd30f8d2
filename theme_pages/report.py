"""Render an HTML diagnostics report for a composed theme page.

The report lists every section of the resolved page in render order with its
region, index, schema name, resolved settings, and any validation issues,
followed by the theme's section catalogue. It is written with Jinja2 from
``theme_pages/templates/page_report.jinja``.

>>> from pathlib import Path
>>> from theme_pages.report import PageReportBuilder
>>> from theme_pages.theme import ThemeDirectory
>>> builder = PageReportBuilder(
...     ThemeDirectory(Path("theme")), template_name="index", output_path=Path("out.html")
... )  # doctest: +SKIP
>>> builder.run()  # doctest: +SKIP
PosixPath('out.html')
"""

from __future__ import annotations

import datetime as dt
import json
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ._constants import DEFAULT_TEMPLATE
from .schema import validate_section

if typ.TYPE_CHECKING:
    from .composer import SectionInstance
    from .theme import ThemeDirectory

REPORT_TEMPLATE = "page_report.jinja"


class PageReportBuilder:
    """Render the diagnostics report for one template of a theme."""

    def __init__(
        self,
        theme: ThemeDirectory,
        *,
        output_path: Path,
        template_name: str = DEFAULT_TEMPLATE,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the report builder.

        Parameters
        ----------
        theme : ThemeDirectory
            Theme whose page is composed and reported on.
        output_path : Path
            Destination HTML file.
        template_name : str, optional
            Page template to compose, ``index`` by default.
        templates_dir : Path, optional
            Directory containing the Jinja templates. Defaults to the
            ``theme_pages/templates`` directory when ``None``.
        """
        self.theme = theme
        self.output_path = output_path
        self.template_name = template_name
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template(REPORT_TEMPLATE)

    def run(self) -> Path:
        """Compose the page, render the report, and return the written path."""
        page = self.theme.compose(self.template_name)
        entries = [_section_entry(section) for section in page.sections]
        context = {
            "template_name": self.template_name,
            "layout": page.layout,
            "entries": entries,
            "issue_count": sum(len(entry["issues"]) for entry in entries),
            "catalog": self.theme.section_catalog(),
            "generated_at": dt.datetime.now(dt.UTC),
        }
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.output_path.write_text(self.template.render(**context), encoding="utf-8")
        return self.output_path


def _section_entry(section: SectionInstance) -> dict[str, typ.Any]:
    """Collect the template fields describing one resolved section."""
    issues = validate_section(section)
    return {
        "id": section.id,
        "type": section.type,
        "name": section.schema.name if section.schema is not None else "",
        "region": section.region,
        "index": section.index,
        "disabled": section.disabled,
        "has_schema": section.schema is not None,
        "settings": [
            (key, json.dumps(value, sort_keys=True))
            for key, value in section.settings.items()
        ],
        "block_count": len(section.blocks),
        "issues": issues,
    }


__all__ = ["PageReportBuilder"]
