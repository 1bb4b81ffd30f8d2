"""Read a theme directory and feed its files to the composition engine.

A theme directory follows the conventional layout::

    theme/
      sections/*.liquid, sections/<kind>-group.json
      templates/*.json
      config/settings_data.json, config/settings_schema.json
      assets/*

:class:`ThemeDirectory` is the only part of the package that touches the
filesystem. Everything it returns comes from the pure parsers in
:mod:`theme_pages.schema`, :mod:`theme_pages.composer`, and
:mod:`theme_pages.assets`.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import re
import typing as typ
from pathlib import Path

from theme_pages._constants import (
    ASSETS_DIR,
    CONFIG_DIR,
    DEFAULT_TEMPLATE,
    GROUP_FILE_TEMPLATE,
    SECTION_SUFFIX,
    SECTIONS_DIR,
    SETTINGS_DATA_FILE,
    SETTINGS_SCHEMA_FILE,
    TEMPLATES_DIR,
)
from theme_pages.assets import (
    AssetContext,
    AssetInfo,
    build_settings_context,
    list_assets,
    url_resolver,
)
from theme_pages.composer import (
    SectionGroupDocument,
    compose_page,
    load_json_document,
    parse_section_group,
    parse_template_document,
)
from theme_pages.errors import DocumentError, MissingTemplateError

from .cache import SchemaCache

if typ.TYPE_CHECKING:
    from theme_pages.composer import GroupKind, ResolvedPage, TemplateDocument
    from theme_pages.schema import SectionPreset, SectionSchema

log = logging.getLogger(__name__)

SECTION_TYPE_PATTERN = re.compile(r"(?!\.)[A-Za-z0-9_.-]+")


@dc.dataclass(slots=True)
class SectionInfo:
    """Summary of one section file, as listed by the theme editor."""

    type: str
    name: str
    schema: SectionSchema | None
    presets: list[SectionPreset] = dc.field(default_factory=list)
    has_blocks: bool = False
    max_blocks: int | None = None
    block_types: list[str] = dc.field(default_factory=list)


class ThemeDirectory:
    """Access the sections, templates, settings, and assets of a theme.

    Parameters
    ----------
    root : Path
        Theme root directory.
    cache : SchemaCache, optional
        Schema cache to share between instances; a private one is created when
        omitted.

    Examples
    --------
    >>> from pathlib import Path
    >>> theme = ThemeDirectory(Path("theme"))  # doctest: +SKIP
    >>> [section.id for section in theme.compose("product").sections]  # doctest: +SKIP
    ['header', 'main', 'footer']
    """

    def __init__(self, root: Path, *, cache: SchemaCache | None = None) -> None:
        self.root = root
        self.cache = cache if cache is not None else SchemaCache()

    @property
    def sections_dir(self) -> Path:
        return self.root / SECTIONS_DIR

    @property
    def templates_dir(self) -> Path:
        return self.root / TEMPLATES_DIR

    @property
    def assets_dir(self) -> Path:
        return self.root / ASSETS_DIR

    def section_path(self, section_type: str) -> Path | None:
        """Return the file for ``section_type`` inside ``sections/``.

        Types come from authored documents, so a type that is not a plain file
        name, or that resolves outside the sections directory, yields ``None``.
        """
        if not SECTION_TYPE_PATTERN.fullmatch(section_type):
            log.warning("Refusing section type %r: not a plain file name", section_type)
            return None
        path = self.sections_dir / f"{section_type}{SECTION_SUFFIX}"
        if not path.resolve().is_relative_to(self.sections_dir.resolve()):
            log.warning(
                "Refusing section type %r: outside %s", section_type, self.sections_dir
            )
            return None
        return path

    def section_source(self, section_type: str) -> str | None:
        """Return the template source of a section, or ``None`` if absent."""
        path = self.section_path(section_type)
        if path is None or not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def schema_for(self, section_type: str) -> SectionSchema | None:
        """Return the parsed schema of a section type, via the cache."""
        path = self.section_path(section_type)
        source = self.section_source(section_type)
        if path is None or source is None:
            log.debug("No section file for type '%s'", section_type)
            return None
        return self.cache.get_or_parse(str(path), source)

    def load_template(self, name: str = DEFAULT_TEMPLATE) -> TemplateDocument:
        """Load ``templates/<name>.json``, falling back to the index template.

        Raises
        ------
        MissingTemplateError
            If neither the named template nor ``index.json`` exists.
        DocumentError
            If the template file is not a valid template document.
        """
        for candidate in dict.fromkeys((name, DEFAULT_TEMPLATE)):
            path = self.templates_dir / f"{candidate}.json"
            if path.is_file():
                if candidate != name:
                    log.warning("Template '%s' not found; using '%s'", name, candidate)
                payload = load_json_document(
                    path.read_text(encoding="utf-8"), source_name=str(path)
                )
                return parse_template_document(payload)
        msg = f"Template '{name}' not found in {self.templates_dir}."
        raise MissingTemplateError(msg)

    def load_group(self, kind: GroupKind) -> SectionGroupDocument:
        """Load ``sections/<kind>-group.json``; a missing file is an empty group."""
        path = self.sections_dir / GROUP_FILE_TEMPLATE.format(kind=kind)
        if not path.is_file():
            return SectionGroupDocument(kind=kind, name=kind)
        payload = load_json_document(path.read_text(encoding="utf-8"), source_name=str(path))
        return parse_section_group(payload, kind=kind)

    def load_settings_data(self) -> dict[str, typ.Any]:
        """Return ``config/settings_data.json`` or an empty mapping."""
        payload = self._load_config_file(SETTINGS_DATA_FILE)
        if payload is None:
            return {}
        if not isinstance(payload, dict):
            msg = f"{SETTINGS_DATA_FILE} must contain a JSON object."
            raise DocumentError(msg)
        return payload

    def load_settings_schema(self) -> list[typ.Any]:
        """Return ``config/settings_schema.json`` or an empty list."""
        payload = self._load_config_file(SETTINGS_SCHEMA_FILE)
        if payload is None:
            return []
        if not isinstance(payload, list):
            msg = f"{SETTINGS_SCHEMA_FILE} must contain a JSON array."
            raise DocumentError(msg)
        return payload

    def section_types(self) -> list[str]:
        """Return every section type with a template file, sorted."""
        if not self.sections_dir.is_dir():
            return []
        return sorted(
            path.name.removesuffix(SECTION_SUFFIX)
            for path in self.sections_dir.glob(f"*{SECTION_SUFFIX}")
            if path.is_file()
        )

    def section_catalog(self) -> list[SectionInfo]:
        """Summarise every section file in the theme."""
        catalog: list[SectionInfo] = []
        for section_type in self.section_types():
            schema = self.schema_for(section_type)
            if schema is None:
                catalog.append(SectionInfo(type=section_type, name=section_type, schema=None))
                continue
            catalog.append(
                SectionInfo(
                    type=section_type,
                    name=schema.name or section_type,
                    schema=schema,
                    presets=list(schema.presets),
                    has_blocks=bool(schema.blocks),
                    max_blocks=schema.max_blocks,
                    block_types=schema.block_types(),
                )
            )
        return catalog

    def compose(self, template_name: str = DEFAULT_TEMPLATE) -> ResolvedPage:
        """Compose the named template with the header and footer groups."""
        return compose_page(
            self.load_template(template_name),
            self.load_group("header"),
            self.load_group("footer"),
            self.schema_for,
        )

    def assets(self) -> list[AssetInfo]:
        return list_assets(self.assets_dir)

    def asset_context(
        self, url_template: str, *, legacy_conditionals: bool = False
    ) -> AssetContext:
        """Build the asset processing context from the theme's settings."""
        return AssetContext(
            settings=build_settings_context(
                self.load_settings_data(), self.load_settings_schema()
            ),
            resolve_asset_url=url_resolver(url_template),
            legacy_conditionals=legacy_conditionals,
        )

    def _load_config_file(self, filename: str) -> typ.Any:
        path = self.root / CONFIG_DIR / filename
        if not path.is_file():
            return None
        return load_json_document(path.read_text(encoding="utf-8"), source_name=str(path))


__all__ = ["SectionInfo", "ThemeDirectory"]
