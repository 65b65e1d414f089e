"""
Pipeline executor ties together input loading, resolution, rendering and output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import VanityConfig, resolve
from ..errors import InputError
from ..render import RenderedSet, render_index, render_project
from ..web import SiteReport, resolve_output_dir, write_site

logger = logging.getLogger(__name__)

INDEX_TEMPLATE = "index.tmpl"
PROJECT_TEMPLATE = "project.tmpl"
VANITY_CONFIG = "vanity.yml"


@dataclass(frozen=True)
class GenerateOptions:
    """
    Options for a single generation run.

    Attributes:
        input_dir: Directory containing index.tmpl, project.tmpl and vanity.yml.
        output_dir: Directory receiving the generated site.
        dry_run: Resolve and render without writing any files.
    """
    input_dir: Path
    output_dir: Path = Path("./gen")
    dry_run: bool = False


@dataclass
class GenerationResult:
    config: VanityConfig
    index: bytes
    pages: RenderedSet
    report: Optional[SiteReport] = None


def _read_input(input_dir: Path, name: str) -> bytes:
    target = input_dir / name
    try:
        return target.read_bytes()
    except FileNotFoundError as exc:
        raise InputError(f"Failed to read file {target}: file not found") from exc
    except OSError as exc:
        raise InputError(f"Failed to read file {target}: {exc}") from exc


def _decode_template(raw: bytes, name: str) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InputError(f"Template {name} is not valid UTF-8: {exc}") from exc


def execute(options: GenerateOptions) -> GenerationResult:
    """
    Run the full generation workflow.

    Every input is read and every page rendered before anything is written,
    so a failure never leaves a half-generated site behind.

    Args:
        options: Input/output locations and flags.

    Returns:
        The resolved config, rendered pages and (unless dry_run) the SiteReport.

    Raises:
        VanityError: Any input, config, template or output failure.
    """
    input_dir = Path(options.input_dir).expanduser().resolve()
    logger.info("Reading inputs from %s", input_dir)
    index_template = _decode_template(_read_input(input_dir, INDEX_TEMPLATE), INDEX_TEMPLATE)
    project_template = _decode_template(_read_input(input_dir, PROJECT_TEMPLATE), PROJECT_TEMPLATE)
    document = _read_input(input_dir, VANITY_CONFIG)

    config = resolve(document)
    logger.info("Loaded configuration for %s with %d paths", config.host or "<no host>", len(config.paths))

    index = render_index(config.paths, config.host, index_template)
    pages = render_project(config.paths, config.host, project_template)
    logger.info("Rendered index and %d project pages", len(pages))

    result = GenerationResult(config=config, index=index, pages=pages)
    if options.dry_run:
        logger.info("Dry run; skipping output to %s", resolve_output_dir(options.output_dir))
        return result

    result.report = write_site(options.output_dir, index, pages)
    return result
