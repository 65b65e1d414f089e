"""
Render the index and project templates from resolved vanity paths.

Templates use Jinja2 syntax. The index template sees ``Host`` and ``Vanity``
(a list of links with ``Path`` and ``Repo``); the project template sees
``Import``, ``Repo``, ``Display``, ``VCS`` and ``Host``. Undefined names are
errors, never empty strings.

The trailing newline of a template is kept, but Jinja2 rewrites every line
ending (``\\r\\n``, ``\\r``) to ``\\n`` in the rendered output.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Dict, Iterator, Sequence, Tuple

import jinja2

from ..config import VanityPath
from ..errors import TemplateParseError, TemplateRenderError

logger = logging.getLogger(__name__)

_ENV = jinja2.Environment(
    undefined=jinja2.StrictUndefined,
    autoescape=True,
    keep_trailing_newline=True,
)


@dataclass(frozen=True)
class VanityLink:
    """One entry of the index page."""
    Path: str
    Repo: str


@dataclass(frozen=True)
class ProjectPage:
    """
    Rendered project page for a single vanity path.

    Attributes:
        packages: Sub-packages that receive a copy of the page.
        content: Rendered document as UTF-8 bytes.
    """
    packages: Tuple[str, ...]
    content: bytes


class RenderedSet(Mapping):
    """
    Read-only mapping of vanity path to its rendered ProjectPage.

    Iteration follows the order of the resolved paths. ``get`` returns None for
    paths that were never configured.
    """

    def __init__(self, pages: Dict[str, ProjectPage]) -> None:
        self._pages = dict(pages)

    def __getitem__(self, path: str) -> ProjectPage:
        return self._pages[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._pages)

    def __len__(self) -> int:
        return len(self._pages)

    def __repr__(self) -> str:
        return f"RenderedSet({list(self._pages)!r})"


def _parse(name: str, template: str) -> jinja2.Template:
    try:
        return _ENV.from_string(template)
    except jinja2.TemplateSyntaxError as exc:
        raise TemplateParseError(f"failed to parse {name} template: {exc}") from exc


def render_index(paths: Sequence[VanityPath], host: str, template: str) -> bytes:
    """
    Render the site index listing every vanity path.

    Args:
        paths: Resolved paths, rendered in the given order.
        host: Host serving the vanity paths.
        template: Jinja2 template text.

    Returns:
        The rendered index as UTF-8 bytes.

    Raises:
        TemplateParseError: If the template is malformed.
        TemplateRenderError: If rendering fails (e.g., an undefined field).
    """
    index = _parse("index", template)
    vanity = [VanityLink(Path=host + entry.path, Repo=entry.repo) for entry in paths]
    try:
        rendered = index.render(Host=host, Vanity=vanity)
    except Exception as exc:
        raise TemplateRenderError(f"failed to execute index template: {exc}") from exc
    logger.debug("Rendered index with %d paths", len(vanity))
    return rendered.encode("utf-8")


def render_project(paths: Sequence[VanityPath], host: str, template: str) -> RenderedSet:
    """
    Render the project template once per vanity path.

    The template is parsed once. The first path that fails to render aborts the
    call and no partial result is returned.

    Args:
        paths: Resolved paths.
        host: Host serving the vanity paths.
        template: Jinja2 template text.

    Returns:
        A RenderedSet keyed by each path's normalized path string.

    Raises:
        TemplateParseError: If the template is malformed.
        TemplateRenderError: If rendering fails for any path.
    """
    project = _parse("project", template)
    pages: Dict[str, ProjectPage] = {}
    for entry in paths:
        try:
            rendered = project.render(
                Import=host + entry.path,
                Repo=entry.repo,
                Display=entry.display,
                VCS=entry.vcs,
                Host=host,
            )
        except Exception as exc:
            raise TemplateRenderError(f"failed to execute project template for {entry.path}: {exc}") from exc
        pages[entry.path] = ProjectPage(packages=tuple(entry.packages), content=rendered.encode("utf-8"))
        logger.debug("Rendered project page for %s", entry.path)
    return RenderedSet(pages)

