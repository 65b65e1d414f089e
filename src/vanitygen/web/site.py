"""
Lay out rendered vanity pages as a static site on disk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Tuple

from ..errors import OutputError
from ..render import RenderedSet
from ..util import ensure_directory, file_lock, is_relative_to, write_bytes_file

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = Path("./gen")
INDEX_FILENAME = "index.html"


@dataclass
class SiteReport:
    """
    Stores what was written when the site was generated.

    Attributes:
        root: The root directory of the generated site.
        directories_created: Folders that did not exist before the run.
        files_written: Every index.html written, including the root index.
    """
    root: Path
    directories_created: List[Path] = field(default_factory=list)
    files_written: List[Path] = field(default_factory=list)

    def summary_rows(self) -> Iterable[tuple[str, str]]:
        yield ("Root", str(self.root))
        yield ("Directories created", str(len(self.directories_created)))
        yield ("Files written", str(len(self.files_written)))


def resolve_output_dir(output_dir: Path | str | None) -> Path:
    """
    Determine the absolute path of the output directory, defaulting to ./gen.
    """
    root = output_dir or DEFAULT_OUTPUT_DIR
    return Path(root).expanduser().resolve()


def page_targets(root: Path, path: str, packages: Iterable[str]) -> List[Path]:
    """
    List the index.html files a vanity path is written to.

    The page lives at ``<root><path>/index.html`` and is copied to
    ``<root><path>/<package>/index.html`` for every package.

    Raises:
        OutputError: If any target would land outside root.
    """
    base = (root / path.lstrip("/")).resolve()
    directories = [base] + [(base / package.strip("/")).resolve() for package in packages]
    targets = []
    for directory in directories:
        target = directory / INDEX_FILENAME
        if not is_relative_to(target, root):
            raise OutputError(f"Refusing to write {target} (outside {root})")
        targets.append(target)
    return targets


def _ensure_directory(path: Path, report: SiteReport) -> None:
    if not path.exists():
        ensure_directory(path)
        report.directories_created.append(path)


def write_site(output_dir: Path | str | None, index: bytes, pages: RenderedSet) -> SiteReport:
    """
    Write the index and every project page under output_dir.

    All targets are validated before the first file is written. A lock file
    next to the output directory keeps concurrent runs from interleaving.

    Args:
        output_dir: Destination directory (defaults to ./gen).
        index: Rendered index document.
        pages: Rendered project pages keyed by vanity path.

    Returns:
        A SiteReport detailing the files written.

    Raises:
        OutputError: If a target is outside output_dir or cannot be written.
    """
    root = resolve_output_dir(output_dir)
    plan: List[Tuple[Path, bytes]] = [(root / INDEX_FILENAME, index)]
    for path, page in pages.items():
        plan.extend((target, page.content) for target in page_targets(root, path, page.packages))

    report = SiteReport(root=root)
    try:
        with file_lock(root):
            _ensure_directory(root, report)
            for target, content in plan:
                _ensure_directory(target.parent, report)
                report.files_written.append(write_bytes_file(target, content))
    except OSError as exc:
        raise OutputError(f"Failed to write site at {root}: {exc}") from exc

    logger.info("Wrote %d files under %s", len(report.files_written), root)
    return report
