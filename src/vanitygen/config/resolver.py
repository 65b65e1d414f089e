"""
Resolve a vanity configuration document into normalized path records.

VCS and go-source display templates are inferred from well-known repository
hosts when the configuration does not spell them out.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from ..errors import ConfigError, VCSError
from .models import PathConfig, parse_document

logger = logging.getLogger(__name__)

KNOWN_VCS = ("bzr", "git", "hg", "svn")

GITHUB_PREFIX = "https://github.com/"
BITBUCKET_PREFIX = "https://bitbucket.org"

GITHUB_DISPLAY = "{repo} {repo}/tree/master{{/dir}} {repo}/blob/master{{/dir}}/{{file}}#L{{line}}"
BITBUCKET_DISPLAY = "{repo} {repo}/src/default{{/dir}} {repo}/src/default{{/dir}}/{{file}}#{{file}}-{{line}}"


@dataclass(frozen=True)
class VanityPath:
    """
    A single resolved vanity import path.

    Attributes:
        path: Normalized path without a trailing slash (e.g., "/project").
        repo: Repository URL.
        display: go-source display template, or "" when unknown.
        vcs: One of KNOWN_VCS.
        packages: Sub-packages that share the project page.
    """
    path: str
    repo: str
    display: str
    vcs: str
    packages: Tuple[str, ...] = ()


@dataclass(frozen=True)
class VanityConfig:
    """Resolved configuration: the serving host plus paths in document order."""
    host: str
    paths: Tuple[VanityPath, ...] = field(default_factory=tuple)

    def get(self, path: str) -> Optional[VanityPath]:
        for entry in self.paths:
            if entry.path == path:
                return entry
        return None


def normalize_path(path: str) -> str:
    """Trim a single trailing slash."""
    return path.removesuffix("/")


def infer_display(repo: str) -> str:
    """
    Build the go-source display template for repositories on known hosts.

    Returns an empty string when the host has no known browse-URL convention.
    """
    if repo.startswith(GITHUB_PREFIX):
        return GITHUB_DISPLAY.format(repo=repo)
    if repo.startswith(BITBUCKET_PREFIX):
        return BITBUCKET_DISPLAY.format(repo=repo)
    return ""


def resolve_vcs(path: str, config: PathConfig) -> str:
    """
    Validate an explicit VCS or infer one from the repository URL.

    Raises:
        VCSError: If the VCS is unknown or cannot be inferred.
    """
    if config.vcs:
        if config.vcs not in KNOWN_VCS:
            raise VCSError(f"configuration for {path}: unknown VCS {config.vcs}")
        return config.vcs
    if config.repo.startswith(GITHUB_PREFIX):
        return "git"
    raise VCSError(f"configuration for {path}: cannot infer VCS from {config.repo}")


def resolve_path(path: str, config: PathConfig) -> VanityPath:
    """Resolve one configuration entry into a VanityPath."""
    display = config.display or infer_display(config.repo)
    vcs = resolve_vcs(path, config)
    resolved = VanityPath(
        path=normalize_path(path),
        repo=config.repo,
        display=display,
        vcs=vcs,
        packages=tuple(config.packages),
    )
    logger.debug("Resolved %s -> %s %s", resolved.path, resolved.vcs, resolved.repo)
    return resolved


def resolve(document: Union[bytes, str]) -> VanityConfig:
    """
    Parse a vanity.yml document and resolve every configured path.

    Paths keep their document order. Keys that normalize to the same path
    collapse into one entry and the last one wins.

    Args:
        document: YAML text or bytes.

    Returns:
        The resolved VanityConfig.

    Raises:
        ConfigError: If the document is malformed.
        VCSError: If any path has an unknown or un-inferable VCS.
    """
    parsed = parse_document(document)
    resolved: Dict[str, VanityPath] = {}
    for raw_path, path_config in parsed.paths.items():
        entry = resolve_path(raw_path, path_config)
        if entry.path in resolved:
            logger.warning("Path '%s' is configured more than once; keeping the last entry.", entry.path)
        resolved[entry.path] = entry
    return VanityConfig(host=parsed.host, paths=tuple(resolved.values()))


def load_config(path: Path | str) -> VanityConfig:
    """
    Read and resolve a vanity.yml file.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")
    try:
        document = config_path.read_bytes()
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file: {exc}") from exc
    return resolve(document)
