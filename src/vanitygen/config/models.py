"""
Pydantic models for validating vanity configuration documents.

Unknown keys are ignored and scalar values (numbers, booleans) given for
string fields are read as their YAML text.
"""

from __future__ import annotations

from typing import Any, Dict, List, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..errors import ConfigError


def _scalar_text(value: Any) -> Any:
    """Render a YAML scalar as a string; leave other values for pydantic to reject."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


class PathConfig(BaseModel):
    """
    Raw configuration for a single vanity path, as written in vanity.yml.

    Attributes:
        repo: Repository URL (e.g., "https://github.com/user/project").
        display: Optional go-source display template (three URL patterns).
        vcs: Optional VCS identifier (git, hg, svn, bzr).
        packages: Sub-package directories that should receive a copy of the page.
    """
    repo: str = ""
    display: str = ""
    vcs: str = ""
    packages: List[str] = Field(default_factory=list)

    @field_validator("repo", "display", "vcs", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> Any:
        return _scalar_text(value)

    @field_validator("packages", mode="before")
    @classmethod
    def _as_text_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return [_scalar_text(item) for item in value]
        return value


class VanityDocument(BaseModel):
    """
    Top-level vanity.yml document.

    Attributes:
        host: Host that serves the vanity paths (e.g., "go.example.com").
        paths: Mapping of path (e.g., "/project") to its configuration.
    """
    host: str = ""
    paths: Dict[str, PathConfig] = Field(default_factory=dict)

    @field_validator("host", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> Any:
        return _scalar_text(value)

    @field_validator("paths", mode="before")
    @classmethod
    def _normalize_paths(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            # A key without a body ("/foo:") is an empty record.
            return {key: ({} if record is None else record) for key, record in value.items()}
        return value


def parse_document(document: Union[bytes, str]) -> VanityDocument:
    """
    Parse and validate raw vanity.yml content.

    Args:
        document: YAML text or bytes.

    Returns:
        A validated VanityDocument.

    Raises:
        ConfigError: If the YAML is malformed or does not match the schema.
    """
    try:
        raw_data = yaml.safe_load(document)
    except yaml.YAMLError as exc:
        raise ConfigError(f"could not parse vanity config: {exc}") from exc

    if raw_data is None:
        raw_data = {}
    if not isinstance(raw_data, dict):
        raise ConfigError("could not parse vanity config: top-level document must be a mapping")

    # YAML allows non-string keys (e.g. numbers); paths are always strings.
    paths = raw_data.get("paths")
    if isinstance(paths, dict):
        raw_data = dict(raw_data)
        raw_data["paths"] = {str(key): record for key, record in paths.items()}

    try:
        return VanityDocument.model_validate(raw_data)
    except ValidationError as exc:
        raise ConfigError(f"could not parse vanity config: {exc}") from exc
