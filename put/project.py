"""Reader for `project.zom` manifests.

A manifest is a list of sections, each opened by a `## <Section>` line and
followed by `- key: value` entries:

    ## Project Info
    - name: demo
    - version: 0.1.0

    ## Dependencies
    - linalg: 1.2

Entries in sections other than the five known ones, and lines that fit neither
form, are ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from put.config import get_project_candidates
from put.errors import ProjectConfigError

logger = logging.getLogger(__name__)

SECTIONS = {
    "Project Info": "project_info",
    "Dependencies": "dependencies",
    "Build Settings": "build_settings",
    "Runtime Settings": "runtime_settings",
    "Custom Settings": "custom_settings",
}


@dataclass
class ProjectConfig:
    project_info: dict[str, str] = field(default_factory=dict)
    dependencies: dict[str, str] = field(default_factory=dict)
    build_settings: dict[str, str] = field(default_factory=dict)
    runtime_settings: dict[str, str] = field(default_factory=dict)
    custom_settings: dict[str, str] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.project_info.get("name", "Unknown")

    @property
    def version(self) -> str:
        return self.project_info.get("version", "0.0.0")


def parse_project(lines: Iterable[str] | str) -> ProjectConfig:
    if isinstance(lines, str):
        lines = lines.splitlines()

    config = ProjectConfig()
    section = ""
    for line in lines:
        trimmed = line.strip()
        if trimmed.startswith("##"):
            section = trimmed[2:].strip()
            if section not in SECTIONS:
                logger.debug("Ignoring unknown manifest section %r", section)
        elif trimmed.startswith("-"):
            key, sep, value = trimmed[1:].partition(":")
            if not sep:
                continue
            attr = SECTIONS.get(section)
            if attr is not None:
                getattr(config, attr)[key.strip()] = value.strip()
    return config


def load_project(path: str | Path) -> ProjectConfig:
    """Read and parse a manifest file.

    Raises FileNotFoundError if it does not exist and ProjectConfigError if it
    exists but cannot be read.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError) as e:
        raise ProjectConfigError(f"Cannot read {path}: {e}") from e
    config = parse_project(text)
    logger.debug("Loaded manifest %s for project %s %s", path, config.name, config.version)
    return config


def find_project() -> Optional[ProjectConfig]:
    """Load the first manifest found in PUT_PROJECT_PATH (default ./project.zom)."""
    for candidate in get_project_candidates():
        if candidate.is_file():
            return load_project(candidate)
    logger.debug("No project manifest found")
    return None
