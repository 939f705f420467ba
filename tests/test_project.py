import logging

import pytest

from put.config import get_log_level, get_project_candidates
from put.errors import ProjectConfigError
from put.project import ProjectConfig, find_project, load_project, parse_project

MANIFEST = """
## Project Info
- name: put-demo
- version: 0.2.0

## Dependencies
- linalg: 1.0
- plot:2.1

## Build Settings
- optimize: true

## Runtime Settings
- threads: 4

## Custom Settings
- url: http://example.com:8080

## Unknown
- ignored: yes

- orphan without colon
stray line
"""


def test_parse_sections():
    cfg = parse_project(MANIFEST)
    assert cfg.project_info == {"name": "put-demo", "version": "0.2.0"}
    assert cfg.dependencies == {"linalg": "1.0", "plot": "2.1"}
    assert cfg.build_settings == {"optimize": "true"}
    assert cfg.runtime_settings == {"threads": "4"}
    # only the first ':' separates key from value
    assert cfg.custom_settings == {"url": "http://example.com:8080"}


def test_name_and_version_defaults():
    cfg = ProjectConfig()
    assert cfg.name == "Unknown"
    assert cfg.version == "0.0.0"


def test_entries_before_any_section_are_ignored():
    cfg = parse_project("- name: early\n## Project Info\n- name: late\n")
    assert cfg.name == "late"


def test_parse_accepts_line_iterables():
    cfg = parse_project(["## Dependencies", "- a: 1"])
    assert cfg.dependencies == {"a": "1"}


def test_load_project(tmp_path):
    path = tmp_path / "project.zom"
    path.write_text(MANIFEST, encoding="utf-8")
    assert load_project(path).name == "put-demo"


def test_load_missing_project(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_project(tmp_path / "missing.zom")


def test_load_unreadable_project(tmp_path):
    with pytest.raises(ProjectConfigError):
        load_project(tmp_path)  # a directory, not a file


def test_load_undecodable_project(broken_project):
    with pytest.raises(ProjectConfigError):
        load_project(broken_project)


def test_find_project_reports_undecodable_manifest(broken_project):
    with pytest.raises(ProjectConfigError):
        find_project()


def test_find_project_uses_env_path(project_dir):
    cfg = find_project()
    assert cfg.name == "tensor-demo"
    assert cfg.dependencies == {"linalg": "0.4"}


def test_find_project_none(tmp_path, monkeypatch):
    monkeypatch.setenv("PUT_PROJECT_PATH", str(tmp_path / "absent.zom"))
    assert find_project() is None


def test_project_candidates_default(monkeypatch):
    monkeypatch.delenv("PUT_PROJECT_PATH", raising=False)
    assert [p.name for p in get_project_candidates()] == ["project.zom"]


@pytest.mark.parametrize(
    "value,level",
    [
        ("debug", logging.DEBUG),
        ("INFO", logging.INFO),
        ("nonsense", logging.WARNING),
    ],
)
def test_log_level_from_env(monkeypatch, value, level):
    monkeypatch.setenv("PUT_LOG_LEVEL", value)
    assert get_log_level() == level
