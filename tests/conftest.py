import pytest

from put.interpreter import Interpreter
from put.types.environment import Environment


@pytest.fixture
def env():
    """Fresh, empty environment."""
    return Environment()


@pytest.fixture
def interp():
    return Interpreter()


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """Temporary directory holding a project.zom, used as the manifest search path."""
    manifest = tmp_path / "project.zom"
    manifest.write_text(
        "## Project Info\n"
        "- name: tensor-demo\n"
        "- version: 1.2.3\n"
        "\n"
        "## Dependencies\n"
        "- linalg: 0.4\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("PUT_PROJECT_PATH", str(manifest))
    return tmp_path


@pytest.fixture
def broken_project(tmp_path, monkeypatch):
    """A project.zom that is not valid UTF-8, so it cannot be read."""
    manifest = tmp_path / "project.zom"
    manifest.write_bytes(b"## Project Info\n- name: \xff\xfe\n")
    monkeypatch.setenv("PUT_PROJECT_PATH", str(manifest))
    return manifest
