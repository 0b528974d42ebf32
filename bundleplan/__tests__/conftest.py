from os import environ
from pathlib import Path

import pytest

from bundleplan.config import BuildSettings


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """
    Keep the developer's shell from leaking into the tests: no NODE_ENV, no
    BUNDLEPLAN_* overrides and no stray .env file in the working directory.

    """
    monkeypatch.delenv("NODE_ENV", raising=False)
    for key in list(environ):
        if key.startswith("BUNDLEPLAN_"):
            monkeypatch.delenv(key)

    working_dir = tmp_path / "cwd"
    working_dir.mkdir()
    monkeypatch.chdir(working_dir)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "src" / "index.tsx").write_text("export {};\n")
    (root / "src" / "index.html").write_text("<html><body></body></html>\n")
    return root


@pytest.fixture
def settings(project_root: Path) -> BuildSettings:
    return BuildSettings(PROJECT_ROOT=project_root)
