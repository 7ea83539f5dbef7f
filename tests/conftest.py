"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from handy_scripts.core.models.settings import Settings

DOCKER_BASIC = """\
#!/bin/bash

# DESCRIPTION: This file, `docker_helpers.sh`, contains utility functions for Docker.
# They are intended to be sourced in your `.zshrc` or `.bashrc` file.

function docker_ps() {
    docker ps
}
"""

SCRIPTS = {
    "docker": {
        "docker_basic_helpers.sh": DOCKER_BASIC,
        "docker_helpers.sh": "#!/bin/bash\n# DESCRIPTION:\n# Docker advanced helpers.\n\necho docker\n",
    },
    "github": {
        "github_advanced_helpers.sh": "#!/bin/bash\necho advanced\n",
        "github_basic_helpers.sh": "#!/bin/bash\necho basic\n",
    },
    "python": {
        "python_helpers.sh": "#!/bin/bash\necho python\n",
        ".utils.sh": "#!/bin/bash\necho private\n",
    },
}


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A fake home directory with empty ~/.bashrc and no ~/.zshrc."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    (home_dir / ".bashrc").write_text("export PATH=$PATH:/usr/local/bin\n")
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


@pytest.fixture
def collection_root(tmp_path: Path) -> Path:
    """A collection tree with docker, github and python collections."""
    root = tmp_path / "repo" / "collection"
    for collection, files in SCRIPTS.items():
        directory = root / collection
        directory.mkdir(parents=True)
        for name, content in files.items():
            (directory / name).write_text(content)
    (root / "docker" / "README.md").write_text("not a script\n")
    return root


@pytest.fixture
def settings(home: Path, collection_root: Path) -> Settings:
    return Settings(home=home, collection_root=collection_root)


@pytest.fixture
def target_dir(settings: Settings) -> Path:
    return settings.resolved_target_dir
