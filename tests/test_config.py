"""
Tests for configuration loading — handy.yml parsing and validation.
"""

import textwrap
from pathlib import Path

import pytest

from handy_scripts.core.config.loader import find_config_file, load_settings
from handy_scripts.core.errors import ConfigError
from handy_scripts.core.models.settings import Settings


@pytest.fixture
def full_config(tmp_path: Path) -> Path:
    """Create a handy.yml overriding every setting."""
    content = textwrap.dedent("""\
        collection_root: scripts
        target_dir: ~/.local/handy
        script_extension: bash
        shell_configs:
          - .bashrc
          - .profile
    """)
    path = tmp_path / "handy.yml"
    path.write_text(content)
    return path


class TestLoadSettings:
    def test_full(self, full_config: Path, home: Path):
        settings = load_settings(full_config)
        assert settings.collection_root == full_config.parent.resolve() / "scripts"
        assert settings.resolved_target_dir == home / ".local" / "handy"
        assert settings.script_extension == ".bash"
        assert settings.shell_configs == [".bashrc", ".profile"]

    def test_empty_file_uses_defaults(self, tmp_path: Path, home: Path):
        path = tmp_path / "handy.yml"
        path.write_text("")
        settings = load_settings(path)
        assert settings.collection_root == tmp_path.resolve() / "collection"
        assert settings.resolved_target_dir == home / "handy_scripts"
        assert settings.shell_configs == [".bashrc", ".zshrc"]

    def test_absolute_collection_root_kept(self, tmp_path: Path, home: Path):
        root = tmp_path / "elsewhere"
        path = tmp_path / "handy.yml"
        path.write_text(f"collection_root: {root}\n")
        assert load_settings(path).collection_root == root

    def test_no_file_defaults_to_cwd(self, tmp_path: Path, home: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        settings = load_settings()
        assert settings.collection_root == tmp_path.resolve() / "collection"

    def test_explicit_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_settings(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "handy.yml"
        path.write_text("collection_root: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_settings(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "handy.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_settings(path)

    def test_invalid_schema(self, tmp_path: Path):
        path = tmp_path / "handy.yml"
        path.write_text("shell_configs: ../../etc/passwd\n")
        with pytest.raises(ConfigError, match="Invalid installer configuration"):
            load_settings(path)

    def test_rc_file_outside_home_rejected(self, tmp_path: Path):
        path = tmp_path / "handy.yml"
        path.write_text("shell_configs:\n  - /etc/bash.bashrc\n")
        with pytest.raises(ConfigError):
            load_settings(path)


class TestFindConfigFile:
    def test_walks_up(self, tmp_path: Path):
        (tmp_path / "handy.yml").write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == (tmp_path / "handy.yml").resolve()

    def test_not_found(self, tmp_path: Path):
        # tmp_path sits under the system temp dir, which has no handy.yml
        assert find_config_file(tmp_path) is None


class TestSettings:
    def test_target_dir_variants(self, home: Path):
        assert Settings(home=home, target_dir="~").resolved_target_dir == home
        assert Settings(home=home, target_dir="bin/handy").resolved_target_dir == home / "bin" / "handy"
        assert Settings(home=home, target_dir="/srv/handy").resolved_target_dir == Path("/srv/handy")

    def test_home_defaults_to_env(self, home: Path):
        assert Settings().home == home

    def test_extension_normalized(self):
        assert Settings(script_extension="zsh").script_extension == ".zsh"
        with pytest.raises(ValueError):
            Settings(script_extension="")

    def test_shell_config_path(self, home: Path):
        assert Settings(home=home).shell_config_path(".zshrc") == home / ".zshrc"
