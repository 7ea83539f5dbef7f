"""
Tests for the installer — atomic single copies and best-effort bulk installs.
"""

import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from handy_scripts.core.errors import NotFound
from handy_scripts.core.models.script import Collection
from handy_scripts.core.services.catalog import ScriptCatalog
from handy_scripts.core.services.installer import InstallFailure, Installer, InstallReport


@pytest.fixture
def installer(collection_root: Path, target_dir: Path) -> Installer:
    return Installer(target_dir, ScriptCatalog(collection_root))


class TestInstallOne:
    def test_fresh_install_creates_target_dir(self, installer: Installer, collection_root: Path, target_dir: Path):
        assert not target_dir.exists()
        installed = installer.install_one(collection_root / "docker" / "docker_basic_helpers.sh")
        assert installed.path == target_dir / "docker_basic_helpers.sh"
        assert installed.path.is_file()
        assert installed.executable

    def test_byte_identical_copy(self, installer: Installer, collection_root: Path):
        source = collection_root / "docker" / "docker_basic_helpers.sh"
        installed = installer.install_one(source)
        assert installed.path.read_bytes() == source.read_bytes()

    def test_executable_regardless_of_source_mode(self, installer: Installer, collection_root: Path):
        source = collection_root / "github" / "github_basic_helpers.sh"
        source.chmod(0o600)
        installed = installer.install_one(source)
        mode = installed.path.stat().st_mode
        assert mode & stat.S_IXUSR
        assert os.access(installed.path, os.X_OK)

    def test_accepts_string_path(self, installer: Installer, collection_root: Path):
        installed = installer.install_one(str(collection_root / "python" / "python_helpers.sh"))
        assert installed.name == "python_helpers.sh"

    def test_reinstall_overwrites(self, installer: Installer, collection_root: Path):
        source = collection_root / "github" / "github_basic_helpers.sh"
        installer.install_one(source)
        source.write_text("#!/bin/bash\necho v2\n")
        installed = installer.install_one(source)
        assert installed.path.read_text() == "#!/bin/bash\necho v2\n"

    def test_existing_target_dir_is_fine(self, installer: Installer, collection_root: Path, target_dir: Path):
        target_dir.mkdir(parents=True)
        installer.install_one(collection_root / "docker" / "docker_helpers.sh")
        assert (target_dir / "docker_helpers.sh").is_file()

    def test_missing_source_raises_not_found(self, installer: Installer, collection_root: Path, target_dir: Path):
        target_dir.mkdir(parents=True)
        (target_dir / "keep.sh").write_text("keep\n")
        before = sorted(p.name for p in target_dir.iterdir())

        with pytest.raises(NotFound) as exc_info:
            installer.install_one(collection_root / "docker" / "missing.sh")

        assert exc_info.value.path == collection_root / "docker" / "missing.sh"
        assert sorted(p.name for p in target_dir.iterdir()) == before

    def test_directory_source_raises_not_found(self, installer: Installer, collection_root: Path):
        with pytest.raises(NotFound):
            installer.install_one(collection_root / "docker")

    def test_failed_copy_leaves_no_partial_file(self, installer: Installer, collection_root: Path, target_dir: Path):
        source = collection_root / "docker" / "docker_helpers.sh"
        with patch("handy_scripts.core.services.installer.shutil.copyfileobj", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                installer.install_one(source)
        assert list(target_dir.iterdir()) == []

    def test_failed_rename_keeps_previous_copy(self, installer: Installer, collection_root: Path, target_dir: Path):
        source = collection_root / "docker" / "docker_helpers.sh"
        installer.install_one(source)
        original = (target_dir / "docker_helpers.sh").read_bytes()
        source.write_text("changed\n")

        with patch("handy_scripts.core.services.installer.os.replace", side_effect=OSError("boom")):
            with pytest.raises(OSError):
                installer.install_one(source)

        assert (target_dir / "docker_helpers.sh").read_bytes() == original
        assert [p.name for p in target_dir.iterdir()] == ["docker_helpers.sh"]


class TestInstallAll:
    def test_bulk_collection(self, installer: Installer, collection_root: Path, target_dir: Path):
        github = Collection(name="github", path=collection_root / "github")
        report = installer.install_all(github)
        assert report.status == "ok"
        assert [s.name for s in report.installed] == [
            "github_advanced_helpers.sh",
            "github_basic_helpers.sh",
        ]
        assert (target_dir / "github_basic_helpers.sh").is_file()
        assert (target_dir / "github_advanced_helpers.sh").is_file()

    def test_hidden_files_not_installed(self, installer: Installer, collection_root: Path, target_dir: Path):
        installer.install_all(Collection(name="python", path=collection_root / "python"))
        assert not (target_dir / ".utils.sh").exists()

    def test_missing_collection_raises(self, installer: Installer, tmp_path: Path):
        with pytest.raises(NotFound):
            installer.install_all(Collection(name="ghost", path=tmp_path / "ghost"))

    def test_continues_after_deleted_script(self, installer: Installer, collection_root: Path, target_dir: Path):
        docker = Collection(name="docker", path=collection_root / "docker")
        listed = installer.catalog.list_scripts(docker)

        class _StaleCatalog(ScriptCatalog):
            def list_scripts(self, collection):
                return listed

        installer.catalog = _StaleCatalog(collection_root)
        (collection_root / "docker" / "docker_basic_helpers.sh").unlink()

        report = installer.install_all(docker)

        assert report.succeeded == len(listed) - 1
        assert report.failed == 1
        assert report.failures[0].script == "docker_basic_helpers.sh"
        assert report.status == "partial"
        assert (target_dir / "docker_helpers.sh").is_file()


class TestInstallReport:
    def test_status_failed_when_nothing_installed(self):
        report = InstallReport(collection="x")
        assert report.status == "ok"
        report.failures.append(InstallFailure(script="a.sh", path="/a.sh", error="nope"))
        assert report.status == "failed"

    def test_to_dict(self, installer: Installer, collection_root: Path):
        report = installer.install_all(Collection(name="github", path=collection_root / "github"))
        data = report.to_dict()
        assert data["collection"] == "github"
        assert data["succeeded"] == 2
        assert data["installed"][0]["name"] == "github_advanced_helpers.sh"
