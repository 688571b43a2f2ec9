import importlib.util
from pathlib import Path

import pytest


def _load_bump_version_module():
    script_path = Path(__file__).resolve().parents[2] / "scripts" / "bump_version.py"
    spec = importlib.util.spec_from_file_location("bump_version", script_path)
    assert spec is not None
    module = importlib.util.module_from_spec(spec)
    assert spec.loader is not None
    spec.loader.exec_module(module)
    return module


def _prepare_repo(root: Path) -> tuple[Path, Path]:
    (root / "lodestar").mkdir(parents=True)
    package_init = root / "lodestar" / "__init__.py"
    package_init.write_text('"""Pkg."""\n\n__version__ = "0.1.0"\n', encoding="utf-8")
    pyproject = root / "pyproject.toml"
    pyproject.write_text(
        '[project]\nname = "lodestar"\nversion = "0.1.0"\nrequires-python = ">=3.10"\n',
        encoding="utf-8",
    )
    return package_init, pyproject


def test_bump_version_updates_package_and_pyproject(tmp_path: Path):
    bump = _load_bump_version_module()
    package_init, pyproject = _prepare_repo(tmp_path)

    updated = bump._run(version="1.2.3", repo_root=tmp_path)

    assert updated == [package_init, pyproject]
    assert '__version__ = "1.2.3"' in package_init.read_text(encoding="utf-8")
    content = pyproject.read_text(encoding="utf-8")
    assert 'version = "1.2.3"' in content
    assert 'requires-python = ">=3.10"' in content


def test_bump_version_without_pyproject(tmp_path: Path):
    bump = _load_bump_version_module()
    package_init, pyproject = _prepare_repo(tmp_path)
    pyproject.unlink()

    updated = bump._run(version="2.0.0rc1", repo_root=tmp_path)

    assert updated == [package_init]
    assert '__version__ = "2.0.0rc1"' in package_init.read_text(encoding="utf-8")


def test_normalize_version_strips_prefix_and_validates():
    bump = _load_bump_version_module()
    assert bump._normalize_version(" v0.2.0 ") == "0.2.0"
    with pytest.raises(SystemExit):
        bump._normalize_version("latest")


def test_main_prints_usage_without_version(capsys):
    bump = _load_bump_version_module()
    assert bump.main(["bump_version.py"]) == 2
    assert "Usage" in capsys.readouterr().out
