import pytest

from avsgen.avsgen_config import AvsgenConfig
from avsgen.avsgen_errors import CatalogError, InvalidDirectoryError
from avsgen.avsgen_loader import PLUGIN, SCRIPT
from avsgen.avsgen_runtime import Environment


def test_core_catalog_is_loaded(env):
    assert len(env.registry) == 163
    assert "crop" in env.registry


def test_empty_environment(tmp_path):
    env = Environment(AvsgenConfig(load_core=False, temp_dir=str(tmp_path)))
    assert len(env.registry) == 0
    assert env.loader.references == {}


def test_extra_catalogs(tmp_path):
    catalog = tmp_path / "extra.yaml"
    catalog.write_text('filters:\n  custom:\n    - "Sharpen2(rd:, d:)"\n')
    env = Environment(AvsgenConfig(catalogs=(str(catalog),), temp_dir=str(tmp_path)))
    assert len(env.registry) == 164
    assert env.script().sharpen2(0.5).raw_code == "Sharpen2(0.5)\n"


def test_missing_catalog_fails(tmp_path):
    with pytest.raises(CatalogError):
        Environment(AvsgenConfig(catalogs=(str(tmp_path / "nope.yaml"),)))


def test_autoload_dirs(plugins_dir, tmp_path):
    env = Environment(AvsgenConfig(autoload_dirs=(str(plugins_dir),), load_core=False,
                                   temp_dir=str(tmp_path)))
    assert env.loader.references == {
        str(plugins_dir / "DeDup.dll"): PLUGIN,
        str(plugins_dir / "colors_rgb.avsi"): SCRIPT,
    }
    assert env.script().all_references() == env.loader.references


def test_missing_autoload_dir_fails(tmp_path):
    with pytest.raises(InvalidDirectoryError):
        Environment(AvsgenConfig(autoload_dirs=(str(tmp_path / "nope"),), load_core=False))


def test_environments_are_isolated(env, tmp_path, plugins_dir):
    other = Environment(AvsgenConfig(temp_dir=str(tmp_path / "other")))
    env.add_plugin("OnlyHere", lambda: "OnlyHere()")
    env.load(str(plugins_dir / "DeDup.dll"))
    assert "onlyhere" not in other.registry
    assert other.script().all_references() == {}


def test_storage_follows_config(tmp_path):
    env = Environment(AvsgenConfig(temp_dir=str(tmp_path), temp_prefix="renders",
                                   load_core=False))
    assert env.storage.base_dir == str(tmp_path)
    assert env.storage.prefix == "renders"
