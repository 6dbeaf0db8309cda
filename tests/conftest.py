import pytest

from avsgen.avsgen_catalog import load_catalog
from avsgen.avsgen_config import AvsgenConfig
from avsgen.avsgen_logging import configure_logging
from avsgen.avsgen_registry import Registry
from avsgen.avsgen_runtime import Environment

configure_logging("WARNING", include_timestamp=False)


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch):
    monkeypatch.delenv("AVSGEN_CONFIG", raising=False)


@pytest.fixture
def registry():
    reg = Registry()
    load_catalog(reg)
    return reg


@pytest.fixture
def env(tmp_path):
    return Environment(AvsgenConfig(temp_dir=str(tmp_path / "temp")))


@pytest.fixture
def plugins_dir(tmp_path):
    """A folder of fake references: one script, one plugin, one stray file."""
    folder = tmp_path / "plugins"
    folder.mkdir()
    (folder / "colors_rgb.avsi").write_text('Import("colors.avsi")\n')
    (folder / "DeDup.dll").write_bytes(b"MZ")
    (folder / "colors_rgb.txt").write_text("white = $FFFFFF\n")
    (folder / "nested").mkdir()
    return folder
