import pytest

from avsgen.avsgen_binder import CallBinder
from avsgen.avsgen_errors import RegistryDuplicateName, RegistryReservedName, RegistryUnknownName
from avsgen.avsgen_registry import Registry, generate_aliases


@pytest.mark.parametrize("name, aliases", [
    ("FooBar", ["fooBar", "FooBar"]),
    ("pluginOne", ["pluginOne"]),
    ("Plugintwo", ["Plugintwo"]),
    ("pluginthree", []),
])
def test_generate_aliases(name, aliases):
    assert generate_aliases(name) == aliases


def test_register_and_lookup():
    reg = Registry()
    plugin = reg.register("FooBar", lambda: "FooBar()")
    assert reg.lookup("foobar") is plugin
    assert reg.lookup("FOOBAR") is plugin
    assert reg.resolve("fooBar") is plugin
    assert reg.resolve_aliases("foobar") == ["fooBar", "FooBar"]
    assert plugin() == "FooBar()"


def test_lookup_missing():
    reg = Registry()
    assert reg.lookup("nothing") is None
    with pytest.raises(RegistryUnknownName):
        reg.resolve("nothing")


def test_duplicate_names_are_rejected_case_insensitively():
    reg = Registry()
    reg.register("FooBar", lambda: None)
    with pytest.raises(RegistryDuplicateName):
        reg.register("foobar", lambda: None)


@pytest.mark.parametrize("name", ["code", "fullCode", "Full_Code", "getPath", "MD5",
                                  "allReferences", "raw_code", "load", "AutoLoad"])
def test_reserved_names(name):
    with pytest.raises(RegistryReservedName):
        Registry().register(name, lambda: None)


def test_new_plugin_compiles_signature():
    reg = Registry()
    plugin = reg.new_plugin("Trim(ri:, ri:, b:pad)", category="timeline")
    assert plugin.name == "Trim"
    assert isinstance(plugin.code, CallBinder)
    assert str(plugin.signature) == "Trim(ri:, ri:, b:pad)"
    assert plugin.category == "timeline"
    assert reg.resolve("trim")(0, 150, True) == "Trim(0, 150, pad=true)"


def test_new_plugin_with_separate_params_and_requires():
    reg = Registry()
    plugin = reg.new_plugin("Deinterlace", "v:, t:mode", "fast, slow", requires=["qtgmc.avsi"])
    assert plugin.requires == ("qtgmc.avsi",)
    assert plugin.signature.allowed_types == ("fast", "slow")
    assert plugin(None, "fast") == 'Deinterlace(mode="fast")'


def test_container_protocol():
    reg = Registry()
    reg.register("Alpha", lambda: None)
    reg.register("Beta", lambda: None)
    assert "alpha" in reg
    assert "BETA" in reg
    assert "gamma" not in reg
    assert 42 not in reg
    assert len(reg) == 2
    assert list(reg) == ["alpha", "beta"]
    assert reg["Alpha"].name == "Alpha"


def test_categories():
    reg = Registry()
    reg.new_plugin("Crop(ri:, ri:, ri:, ri:)", category="geometry")
    reg.new_plugin("TurnLeft", category="geometry")
    reg.register("Custom", lambda: None)
    groups = reg.categories()
    assert [p.name for p in groups["geometry"]] == ["Crop", "TurnLeft"]
    assert [p.name for p in groups[None]] == ["Custom"]


def test_registries_are_independent():
    first, second = Registry(), Registry()
    first.register("Only", lambda: None)
    assert "only" not in second
