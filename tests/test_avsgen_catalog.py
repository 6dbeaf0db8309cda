import os

import pytest

from avsgen.avsgen_catalog import load_catalog
from avsgen.avsgen_errors import (
    CatalogError, PathAmbiguity, RegistryDuplicateName, SignatureMissingFilename,
    SignatureMissingRequired, TypeMismatchAllowedValue
)
from avsgen.avsgen_registry import Registry


def test_core_catalog_size():
    assert load_catalog(Registry()) == 163


# Test cases: (test_id, filter, args, expected_line)
CORE_CALLS = [
    ("crop", "Crop", (0, 0, 320, 240, True), "Crop(0, 0, 320, 240, align=true)"),
    ("convert_named_skip", "ConvertToYV12", (None, True), "ConvertToYV12(interlaced=true)"),
    ("convert_matrix", "ConvertToRGB", ("Rec709",), 'ConvertToRGB(matrix="Rec709")'),
    ("colorbars", "ColorBars", (640, 480, "YV12"),
     'ColorBars(width=640, height=480, pixel_type="YV12")'),
    ("assumefps_preset", "AssumeFPS", ("ntsc_film",), 'AssumeFPS("ntsc_film")'),
    ("assumefps_ratio", "AssumeFPS", (24000, 1001), "AssumeFPS(24000, 1001)"),
    ("assumefps_variable", "AssumeFPS", ("fps_var",), "AssumeFPS(fps_var)"),
    ("addborders_color", "AddBorders", (8, 8, 8, 8, "black"), "AddBorders(8, 8, 8, 8, color=$000000)"),
    ("trim", "Trim", (0, 150), "Trim(0, 150)"),
    ("audiodub", "AudioDub", ("video", "audio"), "AudioDub(video, audio)"),
    ("conditional", "ConditionalFilter", ("a", "b", "AverageLuma()", "<", "20"),
     'ConditionalFilter(a, b, "AverageLuma()", "<", "20")'),
    ("overlay", "Overlay", ("logo", 10, 20), "Overlay(logo, x=10, y=20)"),
    ("amplify", "Amplify", (0.5, 1.5), "Amplify(0.5, 1.5)"),
    ("blankclip", "BlankClip", (), "BlankClip()"),
    ("flip", "FlipHorizontal", (), "FlipHorizontal()"),
    ("lanczos", "lanczosResize", (640, 360), "LanczosResize(640, 360)"),
]

@pytest.mark.parametrize(
    "test_id, name, args, expected",
    CORE_CALLS,
    ids=[t[0] for t in CORE_CALLS]
)
def test_core_filters(registry, test_id, name, args, expected):
    assert registry.resolve(name)(*args) == expected


def test_core_filter_paths(registry):
    expected = f'SuperEQ("{os.path.abspath("eq.feq")}")'
    assert registry.resolve("SuperEQ")("eq.feq") == expected
    expected = f'AviSource("{os.path.abspath("a.avi")}", "{os.path.abspath("b.avi")}", audio=false)'
    assert registry.resolve("AviSource")("a.avi", "b.avi", False) == expected


@pytest.mark.parametrize("name, args, error", [
    ("ConvertToRGB", ("rec709",), TypeMismatchAllowedValue),
    ("Crop", (0, 0, 320), SignatureMissingRequired),
    ("ImageWriter", (), SignatureMissingFilename),
    ("DirectShowSource", ("a.avi", "b.avi"), PathAmbiguity),
])
def test_core_filter_errors(registry, name, args, error):
    with pytest.raises(error):
        registry.resolve(name)(*args)


def test_core_categories(registry):
    groups = registry.categories()
    assert set(groups) == {"media", "adjustments", "blending", "geometry", "restoration",
                           "timeline", "interlace", "audio", "meta", "debug"}
    assert "Crop" in [p.name for p in groups["geometry"]]


def test_shared_types_reach_every_filter(registry):
    for name in ("AviSource", "OpenDMLSource", "AviFileSource", "SegmentedAviSource"):
        assert "FULL" in registry.resolve(name).signature.allowed_types


def test_custom_catalog(tmp_path):
    path = tmp_path / "extra.yaml"
    path.write_text(
        "filters:\n"
        "  custom:\n"
        "    - \"MyFilter(ri:)\"\n"
        "    - {name: \"Other\", params: \"q:x\", requires: \"other.avsi\"}\n"
    )
    reg = Registry()
    assert load_catalog(reg, str(path)) == 2
    assert reg.resolve("other").requires == ("other.avsi",)
    assert reg.resolve("other")("hi") == 'Other(x="hi")'
    assert reg.resolve("myfilter").category == "custom"


def test_catalog_duplicates_propagate(tmp_path):
    path = tmp_path / "dup.yaml"
    path.write_text("filters:\n  geometry:\n    - \"Crop(ri:)\"\n")
    reg = Registry()
    load_catalog(reg)
    with pytest.raises(RegistryDuplicateName):
        load_catalog(reg, str(path))


@pytest.mark.parametrize("content", [
    "[1, 2]\n",
    "filters: [\"Crop\"]\n",
    "filters:\n  bad: \"Crop\"\n",
    "filters:\n  bad:\n    - 42\n",
    "filters:\n  bad:\n    - {params: \"ri:\"}\n",
    "filters:\n  bad:\n    - {name: \"Foo\", colour: red}\n",
    "filters: {bad: [\n",
])
def test_malformed_catalogs(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content)
    with pytest.raises(CatalogError):
        load_catalog(Registry(), str(path))


def test_missing_catalog_file(tmp_path):
    with pytest.raises(CatalogError):
        load_catalog(Registry(), str(tmp_path / "missing.yaml"))
