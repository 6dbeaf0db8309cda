"""
Loads filter catalogs: YAML files of signatures grouped by category.

    filters:
      geometry:
        - "Crop(ri:, ri:, ri:, ri:, b:align)"
        - {name: "ConvertToRGB", params: "t:matrix, b:interlaced", types: "Rec601, Rec709"}

Top-level keys other than ``filters`` only hold YAML anchors and are ignored.
"""
from pathlib import Path
from typing import Optional

import yaml

from avsgen.avsgen_errors import CatalogError
from avsgen.avsgen_logging import get_logger
from avsgen.avsgen_registry import Registry

logger = get_logger(__name__)

CORE_CATALOG = str(Path(__file__).parent / "catalog" / "core_filters.yaml")

_ENTRY_KEYS = {"signature", "name", "params", "types", "requires"}


def _read_catalog(path: Optional[str]):
    if path is None:
        path = CORE_CATALOG
    try:
        with open(path, encoding="utf-8") as f:
            return yaml.safe_load(f), str(path)
    except OSError as e:
        raise CatalogError(f"cannot read catalog {path}", context={"path": str(path)}) from e
    except yaml.YAMLError as e:
        raise CatalogError(f"bad YAML in catalog {path}", context={"path": str(path)}) from e


def _register_entry(registry: Registry, entry, category: str, source: str):
    if isinstance(entry, str):
        return registry.new_plugin(entry, category=category)

    if not isinstance(entry, dict):
        raise CatalogError(f"bad catalog entry {entry!r} in {source}",
                           context={"category": category})
    unknown = set(entry) - _ENTRY_KEYS
    if unknown:
        raise CatalogError(f"unknown keys {sorted(unknown)} in {source}",
                           context={"category": category, "entry": entry})
    name = entry.get("signature") or entry.get("name")
    if not isinstance(name, str):
        raise CatalogError(f"catalog entry without a name in {source}",
                           context={"category": category, "entry": entry})
    requires = entry.get("requires") or ()
    if isinstance(requires, str):
        requires = (requires,)
    return registry.new_plugin(name, entry.get("params"), entry.get("types"),
                               requires=requires, category=category)


def load_catalog(registry: Registry, path: Optional[str] = None) -> int:
    """
    Register every filter of a catalog file (the core catalog by default).

    Returns the number of filters registered.
    """
    data, source = _read_catalog(path)
    if not isinstance(data, dict) or not isinstance(data.get("filters"), dict):
        raise CatalogError(f"catalog {source} has no filters mapping", context={"path": source})

    count = 0
    for category, entries in data["filters"].items():
        if not isinstance(entries, list):
            raise CatalogError(f"category {category} in {source} must be a list",
                               context={"category": category})
        for entry in entries:
            _register_entry(registry, entry, str(category), source)
            count += 1

    logger.info("catalog_loaded", source=source, filters=count)
    return count
