"""
The Environment: one registry, one references map and one temp storage,
shared by every script it creates.
"""
from typing import Callable, Optional, Sequence

from avsgen.avsgen_catalog import load_catalog
from avsgen.avsgen_config import AvsgenConfig
from avsgen.avsgen_loader import Loader
from avsgen.avsgen_logging import get_logger
from avsgen.avsgen_registry import Plugin, Registry
from avsgen.avsgen_script import Script
from avsgen.avsgen_system import TempStorage

logger = get_logger(__name__)


class Environment:
    def __init__(self, config: Optional[AvsgenConfig] = None):
        self.config = config or AvsgenConfig()
        self.registry = Registry()
        self.loader = Loader()
        self.storage = TempStorage(self.config.temp_prefix, self.config.temp_dir)

        if self.config.load_core:
            load_catalog(self.registry)
        for path in self.config.catalogs:
            load_catalog(self.registry, path)
        for directory in self.config.autoload_dirs:
            self.loader.autoload(directory)
        logger.debug("environment_ready", plugins=len(self.registry),
                     references=len(self.loader.references))

    def script(self, code: str = "") -> Script:
        return Script(code, registry=self.registry, loader=self.loader, storage=self.storage)

    def new_plugin(self, name: str, params=None, types=None, requires: Sequence[str] = (),
                   category: Optional[str] = None) -> Plugin:
        return self.registry.new_plugin(name, params, types, requires=requires,
                                        category=category)

    def add_plugin(self, name: str, code: Callable[..., Optional[str]],
                   requires: Sequence[str] = (), category: Optional[str] = None) -> Plugin:
        return self.registry.register(name, code, requires=requires, category=category)

    def load(self, path: str, ignore_errors: bool = False) -> Optional[str]:
        """Reference a script or plugin for every script of this environment."""
        return self.loader.load(path, ignore_errors)

    def autoload(self, directory: str) -> None:
        self.loader.autoload(directory)
