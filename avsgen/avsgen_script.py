"""
Script objects: an accumulating buffer of AviSynth code plus the scripts and
plugins it references.

Registered plugins are reachable as attributes, case-insensitively::

    script = env.script()
    script.AviSource("clip.avi").crop(8, 0, -8, 0).lanczosResize(640, 360)
"""
import hashlib
from typing import Dict, Optional

import pystache

from avsgen.avsgen_loader import PLUGIN, SCRIPT, Loader
from avsgen.avsgen_registry import Registry
from avsgen.avsgen_system import TempStorage

_DIRECTIVES = {SCRIPT: "Import", PLUGIN: "LoadPlugin"}

_FULL_CODE_TEMPLATE = '{{#references}}{{directive}}("{{path}}")\n{{/references}}{{body}}'


class Script:
    def __init__(self, code: str = "", *, registry: Optional[Registry] = None,
                 loader: Optional[Loader] = None, storage: Optional[TempStorage] = None):
        self.raw_code = code or ""
        self.references: Dict[str, str] = {}
        self._registry = registry if registry is not None else Registry()
        self._loader = loader if loader is not None else Loader()
        self._storage = storage if storage is not None else TempStorage()
        self._renderer = pystache.Renderer(escape=lambda u: u)

    def __getattr__(self, name: str):
        if name.startswith("_"):
            raise AttributeError(name)
        plugin = self._registry.lookup(name)
        if plugin is None:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute or plugin {name!r}")

        def invoke(*args):
            line = plugin(*args)
            # all requires must load before the script is touched
            required: Dict[str, str] = {}
            for path in plugin.requires:
                self._loader.load(path, False, required)
            self.references.update(required)
            if line is not None:
                self.code(line)
            return self

        invoke.__name__ = plugin.name
        return invoke

    def __repr__(self):
        return f"<Script md5={self.md5()}>"

    # =================================================================
    # References
    # =================================================================

    def load(self, path: str, ignore_errors: bool = False) -> Optional[str]:
        """Reference a script or plugin for this script only."""
        return self._loader.load(path, ignore_errors, self.references)

    def autoload(self, directory: str) -> None:
        self._loader.autoload(directory, self.references)

    def all_references(self) -> Dict[str, str]:
        """Environment-wide references overlaid with this script's own."""
        refs = dict(self._loader.references)
        refs.update(self.references)
        return refs

    # =================================================================
    # Code
    # =================================================================

    def code(self, text: str) -> "Script":
        """Append one or more lines, keeping the buffer newline-terminated."""
        if self.raw_code and not self.raw_code.endswith("\n"):
            self.raw_code += "\n"
        self.raw_code += text + "\n"
        return self

    def full_code(self) -> str:
        references = [
            {"directive": _DIRECTIVES[kind], "path": path}
            for path, kind in self.all_references().items()
        ]
        body = self.raw_code + "\n" if self.raw_code.strip() else ""
        return self._renderer.render(_FULL_CODE_TEMPLATE,
                                     {"references": references, "body": body})

    def md5(self) -> str:
        return hashlib.md5(self.full_code().encode("utf-8")).hexdigest()

    def get_path(self) -> str:
        """
        Path of a file holding this script's full code.

        The file is named after the MD5 of its content, so a returned path
        never changes content even if the script is edited afterwards.
        """
        sub = f"scripts/{self.md5()}.avs"
        return self._storage.temp(sub) or self._storage.temp_write(sub, self.full_code())
