"""
The plugin registry: callables that generate AviSynth code, keyed by
lower-cased name and exposed as members of script objects.
"""
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from avsgen.avsgen_binder import CallBinder
from avsgen.avsgen_datatypes import Signature
from avsgen.avsgen_errors import RegistryDuplicateName, RegistryReservedName, RegistryUnknownName
from avsgen.avsgen_logging import get_logger
from avsgen.avsgen_signature import compile_signature

logger = get_logger(__name__)

# Script members; a plugin may not shadow them under any casing or underscore spelling.
RESERVED_NAMES = frozenset({
    "code", "full_code", "load", "autoload", "references", "all_references",
    "raw_code", "md5", "get_path",
})


def _normalize(name: str) -> str:
    return name.lower().replace("_", "")


def generate_aliases(name: str) -> List[str]:
    """Casing aliases under which a plugin is documented.

    A name starting upper-case with a later capital (``FooBar``) also gets its
    lower-first spelling; any name with a capital keeps its own spelling.
    """
    aliases = []
    if re.match(r'^[A-Z].*[A-Z]', name):
        aliases.append(name[0].lower() + name[1:])
    if re.match(r'^.*[A-Z]', name):
        aliases.append(name)
    return aliases


@dataclass
class Plugin:
    """A registered code generator.

    ``code`` returns one line of AviSynth source, or None for no output.
    ``requires`` lists script/plugin files that must be referenced by any
    script invoking it.
    """
    name: str
    code: Callable[..., Optional[str]]
    aliases: List[str] = field(default_factory=list)
    signature: Optional[Signature] = None
    requires: Tuple[str, ...] = ()
    category: Optional[str] = None

    def __call__(self, *args) -> Optional[str]:
        return self.code(*args)


class Registry:
    """Insert-once map of plugins. Lookups are case-insensitive."""

    def __init__(self, reserved: Sequence[str] = RESERVED_NAMES):
        self._plugins: Dict[str, Plugin] = {}
        self._reserved = frozenset(_normalize(name) for name in reserved)

    def register(self, name: str, code: Callable[..., Optional[str]],
                 signature: Optional[Signature] = None, requires: Sequence[str] = (),
                 category: Optional[str] = None) -> Plugin:
        key = name.lower()
        if _normalize(name) in self._reserved:
            raise RegistryReservedName(name)
        if key in self._plugins:
            raise RegistryDuplicateName(name)
        plugin = Plugin(name, code, generate_aliases(name), signature, tuple(requires), category)
        self._plugins[key] = plugin
        logger.debug("plugin_registered", name=name, category=category,
                     requires=list(plugin.requires))
        return plugin

    def new_plugin(self, name: str, params=None, types=None, requires: Sequence[str] = (),
                   category: Optional[str] = None) -> Plugin:
        """Compile a signature and register its call binder under the signature's name."""
        signature = compile_signature(name, params, types)
        return self.register(signature.name, CallBinder(signature), signature,
                             requires, category)

    def lookup(self, name: str) -> Optional[Plugin]:
        return self._plugins.get(name.lower())

    def resolve(self, name: str) -> Plugin:
        plugin = self.lookup(name)
        if plugin is None:
            raise RegistryUnknownName(name)
        return plugin

    def resolve_aliases(self, name: str) -> List[str]:
        return list(self.resolve(name).aliases)

    def categories(self) -> Dict[Optional[str], List[Plugin]]:
        grouped: Dict[Optional[str], List[Plugin]] = {}
        for plugin in self._plugins.values():
            grouped.setdefault(plugin.category, []).append(plugin)
        return grouped

    def __contains__(self, name) -> bool:
        return isinstance(name, str) and name.lower() in self._plugins

    def __getitem__(self, name: str) -> Plugin:
        return self.resolve(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._plugins)

    def __len__(self) -> int:
        return len(self._plugins)
