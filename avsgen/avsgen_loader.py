"""
References to AviSynth scripts (``Import``) and plugins (``LoadPlugin``).

A references map goes from absolute path to ``"script"`` or ``"plugin"`` and
keeps insertion order, which is the order directives are emitted in.
"""
import os
from typing import Dict, Optional

from avsgen.avsgen_errors import (
    InvalidDirectoryError, InvalidPathError, NotAFileError, UnknownReferenceType
)
from avsgen.avsgen_logging import get_logger
from avsgen.avsgen_utils import is_valid_path, resolve_path

logger = get_logger(__name__)

SCRIPT = "script"
PLUGIN = "plugin"

_KINDS = {
    ".avs": SCRIPT,
    ".avsi": SCRIPT,
    ".dll": PLUGIN,
}


class Loader:
    """Owns the environment-wide references map."""

    def __init__(self):
        self.references: Dict[str, str] = {}

    def load(self, path: str, ignore_errors: bool = False,
             references: Optional[Dict[str, str]] = None) -> Optional[str]:
        """
        Reference a script or plugin file.

        Returns the reference kind, or None when the file was skipped because
        of ``ignore_errors``. Invalid characters in the path always raise.
        """
        path = resolve_path(path)
        if not is_valid_path(path):
            raise InvalidPathError(path)
        if references is None:
            references = self.references

        if not os.path.isfile(path):
            if ignore_errors:
                return None
            raise NotAFileError(path)

        kind = _KINDS.get(os.path.splitext(path)[1].lower())
        if kind is None:
            if ignore_errors:
                return None
            raise UnknownReferenceType(path)

        references[path] = kind
        logger.debug("reference_loaded", path=path, kind=kind)
        return kind

    def autoload(self, directory: str, references: Optional[Dict[str, str]] = None) -> None:
        """Reference every script and plugin directly inside a directory."""
        directory = resolve_path(directory)
        if not is_valid_path(directory):
            raise InvalidPathError(directory)
        try:
            entries = sorted(os.listdir(directory))
        except OSError as e:
            raise InvalidDirectoryError(directory) from e

        for entry in entries:
            self.load(os.path.join(directory, entry), True, references)
        logger.info("directory_autoloaded", directory=directory, entries=len(entries))
