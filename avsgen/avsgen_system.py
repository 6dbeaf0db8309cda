"""
Per-process temporary storage for generated script files.

Files live under ``<base>/<prefix>-<pid>/``; generated scripts go to its
``scripts/`` subfolder. The folder is removed when the process exits.
"""
import atexit
import os
import shutil
import tempfile
from typing import Optional

from avsgen.avsgen_logging import get_logger

logger = get_logger(__name__)


class TempStorage:
    def __init__(self, prefix: str = "avsgen", base_dir: Optional[str] = None):
        self.prefix = prefix
        self.base_dir = base_dir
        self.initialized = False
        self._exit_hook = False

    @property
    def root(self) -> str:
        base = self.base_dir or tempfile.gettempdir()
        return os.path.join(base, f"{self.prefix}-{os.getpid()}")

    def path(self, sub: Optional[str] = None) -> str:
        return os.path.abspath(os.path.join(self.root, sub)) if sub else self.root

    def init(self) -> None:
        """Create the storage folders. Safe to call repeatedly."""
        if self.initialized:
            return
        os.makedirs(self.path("scripts"), exist_ok=True)
        if not self._exit_hook:
            atexit.register(self.clean_up)
            self._exit_hook = True
        self.initialized = True
        logger.debug("temp_storage_initialized", root=self.root)

    def clean_up(self) -> None:
        """Remove the storage folder. Does nothing if it was never created."""
        if not self.initialized:
            return
        shutil.rmtree(self.root, ignore_errors=True)
        self.initialized = False
        logger.debug("temp_storage_removed", root=self.root)

    def temp(self, sub: str) -> Optional[str]:
        """Absolute path of an existing entry in the storage, or None."""
        self.init()
        path = self.path(sub)
        return path if os.path.exists(path) else None

    def temp_write(self, sub: str, content: str) -> str:
        self.init()
        path = self.path(sub)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        return path
