"""Checkout of per-language workspaces.

Every language has one shared project skeleton on disk. Two modes keep
concurrent requests from seeing each other's source:

* ``serialized``: executions against the same skeleton take turns behind a
  per-language lock.
* ``isolated``: each execution runs in a throwaway copy of the skeleton.
"""
import asyncio
import logging
import shutil
import tempfile
from contextlib import asynccontextmanager
from dataclasses import replace
from pathlib import Path
from typing import AsyncIterator

from playground.core.errors import IoFailure
from playground.languages import LanguageProfile

logger = logging.getLogger(__name__)


def _clone(profile: LanguageProfile, tmp_root: str | None) -> Path:
    root = Path(tempfile.mkdtemp(prefix=f"{profile.name}_", dir=tmp_root))
    dest = root / profile.workspace.name
    try:
        shutil.copytree(profile.workspace, dest, symlinks=True)
    except OSError:
        shutil.rmtree(root, ignore_errors=True)
        raise
    return dest


def _write(path: Path, data: bytes) -> None:
    with open(path, "wb") as f:
        f.write(data)


async def write_source(profile: LanguageProfile, code: str) -> None:
    """Overwrite the profile's source file with ``code``."""
    try:
        # encode up front so unencodable text never truncates the file
        data = code.encode("utf-8")
        await asyncio.to_thread(_write, profile.source_path, data)
    except (OSError, UnicodeError) as e:
        logger.error("Failed to write %s: %s", profile.source_path, e)
        raise IoFailure(str(e)) from e


class WorkspaceManager:
    def __init__(self, mode: str = "serialized", tmp_root: str | None = None):
        if mode not in ("serialized", "isolated"):
            raise ValueError(f"unknown workspace mode {mode!r}")
        self.mode = mode
        self.tmp_root = tmp_root
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, profile: LanguageProfile) -> asyncio.Lock:
        return self._locks.setdefault(profile.name, asyncio.Lock())

    @asynccontextmanager
    async def checkout(self, profile: LanguageProfile) -> AsyncIterator[LanguageProfile]:
        """Yield a profile whose workspace is reserved for the caller."""
        if self.mode == "serialized":
            async with self._lock_for(profile):
                yield profile
            return

        try:
            workspace = await asyncio.to_thread(_clone, profile, self.tmp_root)
        except OSError as e:
            logger.error("Failed to copy workspace %s: %s", profile.workspace, e)
            raise IoFailure(str(e)) from e
        logger.debug("Cloned %s workspace into %s", profile.name, workspace)
        try:
            yield replace(profile, workspace=workspace)
        finally:
            await asyncio.to_thread(shutil.rmtree, workspace.parent, True)
