"""Local disk implementation of the file and directory handles."""

import os
from pathlib import Path

import aiofiles
import aiofiles.os
import structlog

from .base import (
    DirectoryEntry,
    DirectoryHandle,
    EntryKind,
    FileHandle,
    PermissionMode,
    PermissionState,
)

logger = structlog.get_logger(__name__)


def _access_state(path: Path, mode: PermissionMode) -> PermissionState:
    flags = os.R_OK if mode is PermissionMode.READ else os.R_OK | os.W_OK
    if path.is_dir():
        flags |= os.X_OK
    return PermissionState.GRANTED if os.access(path, flags) else PermissionState.DENIED


class LocalFileHandle(FileHandle):
    """File on the local disk."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @property
    def name(self) -> str:
        return self.path.name

    async def query_permission(self, mode: PermissionMode) -> PermissionState:
        return _access_state(self.path, mode)

    async def request_permission(self, mode: PermissionMode) -> PermissionState:
        # Local disk has no interactive grant; the answer is whatever the OS says.
        return _access_state(self.path, mode)

    async def read(self) -> bytes:
        async with aiofiles.open(self.path, "rb") as f:
            data: bytes = await f.read()
        return data

    async def write(self, data: bytes) -> None:
        async with aiofiles.open(self.path, "wb") as f:
            await f.write(data)

    def __repr__(self) -> str:
        return f"LocalFileHandle({str(self.path)!r})"


class LocalDirectoryHandle(DirectoryHandle):
    """Directory on the local disk.

    Entries are listed sorted by name so repeated scans of an unchanged folder
    produce the same order.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    @property
    def name(self) -> str:
        return self.path.name

    async def query_permission(self, mode: PermissionMode) -> PermissionState:
        if not self.path.is_dir():
            return PermissionState.DENIED
        return _access_state(self.path, mode)

    async def request_permission(self, mode: PermissionMode) -> PermissionState:
        return await self.query_permission(mode)

    async def list_entries(self) -> list[DirectoryEntry]:
        entries: list[DirectoryEntry] = []
        for name in sorted(await aiofiles.os.listdir(self.path)):
            child = self.path / name
            if await aiofiles.os.path.isdir(child):
                entries.append(DirectoryEntry(name, EntryKind.DIRECTORY, LocalDirectoryHandle(child)))
            elif await aiofiles.os.path.isfile(child):
                entries.append(DirectoryEntry(name, EntryKind.FILE, LocalFileHandle(child)))
            else:
                logger.debug("Skipping special directory entry", path=str(child))
        return entries

    async def create_file(self, name: str, exclusive: bool = True) -> FileHandle:
        path = self.path / name
        async with aiofiles.open(path, "xb" if exclusive else "wb"):
            pass
        return LocalFileHandle(path)

    async def delete_entry(self, name: str) -> None:
        await aiofiles.os.remove(self.path / name)

    def __repr__(self) -> str:
        return f"LocalDirectoryHandle({str(self.path)!r})"
