"""Filesystem handles for the song rename service."""

from .base import (
    DirectoryEntry,
    DirectoryHandle,
    EntryKind,
    FileHandle,
    PermissionMode,
    PermissionState,
    ResourceHandle,
)
from .local import LocalDirectoryHandle, LocalFileHandle
from .memory import InMemoryDirectory, InMemoryFileHandle

__all__ = [
    "DirectoryEntry",
    "DirectoryHandle",
    "EntryKind",
    "FileHandle",
    "InMemoryDirectory",
    "InMemoryFileHandle",
    "LocalDirectoryHandle",
    "LocalFileHandle",
    "PermissionMode",
    "PermissionState",
    "ResourceHandle",
]
