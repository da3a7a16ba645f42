"""Abstract file and directory handles used by the rename core."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class PermissionMode(Enum):
    """Access modes that can be queried or requested on a handle."""

    READ = "read"
    READWRITE = "readwrite"


class PermissionState(Enum):
    """Result of a permission query or request."""

    GRANTED = "granted"
    DENIED = "denied"
    PROMPT = "prompt"


class EntryKind(Enum):
    """Kind of a directory entry."""

    FILE = "file"
    DIRECTORY = "directory"


class ResourceHandle(ABC):
    """Opaque ownership token for a file or directory."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the resource within its parent directory."""

    @abstractmethod
    async def query_permission(self, mode: PermissionMode) -> PermissionState:
        """Return the current permission state without prompting."""

    @abstractmethod
    async def request_permission(self, mode: PermissionMode) -> PermissionState:
        """Ask for permission, prompting the user where the platform requires it."""


class FileHandle(ResourceHandle):
    """Handle to a single file."""

    @abstractmethod
    async def read(self) -> bytes:
        """Read the whole file contents."""

    @abstractmethod
    async def write(self, data: bytes) -> None:
        """Replace the file contents with data."""


@dataclass(frozen=True)
class DirectoryEntry:
    """A single entry returned by a directory listing."""

    name: str
    kind: EntryKind
    handle: ResourceHandle


class DirectoryHandle(ResourceHandle):
    """Handle to a directory."""

    @abstractmethod
    async def list_entries(self) -> list[DirectoryEntry]:
        """List the direct children of the directory."""

    @abstractmethod
    async def create_file(self, name: str, exclusive: bool = True) -> FileHandle:
        """Create an empty file.

        Args:
            name: File name inside this directory
            exclusive: Fail with FileExistsError if the name is already taken

        Returns:
            Handle to the created file
        """

    @abstractmethod
    async def delete_entry(self, name: str) -> None:
        """Delete a file from this directory."""
