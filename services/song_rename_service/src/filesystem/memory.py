"""In-memory file and directory handles.

Useful for tests and for hosts that stage files before writing them anywhere.
Entries keep insertion order, which is also their listing order.
"""

from .base import (
    DirectoryEntry,
    DirectoryHandle,
    EntryKind,
    FileHandle,
    PermissionMode,
    PermissionState,
)


class InMemoryFileHandle(FileHandle):
    """Handle to a file stored in an InMemoryDirectory."""

    def __init__(self, directory: "InMemoryDirectory", name: str) -> None:
        self.directory = directory
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    async def query_permission(self, mode: PermissionMode) -> PermissionState:
        return await self.directory.query_permission(mode)

    async def request_permission(self, mode: PermissionMode) -> PermissionState:
        return await self.directory.request_permission(mode)

    async def read(self) -> bytes:
        try:
            return self.directory.files[self._name]
        except KeyError:
            raise FileNotFoundError(f"'{self._name}' no longer exists") from None

    async def write(self, data: bytes) -> None:
        if self._name not in self.directory.files:
            raise FileNotFoundError(f"'{self._name}' no longer exists")
        self.directory.files[self._name] = bytes(data)

    def __repr__(self) -> str:
        return f"InMemoryFileHandle({self._name!r})"


class InMemoryDirectory(DirectoryHandle):
    """Directory whose files live in a dict of name to contents."""

    def __init__(
        self,
        name: str = "memory",
        files: dict[str, bytes] | None = None,
        subdirectories: list[str] | None = None,
        permission: PermissionState = PermissionState.GRANTED,
    ) -> None:
        """Initialize the directory.

        Args:
            name: Directory name
            files: Initial files, in listing order
            subdirectories: Names of empty child directories
            permission: State returned for every query and request
        """
        self._name = name
        self.files: dict[str, bytes] = dict(files or {})
        self.subdirectories = {sub: InMemoryDirectory(sub) for sub in subdirectories or []}
        self.permission = permission
        self.permission_requests: list[PermissionMode] = []

    @property
    def name(self) -> str:
        return self._name

    async def query_permission(self, mode: PermissionMode) -> PermissionState:
        return self.permission

    async def request_permission(self, mode: PermissionMode) -> PermissionState:
        self.permission_requests.append(mode)
        return self.permission

    async def list_entries(self) -> list[DirectoryEntry]:
        if self.permission is PermissionState.DENIED:
            raise PermissionError(f"Access to '{self._name}' was denied")
        entries = [
            DirectoryEntry(name, EntryKind.DIRECTORY, handle) for name, handle in self.subdirectories.items()
        ]
        entries.extend(
            DirectoryEntry(name, EntryKind.FILE, InMemoryFileHandle(self, name)) for name in self.files
        )
        return entries

    async def create_file(self, name: str, exclusive: bool = True) -> FileHandle:
        if exclusive and (name in self.files or name in self.subdirectories):
            raise FileExistsError(f"'{name}' already exists")
        self.files[name] = b""
        return InMemoryFileHandle(self, name)

    async def delete_entry(self, name: str) -> None:
        try:
            del self.files[name]
        except KeyError:
            raise FileNotFoundError(f"'{name}' does not exist") from None
