from __future__ import annotations

import time
from functools import total_ordering


@total_ordering
class FilesystemEntry:
    """Payload stored in a directory tree node.

    Entries order and compare by ``name`` only; ``size`` and the timestamps
    are opaque metadata. Timestamps are ``time.time()`` floats.
    """

    __slots__ = ("name", "size", "created_at", "modified_at")

    is_dir: bool = False

    def __init__(self, name: str, size: int = 0) -> None:
        self.name: str = name
        self.size: int = size
        now = time.time()
        self.created_at: float = now
        self.modified_at: float = now

    @property
    def full_name(self) -> str:
        """The name a path segment must match to select this entry."""
        return self.name

    def rename(self, new_name: str) -> str:
        """Replace the name, refresh ``modified_at`` and return the old full name."""
        old = self.full_name
        self.name = new_name
        self.touch()
        return old

    def touch(self) -> None:
        self.modified_at = time.time()

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, FilesystemEntry):
            return NotImplemented
        return self.name == other.name

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, FilesystemEntry):
            return NotImplemented
        return self.name < other.name

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.full_name!r})"


class Directory(FilesystemEntry):
    __slots__ = ()

    is_dir = True

    def __str__(self) -> str:
        return f"{self.name}/"


class File(FilesystemEntry):
    __slots__ = ("extension",)

    def __init__(self, name: str, extension: str = "", size: int = 0) -> None:
        super().__init__(name, size)
        self.extension: str = extension

    @classmethod
    def from_filename(cls, filename: str, size: int = 0) -> File:
        """Build a file from ``stem.ext``; a name without exactly one dot has no extension."""
        stem, extension = split_filename(filename)
        if extension is None:
            return cls(filename, "", size)
        return cls(stem, extension, size)

    @property
    def full_name(self) -> str:
        if self.extension:
            return f"{self.name}.{self.extension}"
        return self.name

    def rename(self, new_name: str) -> str:
        """Rename; ``stem.ext`` (exactly one dot) also replaces the extension."""
        old = self.full_name
        stem, extension = split_filename(new_name)
        if extension is None:
            self.name = new_name
        else:
            self.name = stem
            self.extension = extension
        self.touch()
        return old

    def __str__(self) -> str:
        return self.full_name


def split_filename(filename: str) -> tuple[str, str | None]:
    """Split ``stem.ext`` into its parts; any other shape yields ``(filename, None)``."""
    parts = filename.split(".")
    if len(parts) != 2:
        return filename, None
    return parts[0], parts[1]
