"""
Concrete record type for hosts that read files from disk.

The engine only depends on the Record protocol; FileRecord is what FileSource
produces and what the tests feed through the engine.
"""
import os
from typing import List, Optional


class FileRecord:
    """
    A file with contents and a location history.

    Assigning a new path keeps the previous locations, so ``history[0]`` is
    always the location the record was first read from, even after an
    upstream stage relocates it.

    Examples:
        >>> record = FileRecord("styles/main.scss", b"@include base")
        >>> record.path = "build/main.css"
        >>> record.history
        ['styles/main.scss', 'build/main.css']
    """

    def __init__(
        self,
        path: str,
        contents: Optional[bytes] = None,
        base: Optional[str] = None,
        history: Optional[List[str]] = None,
    ):
        """
        Args:
            path: Current location of the file
            contents: Raw file contents, None for directories or streams
            base: Root the file was read relative to, if any
            history: Earlier locations; ``path`` is appended if it differs
                from the last entry
        """
        self.history: List[str] = list(history or [])
        self.contents = contents
        self.base = base
        self.path = path

    @property
    def path(self) -> str:
        return self.history[-1]

    @path.setter
    def path(self, value: str) -> None:
        value = os.fspath(value)
        if not self.history or self.history[-1] != value:
            self.history.append(value)

    @property
    def relative(self) -> str:
        """Path relative to ``base``, or the path itself without a base."""
        if self.base is None:
            return self.path
        return os.path.relpath(self.path, self.base)

    def text(self, encoding: str = "utf-8") -> str:
        """Decode contents, replacing bytes that are not valid in ``encoding``."""
        if not self.contents:
            return ""
        return self.contents.decode(encoding, errors="replace")

    def clone(self) -> "FileRecord":
        """Copy with its own history list; bytes are immutable and shared."""
        return FileRecord(
            self.path,
            contents=self.contents,
            base=self.base,
            history=self.history,
        )

    def __repr__(self):
        return (f"FileRecord(path={self.path!r}, "
                f"size={len(self.contents) if self.contents is not None else None}, "
                f"history={len(self.history)})")
