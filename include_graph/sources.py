"""
Record sources for hosts that read straight from a directory.

FileSource plays the part of the host pipeline's glob reader: it yields one
FileRecord per matching file, in a stable order, with ``base`` set to the
directory it was read from.
"""
import logging
from pathlib import Path
from typing import Iterator

from .protocols import RecordSource
from .records import FileRecord

logger = logging.getLogger(__name__)


class FileSource(RecordSource):
    """
    Reads files under a directory matching a glob pattern.

    Examples:
        >>> source = FileSource("templates", pattern="*.pug", recursive=True)
        >>> [record.relative for record in source.iter_records()]
        ['index.pug', 'layouts/base.pug']
    """

    def __init__(self, root: Path, pattern: str = '*', recursive: bool = False):
        """
        Args:
            root: Directory to read from
            pattern: Glob pattern matched against file names (or relative
                     paths when it contains a separator)
            recursive: If True, search subdirectories recursively

        Raises:
            ValueError: If ``root`` is not a directory
        """
        self.root = Path(root)
        self.pattern = pattern
        self.recursive = recursive

        if not self.root.is_dir():
            raise ValueError(f"Input directory does not exist: {self.root}")

    def iter_records(self) -> Iterator[FileRecord]:
        """
        Yield a FileRecord for each matching regular file, sorted by path.

        Files that cannot be read are skipped with a warning.
        """
        matches = self.root.rglob(self.pattern) if self.recursive else self.root.glob(self.pattern)

        for filepath in sorted(p for p in matches if p.is_file()):
            try:
                contents = filepath.read_bytes()
            except OSError as e:
                logger.warning(f"Skipping unreadable file {filepath}: {e}")
                continue

            yield FileRecord(str(filepath), contents=contents, base=str(self.root))
