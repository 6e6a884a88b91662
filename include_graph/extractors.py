"""
Dependency reference extraction.

Extracts the raw references a record declares, in declaration order:
- PatternExtractor: repeatedly applies a regular expression, one reference
  per match taken from its first capturing group
- FunctionExtractor: delegates to a caller-supplied function

References are returned as written. Resolving them against the including
record's directory is the engine's job.
"""
import re
from typing import Callable, Iterable, List, Pattern, Union

from .protocols import Extractor, Record


# ``@include path`` on its own line
INCLUDE_DIRECTIVE = re.compile(r'^@include\s+(.+?)\s*$', re.MULTILINE)

# Sass/SCSS ``@import "path";`` (single path per statement)
SCSS_IMPORT = re.compile(r'''^\s*@import\s+['"]([^'"]+)['"]''', re.MULTILINE)

# Pug/Jade ``include path`` and ``extends path``
PUG_INCLUDE = re.compile(r'^\s*(?:include|extends)\s+(\S+)', re.MULTILINE)


def _record_text(record: Record) -> str:
    text = getattr(record, 'text', None)
    if callable(text):
        return text()
    return (record.contents or b"").decode('utf-8', errors='replace')


class PatternExtractor(Extractor):
    """
    Extracts one reference per match of a regular expression.

    Matching restarts after the end of the previous match; finditer advances
    past zero-width matches so patterns like ``(x*)`` terminate. Matches where
    the first group did not participate are skipped.

    Examples:
        >>> extractor = PatternExtractor(INCLUDE_DIRECTIVE)
        >>> extractor.extract(FileRecord("a", b"@include b\\n@include c"))
        ['b', 'c']
    """

    def __init__(self, pattern: Union[str, Pattern[str]]):
        """
        Args:
            pattern: Compiled pattern (str or bytes), or a string compiled
                     with re.MULTILINE

        Raises:
            ValueError: If the pattern is invalid or has no capturing group
        """
        if isinstance(pattern, str):
            try:
                pattern = re.compile(pattern, re.MULTILINE)
            except re.error as e:
                raise ValueError(f"Invalid extraction pattern {pattern!r}: {e}") from e

        if pattern.groups < 1:
            raise ValueError(
                f"Extraction pattern {pattern.pattern!r} needs a capturing group "
                "around the dependency reference"
            )

        self.pattern = pattern

    def extract(self, record: Record) -> List[str]:
        """
        Extract references from the record's contents.

        Text patterns search the contents decoded as UTF-8. Bytes patterns
        search the raw contents and each captured reference is decoded.

        Args:
            record: Record whose contents are searched

        Returns:
            List of references in match order, duplicates kept
        """
        if isinstance(self.pattern.pattern, bytes):
            return [
                match.group(1).decode('utf-8', errors='replace')
                for match in self.pattern.finditer(record.contents or b"")
                if match.group(1) is not None
            ]

        return [
            match.group(1)
            for match in self.pattern.finditer(_record_text(record))
            if match.group(1) is not None
        ]

    def __repr__(self):
        return f"PatternExtractor({self.pattern.pattern!r})"


class FunctionExtractor(Extractor):
    """
    Delegates extraction to a function receiving the full record.

    The function may return any iterable of strings, a single string for
    one reference, or None for "no references". Exceptions raised by the function propagate to the caller.
    """

    def __init__(self, func: Callable[[Record], Iterable[str]]):
        self.func = func

    def extract(self, record: Record) -> List[str]:
        references = self.func(record)
        if references is None:
            return []
        if isinstance(references, str):
            return [references]
        return list(references)

    def __repr__(self):
        return f"FunctionExtractor({getattr(self.func, '__name__', self.func)!r})"


def make_extractor(
    option: Union[str, Pattern[str], Extractor, Callable[[Record], Iterable[str]]],
) -> Extractor:
    """
    Select the extractor variant for a configured ``extract`` option.

    Args:
        option: Pattern string, compiled pattern, Extractor, or function

    Returns:
        Extractor instance

    Raises:
        ValueError: If the option cannot be turned into an extractor
    """
    if isinstance(option, (str, re.Pattern)):
        return PatternExtractor(option)
    if isinstance(option, Extractor):
        return option
    if callable(option):
        return FunctionExtractor(option)
    raise ValueError(
        f"needs either a regular expression or a matcher function, "
        f"got {type(option).__name__}"
    )
