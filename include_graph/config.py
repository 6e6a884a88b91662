"""
Engine configuration.

Mirrors the option object of the pipeline stage: an emission policy switch,
the extraction strategy, the path normalizer, and whether identity keys come
from a record's original location.
"""
import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Pattern, Union

from .extractors import PatternExtractor, make_extractor
from .normalization import (
    NORMALIZER_MAP,
    AbsolutePathNormalizer,
    PathNormalizer,
    make_normalizer,
)
from .protocols import Extractor, Record


ExtractOption = Union[str, Pattern[str], Extractor, Callable[[Record], Iterable[str]]]
NormalizerOption = Union[str, PathNormalizer, Callable[[str], str]]


class ConfigurationError(ValueError):
    """Raised when an engine configuration cannot be used."""


@dataclass
class InheritanceConfig:
    """
    Configuration for an InheritanceEngine.

    Attributes:
        extract: Pattern (string or compiled) with one capturing group, an
                 Extractor, or a function returning references for a record
        include_all: Emit every integrated record plus its direct dependents,
                     instead of only leaves and transitive dependents
        normalize_path: Registry name, PathNormalizer, or ``str -> str``
                        function mapping paths to identity keys
        original_paths: Key records by ``history[0]`` instead of ``path``
        extractor: Resolved Extractor (derived, not passed in)
        normalizer: Resolved PathNormalizer (derived, not passed in)
    """

    extract: Optional[ExtractOption] = None
    include_all: bool = False
    normalize_path: NormalizerOption = field(default_factory=AbsolutePathNormalizer)
    original_paths: bool = False
    extractor: Extractor = field(init=False, repr=False, compare=False)
    normalizer: PathNormalizer = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        """Resolve extractor and normalizer; fail before any record is seen."""
        if self.extract is None:
            raise ConfigurationError("needs either a regular expression or a matcher function")

        try:
            self.extractor = make_extractor(self.extract)
            self.normalizer = make_normalizer(self.normalize_path)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    def to_dict(self) -> dict:
        """
        Convert to a JSON-serializable dictionary.

        Only pattern-based extraction and registry-named normalizers can be
        serialized.

        Raises:
            ValueError: If the config holds a function or custom object
        """
        if not isinstance(self.extractor, PatternExtractor):
            raise ValueError("Only pattern-based extraction can be serialized")
        if isinstance(self.extractor.pattern.pattern, bytes):
            raise ValueError("Bytes patterns cannot be serialized")

        if isinstance(self.normalize_path, str):
            normalizer_name = self.normalize_path
        else:
            normalizer_name = next(
                (name for name, cls in NORMALIZER_MAP.items() if type(self.normalizer) is cls),
                None,
            )
            # Instances with non-default settings do not round-trip by name
            if (normalizer_name is None
                    or vars(self.normalizer) != vars(NORMALIZER_MAP[normalizer_name]())):
                raise ValueError(f"Normalizer {self.normalizer!r} cannot be serialized by name")

        pattern = self.extractor.pattern
        return {
            'extract': pattern.pattern,
            'flags': int(pattern.flags & ~re.UNICODE),
            'include_all': self.include_all,
            'normalize_path': normalizer_name,
            'original_paths': self.original_paths,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'InheritanceConfig':
        """Create from a dictionary produced by ``to_dict``."""
        data = dict(data)
        flags = data.pop('flags', re.MULTILINE)
        extract = data.get('extract')
        if isinstance(extract, str):
            try:
                data['extract'] = re.compile(extract, flags)
            except re.error as e:
                raise ConfigurationError(f"Invalid extraction pattern {extract!r}: {e}") from e
        return cls(**data)

    def save(self, path: Path) -> None:
        """Save configuration to JSON file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: Path) -> 'InheritanceConfig':
        """Load configuration from JSON file."""
        with open(path, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_options(cls, options: Optional[dict] = None, **overrides: Any) -> 'InheritanceConfig':
        """Build from an option mapping, with keyword overrides taking precedence."""
        merged = dict(options or {})
        merged.update(overrides)
        return cls(**merged)
