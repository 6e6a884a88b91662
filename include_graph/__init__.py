"""
Incremental include/dependency tracking for file pipelines.

Remembers which files include which across pipeline runs and, for each
batch, emits only what the batch's changes require: changed files nothing
depends on, and every file that depends on a changed one.
"""

from .protocols import Record, Extractor, PathNormalizer, RecordSource
from .records import FileRecord
from .normalization import (
    AbsolutePathNormalizer,
    BasenameNormalizer,
    PassthroughNormalizer,
    FunctionNormalizer,
    NORMALIZER_MAP,
    make_normalizer,
)
from .extractors import (
    PatternExtractor,
    FunctionExtractor,
    make_extractor,
    INCLUDE_DIRECTIVE,
    SCSS_IMPORT,
    PUG_INCLUDE,
)
from .graph import DependencyGraph
from .cache import RecordCache
from .state import InheritanceState, DEFAULT_STATE, flush_cache
from .config import InheritanceConfig, ConfigurationError
from .engine import InheritanceEngine
from .sources import FileSource

__all__ = [
    # Protocols
    "Record",
    "Extractor",
    "PathNormalizer",
    "RecordSource",
    # Records and sources
    "FileRecord",
    "FileSource",
    # Normalizers
    "AbsolutePathNormalizer",
    "BasenameNormalizer",
    "PassthroughNormalizer",
    "FunctionNormalizer",
    "NORMALIZER_MAP",
    "make_normalizer",
    # Extractors
    "PatternExtractor",
    "FunctionExtractor",
    "make_extractor",
    "INCLUDE_DIRECTIVE",
    "SCSS_IMPORT",
    "PUG_INCLUDE",
    # Core
    "DependencyGraph",
    "RecordCache",
    "InheritanceState",
    "DEFAULT_STATE",
    "flush_cache",
    "InheritanceConfig",
    "ConfigurationError",
    "InheritanceEngine",
]
