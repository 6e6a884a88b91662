"""
Path normalization for turning file locations into identity keys.

Every key the engine stores goes through the same normalizer: primary record
paths, resolved dependency references, and emission lookups. Mixing
normalizers between those sites leaves edges pointing at nodes no record
will ever be stored under.

Normalizers:
    - AbsolutePathNormalizer: absolute, lexically normalized path (default)
    - BasenameNormalizer: final path component only, optional prefix stripping
    - PassthroughNormalizer: returns paths unchanged
    - FunctionNormalizer: adapts a plain ``str -> str`` callable
"""
import os
from typing import Callable, Dict, Type, Union

from .protocols import PathNormalizer


class AbsolutePathNormalizer(PathNormalizer):
    """
    Resolve against the current working directory.

    Lexical only: ``..`` segments are collapsed but symlinks are not followed,
    so the key for a file does not depend on what is on disk.

    Examples:
        >>> os.chdir("/project")
        >>> AbsolutePathNormalizer().normalize("styles/../main.scss")
        '/project/main.scss'
    """

    def normalize(self, raw_path: str) -> str:
        return os.path.abspath(raw_path)


class BasenameNormalizer(PathNormalizer):
    """
    Key files by their final path component.

    Useful for virtual file systems and for include syntaxes where partials
    are referenced without a decorating prefix (``_partial.scss`` included as
    ``partial.scss``).

    Examples:
        >>> BasenameNormalizer(strip_prefix="_").normalize("/a/b/_base.scss")
        'base.scss'
    """

    def __init__(self, strip_prefix: str = ""):
        """
        Args:
            strip_prefix: Removed once from the start of the basename if present
        """
        self.strip_prefix = strip_prefix

    def normalize(self, raw_path: str) -> str:
        name = os.path.basename(raw_path)
        if self.strip_prefix and name.startswith(self.strip_prefix):
            name = name[len(self.strip_prefix):]
        return name


class PassthroughNormalizer(PathNormalizer):
    """No-op normalizer for hosts whose paths are already canonical."""

    def normalize(self, raw_path: str) -> str:
        """Return the path unchanged."""
        return raw_path


class FunctionNormalizer(PathNormalizer):
    """Wraps a caller-supplied function so it satisfies PathNormalizer."""

    def __init__(self, func: Callable[[str], str]):
        self.func = func

    def normalize(self, raw_path: str) -> str:
        return self.func(raw_path)

    def __repr__(self):
        return f"FunctionNormalizer({getattr(self.func, '__name__', self.func)!r})"


# Normalizer registry - names usable in serialized configs
NORMALIZER_MAP: Dict[str, Type[PathNormalizer]] = {
    'absolute': AbsolutePathNormalizer,
    'basename': BasenameNormalizer,
    'passthrough': PassthroughNormalizer,
}


def make_normalizer(option: Union[str, PathNormalizer, Callable[[str], str]]) -> PathNormalizer:
    """
    Build a PathNormalizer from a registry name, normalizer, or callable.

    Args:
        option: Name from NORMALIZER_MAP, an object with ``normalize``, or a
              plain function mapping a raw path to a key

    Returns:
        PathNormalizer instance

    Raises:
        ValueError: If ``option`` is an unknown name or an unsupported type
    """
    if isinstance(option, str):
        normalizer_class = NORMALIZER_MAP.get(option)
        if normalizer_class is None:
            raise ValueError(
                f"Unknown normalizer: {option!r}. "
                f"Available: {sorted(NORMALIZER_MAP)}"
            )
        return normalizer_class()
    if isinstance(option, PathNormalizer):
        return option
    if callable(option):
        return FunctionNormalizer(option)
    raise ValueError(f"Cannot build a path normalizer from {type(option).__name__}")
