"""
Shared fixtures: a small include tree on disk and isolated engine state.

Fixture tree::

    independent          (no includes)
    dependent            @include dependency, @include hidden-dependency
    dependency           (no includes)
    _hidden-dependency   (only found as "hidden-dependency" when the
                          normalizer strips the leading underscore)
"""
from pathlib import Path

import pytest

from include_graph import FileSource, InheritanceEngine, InheritanceState, flush_cache
from include_graph.extractors import INCLUDE_DIRECTIVE


FIXTURE_FILES = {
    'independent': "I stand alone.\n",
    'dependent': "@include dependency\n@include hidden-dependency\nBody of dependent.\n",
    'dependency': "Shared partial.\n",
    '_hidden-dependency': "Partial with a decorated name.\n",
}


@pytest.fixture
def fixture_dir(tmp_path: Path) -> Path:
    root = tmp_path / "fixtures"
    root.mkdir()
    for name, text in FIXTURE_FILES.items():
        (root / name).write_text(text)
    return root


@pytest.fixture
def state() -> InheritanceState:
    return InheritanceState()


@pytest.fixture(autouse=True)
def _reset_default_state():
    yield
    flush_cache()


@pytest.fixture
def run_batch(fixture_dir, state):
    """Run one batch over files matching ``pattern`` and return the emitted records."""

    def run(pattern: str = '*', **options):
        options.setdefault('extract', INCLUDE_DIRECTIVE)
        engine = InheritanceEngine(state=state, **options)
        return engine.process(FileSource(fixture_dir, pattern=pattern).iter_records())

    return run
