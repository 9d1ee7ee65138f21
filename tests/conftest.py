import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'pagecompose'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from pagecompose.core.stdlib_logging import reset_logging_for_tests  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    reset_logging_for_tests()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop PAGECOMPOSE_* overrides leaking from the developer environment."""
    import os

    for key in list(os.environ):
        if key.startswith("PAGECOMPOSE_"):
            monkeypatch.delenv(key, raising=False)


class RecordingRender:
    """Render callback that records every request and returns a fresh dict."""

    def __init__(self) -> None:
        self.requests = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def __call__(self, request):
        self.requests.append(request)
        return {"key": request.key, "queries": ",".join(sorted(request.queries))}


@pytest.fixture
def render() -> RecordingRender:
    return RecordingRender()
