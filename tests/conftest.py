import pytest

from hookguard.content.stores import InMemoryContentStore
from hookguard.core.logging import configure_logging


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Keep test output free of log lines."""
    configure_logging(level="silent", force=True)


class CountingAccessor:
    """Content accessor that records how often it was called."""

    def __init__(self, content: bytes):
        self.content = content
        self.calls = 0

    def __call__(self) -> bytes:
        self.calls += 1
        return self.content


def exploding_accessor() -> bytes:
    raise AssertionError("content accessor must not be called")


@pytest.fixture
def counting_accessor():
    return CountingAccessor


@pytest.fixture
def memory_store():
    return InMemoryContentStore({
        "src/app.py": b"print('hello')\n",
        "src/broken.py": b"def f():\n<<<<<<< HEAD\n    return 1\n=======\n    return 2\n>>>>>>> topic\n",
        "docs/guide.md": b"Example:\n<<<<<<< HEAD\n",
        "assets/logo.png": b"\x89PNG\r\n\x1a\n\x00\x00<<<<<<< \n",
    })


@pytest.fixture
def exploding():
    return exploding_accessor
