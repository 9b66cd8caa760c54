import pytest

from barsh import hooks


@pytest.fixture(autouse=True)
def restore_overrides():
    snap = hooks.snapshot()
    yield
    hooks.restore(snap)


@pytest.fixture
def spawned():
    """Records argv instead of starting processes."""
    calls = []

    @hooks.override
    def spawn_process(argv):
        calls.append(argv)
        return None

    return calls
