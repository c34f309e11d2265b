import pytest
from django.db import connections


@pytest.fixture(autouse=True)
def close_calls(monkeypatch):
    """Record ``close()`` on the default connection instead of closing it.

    The surrounding test transaction lives on that connection, so
    ``AccountStore`` must not drop it mid-test.
    """
    calls = []
    monkeypatch.setattr(connections['default'], 'close', lambda: calls.append(1))
    return calls
