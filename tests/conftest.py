"""pytest configuration and shared fixtures."""

import pytest

from j_visit import to_pointer


@pytest.fixture
def sample_data():
    """Nested document mixing mappings, sequences and scalars."""
    return {
        "user": {
            "name": "Alice",
            "tags": ["admin", "dev"],
        },
        "items": [
            {"id": 1, "price": 10},
            {"id": 2, "price": 20},
        ],
        "enabled": True,
    }


class VisitRecorder:
    """Decision-function helper: records every visit as ``(pointer, node)``.

    Wrap another decision function with :meth:`wrap` to record and delegate.
    """

    def __init__(self):
        self.visits = []

    @property
    def pointers(self):
        return [p for p, _ in self.visits]

    @property
    def nodes(self):
        return [n for _, n in self.visits]

    def record(self, node, chain):
        self.visits.append((to_pointer(chain), node))

    def __call__(self, node, chain):
        self.record(node, chain)
        return None

    def wrap(self, decide):
        def wrapped(node, chain):
            self.record(node, chain)
            return decide(node, chain)

        return wrapped

    def wrap_async(self, decide):
        async def wrapped(node, chain):
            self.record(node, chain)
            return decide(node, chain)

        return wrapped


@pytest.fixture
def recorder():
    """Fresh VisitRecorder."""
    return VisitRecorder()
