"""
Shared fixtures for the engine test-suite.

FakeScheduler stands in for an event loop: call_later() only records the
request, and the test decides when (and whether) each tick fires.
"""

import pytest

from algorithms import generate
from structures.graph import Graph


class FakeHandle:
    def __init__(self, delay, callback):
        self.delay     = delay
        self.callback  = callback
        self.cancelled = False
        self.fired     = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    def __init__(self):
        self.handles = []

    def call_later(self, delay, callback):
        handle = FakeHandle(delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self):
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def fire_next(self):
        handle = self.pending[0]
        handle.fired = True
        handle.callback()
        return handle


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def sample_graph():
    return Graph.sample()


@pytest.fixture
def bst_tree():
    """BST holding 50, 30, 70, 20, 40 (inserted in that order)."""
    return generate("bst_build", None, values=[50, 30, 70, 20, 40]).final


@pytest.fixture
def bubble_log():
    return generate("bubble_sort", [3, 1, 2])


@pytest.fixture
def client():
    import main

    main.app.config["TESTING"] = True
    main.reset_session()
    return main.app.test_client()
