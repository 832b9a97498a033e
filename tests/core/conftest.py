"""Pytest fixtures for core tests."""

import pytest


@pytest.fixture
def linear_execution():
    """A -> B -> C, all plain."""
    from tests.core.graph_test_helpers import make_execution

    return make_execution(
        ("A", []),
        ("B", ["A"]),
        ("C", ["B"]),
    )


@pytest.fixture
def fork_join_execution():
    """S forks into B1 and B2, E joins them, D follows."""
    from tests.core.graph_test_helpers import make_execution

    return make_execution(
        ("S", [], "start"),
        ("B1", ["S"]),
        ("B2", ["S"]),
        ("E", ["B1", "B2"], "end", "S"),
        ("D", ["E"]),
    )


@pytest.fixture
def nested_execution():
    """Outer region S1 holding inner region S2, with steps after each close."""
    from tests.core.graph_test_helpers import make_execution

    return make_execution(
        ("S1", [], "start"),
        ("S2", ["S1"], "start"),
        ("A", ["S2"]),
        ("E2", ["A"], "end", "S2"),
        ("B", ["E2"]),
        ("E1", ["B"], "end", "S1"),
        ("Z", ["E1"]),
    )


@pytest.fixture
def two_heads_execution():
    """X and Y, both parentless and unrelated."""
    from tests.core.graph_test_helpers import make_execution

    return make_execution(("X", []), ("Y", []))


@pytest.fixture
def running_parallel_execution():
    """S runs branches B1..B3, each still running with one more step Ci."""
    from tests.core.graph_test_helpers import make_execution

    return make_execution(
        ("S", [], "start"),
        ("B1", ["S"]),
        ("B2", ["S"]),
        ("B3", ["S"]),
        ("C1", ["B1"]),
        ("C2", ["B2"]),
        ("C3", ["B3"]),
        heads=["C1", "C2", "C3"],
    )


@pytest.fixture
def nested_running_parallel_execution():
    """Like running_parallel_execution, inside an outer region S1."""
    from tests.core.graph_test_helpers import make_execution

    return make_execution(
        ("S1", [], "start"),
        ("S2", ["S1"], "start"),
        ("B1", ["S2"]),
        ("B2", ["S2"]),
        ("B3", ["S2"]),
        ("C1", ["B1"]),
        ("C2", ["B2"]),
        ("C3", ["B3"]),
        heads=["C1", "C2", "C3"],
    )


@pytest.fixture
def late_continuation_execution():
    """A fans out to X, B and D; only B has a successor, Bc."""
    from tests.core.graph_test_helpers import make_execution

    return make_execution(
        ("A", []),
        ("X", ["A"]),
        ("B", ["A"]),
        ("Bc", ["B"]),
        ("D", ["A"]),
        heads=["D", "Bc", "X"],
    )
