import pytest
from hypothesis import given

from connective.core.graph.node_state import (NodeState,
                                              Uninitialized,
                                              to_id,
                                              to_neighbours,
                                              visit)
from . import strategies


def test_uninitialized() -> None:
    state = NodeState()

    with pytest.raises(Uninitialized):
        to_id(state)
    with pytest.raises(Uninitialized):
        to_neighbours(state)


@given(strategies.identifiers, strategies.identifiers)
def test_leader_id_decreases(first_id: int, second_id: int) -> None:
    state = NodeState(0)
    state.leader_id = first_id

    if second_id < first_id:
        state.leader_id = second_id
        assert state.leader_id == second_id
    else:
        with pytest.raises(AssertionError):
            state.leader_id = second_id
        assert state.leader_id == first_id


def test_visit_root() -> None:
    state = NodeState(0)

    visit(state, None)

    assert state.visited
    assert state.is_root
    assert state.parent_id is None
    with pytest.raises(AssertionError):
        visit(state, 1)


@given(strategies.identifiers)
def test_visit_child(parent_id: int) -> None:
    state = NodeState(0)

    visit(state, parent_id)

    assert state.visited
    assert not state.is_root
    assert state.parent_id == parent_id
    with pytest.raises(AssertionError):
        state.visited = True
