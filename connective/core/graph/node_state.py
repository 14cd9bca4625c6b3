from typing import (Collection,
                    Optional)

from reprit.base import generate_repr
from yarl import URL

from .hints import NodeId


class Uninitialized(Exception):
    pass


class NodeState:
    __slots__ = ('_id', '_is_root', '_leader_id', '_neighbours', '_parent_id',
                 '_visited')

    def __init__(self,
                 _id: Optional[NodeId] = None,
                 *,
                 neighbours: Optional[Collection[URL]] = None) -> None:
        self._id = _id
        self._neighbours = neighbours
        self._is_root = False
        self._leader_id = None
        self._parent_id = None
        self._visited = False

    __repr__ = generate_repr(__init__)

    @property
    def id(self) -> Optional[NodeId]:
        return self._id

    @id.setter
    def id(self, value: NodeId) -> None:
        self._id = value

    @property
    def is_root(self) -> bool:
        return self._is_root

    @is_root.setter
    def is_root(self, value: bool) -> None:
        assert value and not self.is_root
        self._is_root = value

    @property
    def leader_id(self) -> Optional[NodeId]:
        return self._leader_id

    @leader_id.setter
    def leader_id(self, value: NodeId) -> None:
        assert self.leader_id is None or value < self.leader_id, (
            f'leader id should decrease, but {value} >= {self.leader_id}'
        )
        self._leader_id = value

    @property
    def neighbours(self) -> Optional[Collection[URL]]:
        return self._neighbours

    @neighbours.setter
    def neighbours(self, value: Collection[URL]) -> None:
        self._neighbours = value

    @property
    def parent_id(self) -> Optional[NodeId]:
        return self._parent_id

    @parent_id.setter
    def parent_id(self, value: NodeId) -> None:
        assert self.parent_id is None and not self.is_root
        self._parent_id = value

    @property
    def visited(self) -> bool:
        return self._visited

    @visited.setter
    def visited(self, value: bool) -> None:
        assert value and not self.visited
        self._visited = value


def to_id(state: NodeState) -> NodeId:
    if state.id is None:
        raise Uninitialized('identifier is not assigned')
    return state.id


def to_neighbours(state: NodeState) -> Collection[URL]:
    if state.neighbours is None:
        raise Uninitialized('neighbours are not assigned')
    return state.neighbours


def visit(state: NodeState, parent_id: Optional[NodeId]) -> None:
    if parent_id is None:
        state.is_root = True
    else:
        state.parent_id = parent_id
    state.visited = True
