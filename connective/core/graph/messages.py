import enum
from typing import (Any,
                    Callable,
                    Collection,
                    Dict,
                    List,
                    Optional,
                    Union)

from reprit.base import generate_repr
from yarl import URL

from .hints import NodeId


class MessageKind(enum.IntEnum):
    SET_ID = 0
    SET_NEIGHBOURS = 1
    START_ELECTION = 2
    ELECTION = 3
    START_FLOOD = 4
    FLOOD = 5
    QUERY = 6
    STOP = 7


class ElectionCall:
    __slots__ = '_candidate',

    def __new__(cls, candidate: NodeId) -> 'ElectionCall':
        self = super().__new__(cls)
        self._candidate = candidate
        return self

    __repr__ = generate_repr(__new__)

    @property
    def candidate(self) -> NodeId:
        return self._candidate

    @property
    def kind(self) -> MessageKind:
        return MessageKind.ELECTION

    @classmethod
    def from_json(cls, candidate: NodeId) -> 'ElectionCall':
        return cls(candidate)

    def as_json(self) -> Dict[str, Any]:
        return {'candidate': self.candidate}


class FloodCall:
    __slots__ = '_node_id',

    def __new__(cls, node_id: NodeId) -> 'FloodCall':
        self = super().__new__(cls)
        self._node_id = node_id
        return self

    __repr__ = generate_repr(__new__)

    @property
    def kind(self) -> MessageKind:
        return MessageKind.FLOOD

    @property
    def node_id(self) -> NodeId:
        return self._node_id

    @classmethod
    def from_json(cls, node_id: NodeId) -> 'FloodCall':
        return cls(node_id)

    def as_json(self) -> Dict[str, Any]:
        return {'node_id': self.node_id}


class QueryCall:
    __slots__ = ()

    def __new__(cls) -> 'QueryCall':
        return super().__new__(cls)

    __repr__ = generate_repr(__new__)

    @property
    def kind(self) -> MessageKind:
        return MessageKind.QUERY

    @classmethod
    def from_json(cls) -> 'QueryCall':
        return cls()

    def as_json(self) -> Dict[str, Any]:
        return {}


class QueryReply:
    __slots__ = '_id', '_is_root', '_leader_id', '_parent_id', '_visited'

    def __new__(cls,
                _id: Optional[NodeId],
                *,
                is_root: bool,
                leader_id: Optional[NodeId],
                parent_id: Optional[NodeId],
                visited: bool) -> 'QueryReply':
        self = super().__new__(cls)
        (
            self._id, self._is_root, self._leader_id, self._parent_id,
            self._visited
        ) = _id, is_root, leader_id, parent_id, visited
        return self

    __repr__ = generate_repr(__new__)

    def __eq__(self, other: 'QueryReply') -> Any:
        return (self.as_json() == other.as_json()
                if isinstance(other, QueryReply)
                else NotImplemented)

    def __hash__(self) -> int:
        return hash((self.id, self.is_root, self.leader_id, self.parent_id,
                     self.visited))

    @property
    def id(self) -> Optional[NodeId]:
        return self._id

    @property
    def is_leader(self) -> bool:
        return self.id is not None and self.leader_id == self.id

    @property
    def is_root(self) -> bool:
        return self._is_root

    @property
    def leader_id(self) -> Optional[NodeId]:
        return self._leader_id

    @property
    def parent_id(self) -> Optional[NodeId]:
        return self._parent_id

    @property
    def visited(self) -> bool:
        return self._visited

    @classmethod
    def from_json(cls,
                  *,
                  id: Optional[NodeId],
                  is_root: bool,
                  leader_id: Optional[NodeId],
                  parent_id: Optional[NodeId],
                  visited: bool) -> 'QueryReply':
        return cls(id,
                   is_root=is_root,
                   leader_id=leader_id,
                   parent_id=parent_id,
                   visited=visited)

    def as_json(self) -> Dict[str, Any]:
        return {'id': self.id,
                'is_root': self.is_root,
                'leader_id': self.leader_id,
                'parent_id': self.parent_id,
                'visited': self.visited}


class SetIdCall:
    __slots__ = '_node_id',

    def __new__(cls, node_id: NodeId) -> 'SetIdCall':
        self = super().__new__(cls)
        self._node_id = node_id
        return self

    __repr__ = generate_repr(__new__)

    @property
    def kind(self) -> MessageKind:
        return MessageKind.SET_ID

    @property
    def node_id(self) -> NodeId:
        return self._node_id

    @classmethod
    def from_json(cls, node_id: NodeId) -> 'SetIdCall':
        return cls(node_id)

    def as_json(self) -> Dict[str, Any]:
        return {'node_id': self.node_id}


class SetNeighboursCall:
    __slots__ = '_urls',

    def __new__(cls, urls: Collection[URL]) -> 'SetNeighboursCall':
        self = super().__new__(cls)
        self._urls = urls
        return self

    __repr__ = generate_repr(__new__)

    @property
    def kind(self) -> MessageKind:
        return MessageKind.SET_NEIGHBOURS

    @property
    def urls(self) -> Collection[URL]:
        return self._urls

    @classmethod
    def from_json(cls, urls: List[str]) -> 'SetNeighboursCall':
        return cls([URL(raw_url) for raw_url in urls])

    def as_json(self) -> Dict[str, Any]:
        return {'urls': [str(url) for url in self.urls]}


class StartElectionCall:
    __slots__ = ()

    def __new__(cls) -> 'StartElectionCall':
        return super().__new__(cls)

    __repr__ = generate_repr(__new__)

    @property
    def kind(self) -> MessageKind:
        return MessageKind.START_ELECTION

    @classmethod
    def from_json(cls) -> 'StartElectionCall':
        return cls()

    def as_json(self) -> Dict[str, Any]:
        return {}


class StartFloodCall:
    __slots__ = ()

    def __new__(cls) -> 'StartFloodCall':
        return super().__new__(cls)

    __repr__ = generate_repr(__new__)

    @property
    def kind(self) -> MessageKind:
        return MessageKind.START_FLOOD

    @classmethod
    def from_json(cls) -> 'StartFloodCall':
        return cls()

    def as_json(self) -> Dict[str, Any]:
        return {}


class StopCall:
    __slots__ = ()

    def __new__(cls) -> 'StopCall':
        return super().__new__(cls)

    __repr__ = generate_repr(__new__)

    @property
    def kind(self) -> MessageKind:
        return MessageKind.STOP

    @classmethod
    def from_json(cls) -> 'StopCall':
        return cls()

    def as_json(self) -> Dict[str, Any]:
        return {}


Call = Union[ElectionCall, FloodCall, QueryCall, SetIdCall, SetNeighboursCall,
             StartElectionCall, StartFloodCall, StopCall]

_calls_from_json: Dict[MessageKind, Callable[..., Call]] = {
    MessageKind.SET_ID: SetIdCall.from_json,
    MessageKind.SET_NEIGHBOURS: SetNeighboursCall.from_json,
    MessageKind.START_ELECTION: StartElectionCall.from_json,
    MessageKind.ELECTION: ElectionCall.from_json,
    MessageKind.START_FLOOD: StartFloodCall.from_json,
    MessageKind.FLOOD: FloodCall.from_json,
    MessageKind.QUERY: QueryCall.from_json,
    MessageKind.STOP: StopCall.from_json,
}
assert _calls_from_json.keys() == set(MessageKind)


def call_from_json(kind: MessageKind, message: Dict[str, Any]) -> Call:
    return _calls_from_json[kind](**message)
