import dataclasses
import enum
from typing import (Any,
                    Optional)

from .hints import NodeId


class EventKind(enum.IntEnum):
    ELECTION_STARTED = enum.auto()
    LEADER_ACCEPTED = enum.auto()
    LEADER_REJECTED = enum.auto()
    FLOOD_STARTED = enum.auto()
    FLOOD_REACHED = enum.auto()
    FLOOD_IGNORED = enum.auto()
    NEIGHBOUR_UNREACHABLE = enum.auto()
    STATUS_REPORTED = enum.auto()
    STOPPED = enum.auto()
    TIMED_OUT = enum.auto()


@dataclasses.dataclass(frozen=True)
class Event:
    kind: EventKind
    node_id: Optional[NodeId]
    parameters: Any = None


def ignore_event(event: Event) -> None:
    pass
