from typing import (List,
                    Mapping,
                    Optional)

from .event import (Event,
                    EventKind)
from .messages import QueryReply


def event_to_line(event: Event) -> Optional[str]:
    """
    Renders given node event as a human-readable line
    or returns ``None`` if the event is not worth reporting.
    """
    kind, node_id, parameters = event.kind, event.node_id, event.parameters
    if kind is EventKind.ELECTION_STARTED:
        return f'Node {node_id} starts election.'
    elif kind is EventKind.LEADER_ACCEPTED:
        return f'Node {node_id} accepts {parameters} as new leader.'
    elif kind is EventKind.LEADER_REJECTED:
        return f'Node {node_id} rejects {parameters} as leader.'
    elif kind is EventKind.FLOOD_STARTED:
        return f'Node {node_id} starts flood as root.'
    elif kind is EventKind.FLOOD_REACHED:
        return f'Node {node_id} is reached from {parameters}.'
    elif kind is EventKind.FLOOD_IGNORED:
        return f'Node {node_id} has already been visited.'
    elif kind is EventKind.NEIGHBOUR_UNREACHABLE:
        return f'Node {node_id} cannot reach neighbour {parameters}.'
    elif kind is EventKind.TIMED_OUT:
        return (f'Node {node_id} has received nothing for {parameters}s '
                'and stops.')
    else:
        assert (kind is EventKind.STATUS_REPORTED
                or kind is EventKind.STOPPED), kind
        return None


def reply_to_lines(name: str, reply: Optional[QueryReply]) -> List[str]:
    if reply is None:
        return [f'Node {name}: is unavailable.']
    result = [f'Node {reply.id}: has been visited.'
              if reply.visited
              else f'Node {reply.id}: has not been visited, '
                   'the graph is not connected.']
    if reply.is_leader:
        result.append(f'Node {reply.id}: is the leader.')
    elif reply.leader_id is not None:
        result.append(f'Node {reply.id}: current leader is {reply.leader_id}.')
    else:
        result.append(f'Node {reply.id}: leader is not determined yet.')
    if reply.parent_id is not None:
        result.append(f'Node {reply.id}: parent is {reply.parent_id}.')
    elif reply.is_root:
        result.append(f'Node {reply.id}: is the flood root.')
    return result


def replies_to_lines(replies: Mapping[str, Optional[QueryReply]]
                     ) -> List[str]:
    return [line
            for name, reply in replies.items()
            for line in reply_to_lines(name, reply)]


def connectivity_to_line(connected: bool) -> str:
    return ('The graph is connected.'
            if connected
            else 'The graph is not connected.')
