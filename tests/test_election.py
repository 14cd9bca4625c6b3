from typing import (Dict,
                    List,
                    Optional,
                    Tuple)

from hypothesis import given

from connective import defaults
from connective.graph import (Graph,
                              Network,
                              QueryReply,
                              to_leaders)
from . import strategies
from .graph_communication import EventsRecorder
from .utils import (run_until_complete,
                    to_component,
                    to_minimum_id)


async def _elect(graph: Graph,
                 roots: List[str],
                 listener: EventsRecorder
                 ) -> Dict[str, Optional[QueryReply]]:
    network = Network.from_graph(graph,
                                 listener=listener)
    await network.start()
    try:
        await network.elect(*roots)
        return await network.query()
    finally:
        await network.stop()


@given(strategies.graphs_with_roots)
def test_convergence(graph_with_roots: Tuple[Graph, List[str]]) -> None:
    graph, roots = graph_with_roots

    replies = run_until_complete(_elect(graph, roots, EventsRecorder()))

    elected_names = set().union(*[to_component(graph, root)
                                  for root in roots])
    leaders = to_leaders(replies)
    assert all(leaders[name] == to_minimum_id(graph,
                                              to_component(graph, name))
               for name in elected_names)
    assert all(leaders[name] is None
               for name in graph.keys() - elected_names)


@given(strategies.graphs_with_roots)
def test_monotonicity(graph_with_roots: Tuple[Graph, List[str]]) -> None:
    graph, roots = graph_with_roots
    recorder = EventsRecorder()

    run_until_complete(_elect(graph, roots, recorder))

    assert all(all(next_leader_id < leader_id
                   for leader_id, next_leader_id in zip(leaders_ids,
                                                        leaders_ids[1:]))
               for leaders_ids in recorder.to_accepted_leaders().values())


@given(strategies.connected_graphs_with_root)
def test_single_leader(graph_with_root: Tuple[Graph, str]) -> None:
    graph, root = graph_with_root

    replies = run_until_complete(_elect(graph, [root], EventsRecorder()))

    assert sum(reply.is_leader for reply in replies.values()) == 1
    leader_reply, = [reply for reply in replies.values() if reply.is_leader]
    assert leader_reply.id == min(node_id for node_id, _ in graph.values())


def test_default_graph_election_from_first_component() -> None:
    replies = run_until_complete(_elect(defaults.graph, ['q'],
                                        EventsRecorder()))

    assert to_leaders(replies) == {'q': 17, 'r': 17, 's': 17,
                                   't': None, 'u': None, 'v': None,
                                   'w': None, 'x': None, 'y': None,
                                   'z': None}
    assert replies['q'].is_leader


def test_default_graph_election_from_both_components() -> None:
    replies = run_until_complete(_elect(defaults.graph, ['q', 'v'],
                                        EventsRecorder()))

    assert to_leaders(replies) == {'q': 17, 'r': 17, 's': 17,
                                   't': 20, 'u': 20, 'v': 20,
                                   'w': 20, 'x': 20, 'y': 20,
                                   'z': 20}
    assert [name for name, reply in replies.items() if reply.is_leader] == [
        'q', 't'
    ]


def test_default_graph_election_from_non_minimal_node() -> None:
    recorder = EventsRecorder()

    replies = run_until_complete(_elect(defaults.graph, ['v'], recorder))

    assert to_leaders(replies) == {'q': None, 'r': None, 's': None,
                                   't': 20, 'u': 20, 'v': 20,
                                   'w': 20, 'x': 20, 'y': 20,
                                   'z': 20}
    assert [name for name, reply in replies.items() if reply.is_leader] == [
        't'
    ]
    assert recorder.to_accepted_leaders()[22][0] == 22


def test_election_from_greater_identifier() -> None:
    replies = run_until_complete(_elect({'a': (0, ['aa']),
                                         'aa': (-1, ['a'])},
                                        ['a'], EventsRecorder()))

    assert to_leaders(replies) == {'a': -1, 'aa': -1}
    assert replies['aa'].is_leader
