from asyncio import wait_for

import pytest

from connective.graph import (EventKind,
                              Network,
                              is_connected,
                              to_leaders,
                              to_spanning_tree)
from .graph_communication import FailingSender
from .utils import run_until_complete


@pytest.mark.parametrize('graph', [
    {},
    {'a': (1, ['b']), 'b': (1, ['a'])},
    {'a': (1, ['c']), 'b': (2, ['a'])},
    {'a': (1, ['A']), 'A': (2, ['a'])},
    {'': (1, [])},
    {'a b': (1, [])},
    {'a/b': (1, [])},
    {'a:b': (1, [])},
])
def test_invalid_graph(graph) -> None:
    async def create():
        Network.from_graph(graph)

    with pytest.raises(ValueError):
        run_until_complete(create())


def test_timed_out_nodes_are_unavailable() -> None:
    async def wait_timeout():
        network = Network.from_graph({'a': (1, ['b']), 'b': (2, ['a'])},
                                     idle_timeout=0.05)
        await network.start()
        for node in network.nodes.values():
            await wait_for(node.wait_closed(), 5)
        replies = await network.query()
        await network.stop()
        return replies

    replies = run_until_complete(wait_timeout())

    assert replies == {'a': None, 'b': None}
    assert not is_connected(replies)
    assert to_leaders(replies) == {'a': None, 'b': None}
    assert to_spanning_tree(replies) == {}


def test_directed_graph() -> None:
    async def flood():
        network = Network.from_graph({'a': (1, ['b']),
                                      'b': (2, ['c']),
                                      'c': (3, [])})
        await network.start()
        await network.flood('b')
        replies = await network.query()
        await network.stop()
        return replies

    replies = run_until_complete(flood())

    assert [name for name, reply in replies.items() if reply.visited] == [
        'b', 'c'
    ]
    assert to_spanning_tree(replies) == {3: 2}


@pytest.mark.parametrize('name', ['', 'a b', 'a/b'])
def test_invalid_vertex_name(name: str) -> None:
    with pytest.raises(ValueError,
                       match='vertex name'):
        Network.from_graph({name: (1, [])})


def test_failing_listener() -> None:
    def listener(event):
        if event.kind is EventKind.LEADER_ACCEPTED and event.node_id == 2:
            raise RuntimeError(event)

    async def elect():
        network = Network.from_graph({'a': (1, ['b']),
                                      'b': (2, ['a']),
                                      'c': (3, [])},
                                     listener=listener)
        await network.start()
        await network.elect('a')
        replies = await network.query()
        await network.stop()
        return network, replies

    network, replies = run_until_complete(elect())

    assert to_leaders(replies) == {'a': 1, 'b': 1, 'c': None}
    assert not any(node.is_running for node in network.nodes.values())


def test_stop_after_node_failure() -> None:
    async def elect():
        network = Network.from_graph({'a': (1, ['b']),
                                      'b': (2, ['a']),
                                      'c': (3, [])},
                                     sender_factory=FailingSender)
        await network.start()
        with pytest.raises(RuntimeError):
            await network.elect('a')
        with pytest.raises(RuntimeError):
            await network.stop()
        return network

    network = run_until_complete(elect())

    assert not any(node.is_running for node in network.nodes.values())
    assert not network.nodes['c'].sender.registry
