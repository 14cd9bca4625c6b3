import logging
import re
from asyncio import (AbstractEventLoop,
                     get_event_loop)
from typing import (Callable,
                    Dict,
                    List,
                    Mapping,
                    MutableMapping,
                    Optional)
from weakref import WeakValueDictionary

from reprit import seekers
from reprit.base import generate_repr
from yarl import URL

from . import communication
from .hints import (Graph,
                    Listener,
                    NodeId,
                    Time)
from .messages import QueryReply
from .node import Node
from .receiver import Receiver
from .sender import (ReceiverUnavailable,
                     Sender)

LoggerFactory = Callable[[URL], logging.Logger]
SenderFactory = Callable[[Mapping[str, Node]], Sender]

NAME_PATTERN = re.compile('[A-Za-z0-9_-]+')
SCHEME = 'node'


class Network:
    """
    Drives a set of nodes wired after given graph:
    assigns identifiers and neighbours, starts protocols,
    waits for quiescence and collects nodes' replies.
    """

    @classmethod
    def from_graph(cls,
                   graph: Graph,
                   *,
                   idle_timeout: Optional[Time] = None,
                   listener: Optional[Listener] = None,
                   logger: Optional[logging.Logger] = None,
                   logger_factory: Optional[LoggerFactory] = None,
                   loop: Optional[AbstractEventLoop] = None,
                   sender_factory: SenderFactory = communication.Sender
                   ) -> 'Network':
        validate_graph(graph)
        urls = {name: name_to_url(name) for name in graph}
        loop = get_event_loop() if loop is None else loop
        registry: MutableMapping[str, Node] = WeakValueDictionary()
        sender = sender_factory(registry)
        nodes = {name: Node.from_url(url,
                                     idle_timeout=idle_timeout,
                                     listener=listener,
                                     logger=(None
                                             if logger_factory is None
                                             else logger_factory(url)),
                                     loop=loop,
                                     sender=sender)
                 for name, url in urls.items()}
        return cls(graph, nodes,
                   logger=logging.getLogger(__name__)
                   if logger is None
                   else logger,
                   receivers={name: communication.Receiver(node, registry)
                              for name, node in nodes.items()})

    def __init__(self,
                 _graph: Graph,
                 _nodes: Mapping[str, Node],
                 *,
                 logger: logging.Logger,
                 receivers: Mapping[str, Receiver]) -> None:
        self._graph, self._nodes = _graph, _nodes
        self._logger = logger
        self._receivers = receivers

    __repr__ = generate_repr(__init__,
                             field_seeker=seekers.complex_)

    @property
    def graph(self) -> Graph:
        return self._graph

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def nodes(self) -> Mapping[str, Node]:
        return self._nodes

    async def elect(self, name: str, *rest: str) -> None:
        for root_name in [name, *rest]:
            self.logger.debug(f'starting election at {root_name}')
            await self._nodes[root_name].start_election()
        await self.settle()

    async def flood(self, name: str) -> None:
        self.logger.debug(f'starting flood at {name}')
        await self._nodes[name].start_flood()
        await self.settle()

    async def query(self) -> Dict[str, Optional[QueryReply]]:
        result = {}
        for name, node in self._nodes.items():
            try:
                result[name] = await node.query()
            except ReceiverUnavailable:
                self.logger.warning(f'{name} is unavailable for query')
                result[name] = None
        return result

    async def settle(self) -> None:
        while True:
            for node in self._running_nodes():
                await node.join()
            if all(node.is_idle for node in self._running_nodes()):
                break

    async def start(self) -> None:
        for name, node in self._nodes.items():
            self._receivers[name].start()
            node.start()
        for name, node in self._nodes.items():
            node_id, _ = self._graph[name]
            await node.set_id(node_id)
        for name, node in self._nodes.items():
            _, neighbours_names = self._graph[name]
            await node.set_neighbours([self._nodes[neighbour_name].url
                                       for neighbour_name in neighbours_names])

    async def stop(self) -> None:
        errors = []
        for name, node in self._nodes.items():
            try:
                if node.is_running:
                    await node.stop()
                await node.wait_closed()
            except Exception as error:
                self.logger.exception(f'{name} failed:')
                errors.append(error)
            finally:
                self._receivers[name].stop()
        if errors:
            raise errors[0]

    def _running_nodes(self) -> List[Node]:
        return [node for node in self._nodes.values() if node.is_running]


def is_connected(replies: Mapping[str, Optional[QueryReply]]) -> bool:
    return all(reply is not None and reply.visited
               for reply in replies.values())


def name_to_url(name: str) -> URL:
    return URL.build(scheme=SCHEME,
                     host=name)


def to_leaders(replies: Mapping[str, Optional[QueryReply]]
               ) -> Dict[str, Optional[NodeId]]:
    return {name: None if reply is None else reply.leader_id
            for name, reply in replies.items()}


def to_spanning_tree(replies: Mapping[str, Optional[QueryReply]]
                     ) -> Dict[NodeId, NodeId]:
    return {reply.id: reply.parent_id
            for reply in replies.values()
            if reply is not None and reply.parent_id is not None}


def validate_graph(graph: Graph) -> None:
    if not graph:
        raise ValueError('graph should have at least one vertex')
    for name in graph:
        if NAME_PATTERN.fullmatch(name) is None:
            raise ValueError(f'vertex name {name!r} should be non-empty '
                             'and consist of latin letters, digits, '
                             'hyphens and underscores')
    if len({name.lower() for name in graph}) < len(graph):
        raise ValueError('vertices names should be distinct '
                         'case-insensitively')
    identifiers = [node_id for node_id, _ in graph.values()]
    if len(set(identifiers)) < len(identifiers):
        raise ValueError('vertices identifiers should be unique')
    for name, (_, neighbours_names) in graph.items():
        unknown_names = set(neighbours_names) - graph.keys()
        if unknown_names:
            raise ValueError(f'vertex {name} has unknown neighbours: '
                             f'{", ".join(sorted(unknown_names))}')
