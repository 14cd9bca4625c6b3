from typing import (Mapping as _Mapping,
                    MutableMapping as _MutableMapping)

from reprit.base import generate_repr as _generate_repr
from yarl import URL as _URL

from .messages import Call as _Call
from .node import Node as _Node
from .receiver import Receiver as _Receiver
from .sender import (ReceiverUnavailable as _ReceiverUnavailable,
                     Sender as _Sender)


class Receiver(_Receiver):
    """Registers node in a shared registry under its URL authority."""
    __slots__ = '_node', '_registry'

    def __init__(self, _node: _Node, _registry: _MutableMapping[str, _Node]
                 ) -> None:
        self._node, self._registry = _node, _registry

    __repr__ = _generate_repr(__init__)

    @property
    def is_running(self) -> bool:
        return self._registry.get(self._authority) is self._node

    def start(self) -> None:
        if self.is_running:
            raise RuntimeError('is already running')
        registered = self._registry.setdefault(self._authority, self._node)
        if registered is not self._node:
            raise ValueError(f'{self._authority} is already registered '
                             f'by {registered!r}')

    def stop(self) -> None:
        if self.is_running:
            del self._registry[self._authority]

    @property
    def _authority(self) -> str:
        return self._node.url.authority


class Sender(_Sender):
    __slots__ = '_nodes',

    def __init__(self, _nodes: _Mapping[str, _Node]) -> None:
        self._nodes = _nodes

    __repr__ = _generate_repr(__init__)

    def send(self, url: _URL, call: _Call) -> None:
        try:
            receiver_node = self._nodes[url.authority]
        except KeyError as exception:
            raise _ReceiverUnavailable(url) from exception
        receiver_node.deliver(call)
