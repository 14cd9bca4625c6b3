from abc import (ABC,
                 abstractmethod)

from yarl import URL

from .messages import Call


class ReceiverUnavailable(Exception):
    pass


class Sender(ABC):
    __slots__ = ()

    @abstractmethod
    def send(self, url: URL, call: Call) -> None:
        """
        Hands given call over to the node with given URL without waiting
        for it to be processed
        or raises ``ReceiverUnavailable`` exception in case of failure.
        """
