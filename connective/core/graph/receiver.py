from abc import (ABC,
                 abstractmethod)


class Receiver(ABC):
    @property
    @abstractmethod
    def is_running(self) -> bool:
        """Checks whether receiver is running."""

    @abstractmethod
    def start(self) -> None:
        """Starts receiving messages."""

    @abstractmethod
    def stop(self) -> None:
        """Stops receiving messages."""
