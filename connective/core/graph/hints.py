from typing import (Any,
                    Callable,
                    Collection,
                    Mapping,
                    Tuple,
                    Union)

NodeId = int
Listener = Callable[[Any], None]
Time = Union[float, int]
Vertex = Tuple[NodeId, Collection[str]]
Graph = Mapping[str, Vertex]
