from asyncio import run
from typing import (Awaitable,
                    Set,
                    TypeVar)

from connective.graph import Graph

MAX_NODES_COUNT = 12

_T = TypeVar('_T')


def equivalence(left: bool, right: bool) -> bool:
    return left is right


def implication(antecedent: bool, consequent: bool) -> bool:
    return not antecedent or consequent


def run_until_complete(awaitable: Awaitable[_T]) -> _T:
    async def wrapper() -> _T:
        return await awaitable

    return run(wrapper())


def to_component(graph: Graph, name: str) -> Set[str]:
    result, queue = {name}, [name]
    while queue:
        _, neighbours_names = graph[queue.pop()]
        for neighbour_name in neighbours_names:
            if neighbour_name not in result:
                result.add(neighbour_name)
                queue.append(neighbour_name)
    return result


def to_minimum_id(graph: Graph, names: Set[str]) -> int:
    return min(graph[name][0] for name in names)
