import asyncio
import importlib.util
from logging import Logger
from types import ModuleType
from typing import (Callable,
                    Optional,
                    Sequence,
                    Type)

import click
from yarl import URL

import connective
from connective import defaults
from connective.graph import (Event,
                              Graph,
                              Network,
                              is_connected,
                              report)

LoggerFactory = Callable[[URL], Logger]

ELECTION = 'election'
FLOOD = 'flood'


def _class_to_full_name(cls: Type) -> str:
    return f'{cls.__module__}.{cls.__qualname__}'


@click.command()
@click.option('--graph-path',
              default=f'{defaults.__file__}:graph',
              type=str,
              help='Path to the graph '
                   '(mapping from vertex name to a pair '
                   'of vertex identifier and neighbours names) '
                   'in a format `path/to/module.py:graph_name`.')
@click.option('--protocol',
              default=ELECTION,
              type=click.Choice([ELECTION, FLOOD]),
              help='Protocol to run over the graph.')
@click.option('--root', 'roots',
              multiple=True,
              type=str,
              help='Name of the vertex to start protocol from, '
                   'can be repeated for election. '
                   'Defaults to the first vertex of the graph.')
@click.option('--idle-timeout',
              default=None,
              type=click.FloatRange(0, min_open=True),
              help='Seconds after which a node that has received nothing '
                   'stops, nodes wait forever if omitted.')
@click.option('--logger-factory-path',
              default=f'{defaults.__file__}:to_logger',
              type=str,
              help='Path to the logger factory '
                   '(function '
                   f'accepting `{_class_to_full_name(URL)}` instance '
                   f'and returning `{_class_to_full_name(Logger)}` instance) '
                   'in a format `path/to/module.py:logger_factory_name`.')
def main(graph_path: str,
         protocol: str,
         roots: Sequence[str],
         idle_timeout: Optional[float],
         logger_factory_path: str) -> None:
    graph_module_path, graph_name = graph_path.rsplit(':', 1)
    logger_factory_module_path, logger_factory_name = (
        logger_factory_path.rsplit(':', 1)
    )
    graph_module = _load_module_from_path(f'{connective.__name__}._graph',
                                          graph_module_path)
    logger_factory_module = _load_module_from_path(
            f'{connective.__name__}._logging', logger_factory_module_path
    )
    graph: Graph = getattr(graph_module, graph_name)
    logger_factory: LoggerFactory = getattr(logger_factory_module,
                                            logger_factory_name)
    roots = list(roots) or [next(iter(graph))]
    unknown_roots = [root for root in roots if root not in graph]
    if unknown_roots:
        raise click.UsageError('unknown root(s): '
                               f'{", ".join(unknown_roots)}')
    if protocol == FLOOD and len(roots) > 1:
        raise click.UsageError('flood can be started from a single root')
    asyncio.run(_run(graph, protocol, roots,
                     idle_timeout=idle_timeout,
                     logger_factory=logger_factory))


async def _run(graph: Graph,
               protocol: str,
               roots: Sequence[str],
               *,
               idle_timeout: Optional[float],
               logger_factory: LoggerFactory) -> None:
    try:
        network = Network.from_graph(graph,
                                     idle_timeout=idle_timeout,
                                     listener=_echo_event,
                                     logger_factory=logger_factory)
    except ValueError as error:
        raise click.UsageError(f'invalid graph: {error}')
    await network.start()
    try:
        if protocol == ELECTION:
            await network.elect(*roots)
        else:
            await network.flood(*roots)
        replies = await network.query()
    finally:
        await network.stop()
    click.echo('-' * 46)
    for line in report.replies_to_lines(replies):
        click.echo(line)
    if protocol == FLOOD:
        click.echo(report.connectivity_to_line(is_connected(replies)))


def _echo_event(event: Event) -> None:
    line = report.event_to_line(event)
    if line is not None:
        click.echo(line)


def _load_module_from_path(name: str, path: str) -> ModuleType:
    spec = importlib.util.spec_from_file_location(name, path)
    result = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(result)
    return result


if __name__ == '__main__':
    main()
