import logging
from asyncio import (AbstractEventLoop,
                     Future,
                     Queue,
                     TimeoutError,
                     get_event_loop,
                     wait_for)
from typing import (Any,
                    Collection,
                    Dict,
                    Optional,
                    Tuple)

from reprit import seekers
from reprit.base import generate_repr
from yarl import URL

from .event import (Event,
                    EventKind,
                    ignore_event)
from .hints import (Listener,
                    NodeId,
                    Time)
from .messages import (Call,
                       ElectionCall,
                       FloodCall,
                       MessageKind,
                       QueryCall,
                       QueryReply,
                       SetIdCall,
                       SetNeighboursCall,
                       StartElectionCall,
                       StartFloodCall,
                       StopCall,
                       call_from_json)
from .node_state import (NodeState,
                         Uninitialized,
                         to_id,
                         to_neighbours,
                         visit)
from .sender import (ReceiverUnavailable,
                     Sender)

Envelope = Tuple[Call, Optional[Future]]


class Node:
    __slots__ = ('_idle_timeout', '_inbox', '_listener', '_logger', '_loop',
                 '_pending', '_running', '_sender', '_state', '_task', '_url',
                 '__weakref__')

    @classmethod
    def from_url(cls,
                 url: URL,
                 *,
                 idle_timeout: Optional[Time] = None,
                 listener: Optional[Listener] = None,
                 logger: Optional[logging.Logger] = None,
                 loop: Optional[AbstractEventLoop] = None,
                 sender: Sender) -> 'Node':
        return cls(url, NodeState(),
                   idle_timeout=idle_timeout,
                   listener=ignore_event if listener is None else listener,
                   logger=(logging.getLogger(url.authority)
                           if logger is None
                           else logger),
                   loop=get_event_loop() if loop is None else loop,
                   sender=sender)

    def __init__(self,
                 _url: URL,
                 _state: NodeState,
                 *,
                 idle_timeout: Optional[Time],
                 listener: Listener,
                 logger: logging.Logger,
                 loop: AbstractEventLoop,
                 sender: Sender) -> None:
        assert idle_timeout is None or idle_timeout > 0, idle_timeout
        self._url, self._state = _url, _state
        self._idle_timeout = idle_timeout
        self._inbox: Queue = Queue()
        self._listener = listener
        self._logger = logger
        self._loop = loop
        self._pending = 0
        self._running = False
        self._sender = sender
        self._task: Optional[Future] = None

    __repr__ = generate_repr(__init__,
                             field_seeker=seekers.complex_)

    @property
    def idle_timeout(self) -> Optional[Time]:
        return self._idle_timeout

    @property
    def is_idle(self) -> bool:
        return not self._pending

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def loop(self) -> AbstractEventLoop:
        return self._loop

    @property
    def sender(self) -> Sender:
        return self._sender

    @property
    def url(self) -> URL:
        return self._url

    def deliver(self, call: Call) -> None:
        self._put(call, None)

    def request(self, call: Call) -> Future:
        result = self._loop.create_future()
        self._put(call, result)
        return result

    def start(self) -> None:
        if self.is_running:
            raise RuntimeError('is already running')
        elif self._task is not None:
            raise RuntimeError('has already been stopped')
        self._running = True
        self._task = self._loop.create_task(self._run())

    async def join(self) -> None:
        await self._inbox.join()

    async def query(self) -> QueryReply:
        return await self.request(QueryCall())

    async def receive_json(self,
                           kind: MessageKind,
                           message: Dict[str, Any]
                           ) -> Optional[Dict[str, Any]]:
        reply = await self.request(call_from_json(kind, message))
        return None if reply is None else reply.as_json()

    async def set_id(self, node_id: NodeId) -> None:
        await self.request(SetIdCall(node_id))

    async def set_neighbours(self, urls: Collection[URL]) -> None:
        await self.request(SetNeighboursCall(urls))

    async def start_election(self) -> None:
        await self.request(StartElectionCall())

    async def start_flood(self) -> None:
        await self.request(StartFloodCall())

    async def stop(self) -> None:
        await self.request(StopCall())

    async def wait_closed(self) -> None:
        if self._task is not None:
            await self._task

    def _accept_leader(self, leader_id: NodeId,
                       neighbours: Collection[URL]) -> None:
        self.logger.info(f'{self._name} accepts {leader_id} as leader')
        self._state.leader_id = leader_id
        self._broadcast(ElectionCall(leader_id), neighbours)
        self._emit(EventKind.LEADER_ACCEPTED, leader_id)

    def _broadcast(self, call: Call, urls: Collection[URL]) -> None:
        for url in urls:
            try:
                self._sender.send(url, call)
            except ReceiverUnavailable:
                self.logger.warning(f'{self._name} cannot reach {url}')
                self._emit(EventKind.NEIGHBOUR_UNREACHABLE, url)

    def _drop_pending(self) -> None:
        while not self._inbox.empty():
            call, reply = self._inbox.get_nowait()
            self.logger.debug(f'{self._name} drops {call}')
            if reply is not None and not reply.done():
                reply.set_exception(ReceiverUnavailable(self.url))
            self._inbox.task_done()
            self._pending -= 1

    def _emit(self, kind: EventKind, parameters: Any = None) -> None:
        event = Event(kind, self._state.id, parameters)
        try:
            self._listener(event)
        except Exception:
            self.logger.exception(f'{self._name} failed to report {event}:')

    @property
    def _name(self) -> str:
        return (self.url.authority
                if self._state.id is None
                else f'{self.url.authority}({self._state.id})')

    def _process(self, call: Call) -> Optional[QueryReply]:
        self.logger.debug(f'{self._name} processes {call}')
        kind = call.kind
        if kind is MessageKind.SET_ID:
            self._process_set_id(call)
        elif kind is MessageKind.SET_NEIGHBOURS:
            self._process_set_neighbours(call)
        elif kind is MessageKind.START_ELECTION:
            self._process_start_election(call)
        elif kind is MessageKind.ELECTION:
            self._process_election(call)
        elif kind is MessageKind.START_FLOOD:
            self._process_start_flood(call)
        elif kind is MessageKind.FLOOD:
            self._process_flood(call)
        elif kind is MessageKind.QUERY:
            return self._process_query(call)
        else:
            assert kind is MessageKind.STOP, kind
            self._process_stop(call)
        return None

    def _process_election(self, call: ElectionCall) -> None:
        candidate, state = call.candidate, self._state
        if state.leader_id is None:
            node_id, neighbours = to_id(state), to_neighbours(state)
            if node_id < candidate:
                self.logger.debug(f'{self._name} rejects {candidate} '
                                  'in favor of itself')
                self._emit(EventKind.LEADER_REJECTED, candidate)
            self._accept_leader(min(candidate, node_id), neighbours)
        elif candidate < state.leader_id:
            self._accept_leader(candidate, to_neighbours(state))
        else:
            self.logger.debug(f'{self._name} rejects {candidate} '
                              f'in favor of {state.leader_id}')
            self._emit(EventKind.LEADER_REJECTED, candidate)

    def _process_flood(self, call: FloodCall) -> None:
        state = self._state
        if state.visited:
            self.logger.debug(f'{self._name} ignores flood '
                              f'from {call.node_id}')
            self._emit(EventKind.FLOOD_IGNORED, call.node_id)
            return
        node_id, neighbours = to_id(state), to_neighbours(state)
        self.logger.info(f'{self._name} is reached from {call.node_id}')
        visit(state, call.node_id)
        self._broadcast(FloodCall(node_id), neighbours)
        self._emit(EventKind.FLOOD_REACHED, call.node_id)

    def _process_query(self, call: QueryCall) -> QueryReply:
        state = self._state
        result = QueryReply(state.id,
                            is_root=state.is_root,
                            leader_id=state.leader_id,
                            parent_id=state.parent_id,
                            visited=state.visited)
        self._emit(EventKind.STATUS_REPORTED, result)
        return result

    def _process_set_id(self, call: SetIdCall) -> None:
        self._state.id = call.node_id

    def _process_set_neighbours(self, call: SetNeighboursCall) -> None:
        self._state.neighbours = call.urls

    def _process_start_election(self, call: StartElectionCall) -> None:
        node_id = to_id(self._state)
        self.logger.info(f'{self._name} starts election')
        self._emit(EventKind.ELECTION_STARTED)
        self._process_election(ElectionCall(node_id))

    def _process_start_flood(self, call: StartFloodCall) -> None:
        state = self._state
        node_id, neighbours = to_id(state), to_neighbours(state)
        if state.visited:
            self.logger.debug(f'{self._name} is already visited '
                              'and does not start flood')
            self._emit(EventKind.FLOOD_IGNORED)
            return
        self.logger.info(f'{self._name} starts flood')
        visit(state, None)
        self._broadcast(FloodCall(node_id), neighbours)
        self._emit(EventKind.FLOOD_STARTED)

    def _process_stop(self, call: StopCall) -> None:
        self.logger.debug(f'{self._name} stops')
        self._emit(EventKind.STOPPED)

    def _put(self, call: Call, reply: Optional[Future]) -> None:
        if not self.is_running:
            raise ReceiverUnavailable(self.url)
        envelope: Envelope = call, reply
        self._inbox.put_nowait(envelope)
        self._pending += 1

    async def _receive(self) -> Envelope:
        return await wait_for(self._inbox.get(), self._idle_timeout)

    async def _run(self) -> None:
        try:
            while True:
                try:
                    call, reply = await self._receive()
                except TimeoutError:
                    self.logger.warning(f'{self._name} has received nothing '
                                        f'for {self._idle_timeout}s '
                                        'and stops')
                    self._emit(EventKind.TIMED_OUT, self._idle_timeout)
                    break
                try:
                    result = self._process(call)
                except Exception as error:
                    if reply is not None and not reply.done():
                        reply.set_exception(error)
                    if not isinstance(error, Uninitialized):
                        self.logger.exception(f'{self._name} failed '
                                              f'processing {call}:')
                        raise
                    self.logger.error(f'{self._name} cannot process {call}: '
                                      f'{error}')
                else:
                    if reply is not None and not reply.done():
                        reply.set_result(result)
                finally:
                    self._inbox.task_done()
                    self._pending -= 1
                if call.kind is MessageKind.STOP:
                    break
        finally:
            self._running = False
            self._drop_pending()
