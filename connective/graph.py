from .core.graph import (Event,
                         EventKind,
                         Graph,
                         MessageKind,
                         Network,
                         Node,
                         NodeId,
                         QueryReply,
                         Receiver,
                         ReceiverUnavailable,
                         Sender,
                         Uninitialized,
                         communication,
                         is_connected,
                         report,
                         to_leaders,
                         to_spanning_tree)

Event = Event
EventKind = EventKind
Graph = Graph
MessageKind = MessageKind
Network = Network
Node = Node
NodeId = NodeId
QueryReply = QueryReply
Receiver = Receiver
ReceiverUnavailable = ReceiverUnavailable
Sender = Sender
Uninitialized = Uninitialized
communication = communication
is_connected = is_connected
report = report
to_leaders = to_leaders
to_spanning_tree = to_spanning_tree
