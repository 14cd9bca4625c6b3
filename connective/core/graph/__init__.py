from . import (communication,
               report)
from .event import (Event,
                    EventKind)
from .hints import (Graph,
                    NodeId)
from .messages import (MessageKind,
                       QueryReply)
from .network import (Network,
                      is_connected,
                      to_leaders,
                      to_spanning_tree)
from .node import Node
from .node_state import Uninitialized
from .receiver import Receiver
from .sender import (ReceiverUnavailable,
                     Sender)
