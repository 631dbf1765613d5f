from .debounce import Debouncer
from .pipeline import DerivationPipeline
from .selection import PacketSelection
from .session import CaptureSession
from .stream_buffer import MAX_PACKETS, StreamBuffer

__all__ = [
    "CaptureSession",
    "Debouncer",
    "DerivationPipeline",
    "MAX_PACKETS",
    "PacketSelection",
    "StreamBuffer",
]
