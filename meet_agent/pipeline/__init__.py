from .bridge import PipelineBridge
from .runner import CycleOutcome, PipelineRunner
from .session import ConnectionSession
from .playback import MessageSender, PlaybackSequencer
from .responder import ReplyResult, ResponseGenerator

__all__ = [
    "ConnectionSession",
    "CycleOutcome",
    "MessageSender",
    "PipelineBridge",
    "PipelineRunner",
    "PlaybackSequencer",
    "ReplyResult",
    "ResponseGenerator",
]
