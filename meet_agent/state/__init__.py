from .runtime import RuntimeDeps
from .settings import AppSettings
from .conversation import Turn, ConversationState

__all__ = ["AppSettings", "ConversationState", "RuntimeDeps", "Turn"]
