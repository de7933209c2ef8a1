from .generator import ReplyGenerator
from .segmenter import SentenceSegmenter

__all__ = ["ReplyGenerator", "SentenceSegmenter"]
