from .wav import pcm16_to_wav, wav_to_pcm16
from .ingest import IngestState, IngestAction, AudioIngestBuffer

__all__ = ["AudioIngestBuffer", "IngestAction", "IngestState", "pcm16_to_wav", "wav_to_pcm16"]
