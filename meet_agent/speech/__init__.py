from .credentials import AccessToken, GoogleCredentials
from .recognizer import SpeechRecognizer
from .synthesizer import SpeechSynthesizer

__all__ = ["AccessToken", "GoogleCredentials", "SpeechRecognizer", "SpeechSynthesizer"]
