"""REST services for Translation, Natural Language and Speech."""

from glang.services.nlp import NaturalLanguage
from glang.services.speech import SpeechRecognizer
from glang.services.translate import Translator

__all__ = ["Translator", "NaturalLanguage", "SpeechRecognizer"]
