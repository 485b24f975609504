"""Client facade bundling the rate gate, transport and services.

All services of one client share a single rate gate, so their combined
character volume counts against one quota window.
"""

from pathlib import Path
from typing import Any

from glang.config.profile import ClientProfile
from glang.logger import get_logger
from glang.ratelimit.gate import RateGate
from glang.services.nlp import NaturalLanguage
from glang.services.speech import SpeechRecognizer
from glang.services.translate import Translator
from glang.transport.base import BaseTransport
from glang.transport.http import RequestsTransport

logger = get_logger(__name__)


class LanguageClient:
    """Entry point to the Translation, Natural Language and Speech APIs.

    Example:
        with LanguageClient.from_yaml(Path("glang.yaml")) as client:
            df = client.translator.translate("Bonjour", target="en")

    Attributes:
        profile: Configuration the client was built from.
        gate: Rate gate shared by every service.
        transport: Authenticated transport shared by every service.
        translator: Translation API service.
        nlp: Natural Language API service.
        speech: Speech-to-Text API service.
    """

    def __init__(
        self,
        profile: ClientProfile | None = None,
        transport: BaseTransport | None = None,
        gate: RateGate | None = None,
    ):
        """Initialize the client.

        Args:
            profile: Configuration; defaults plus environment when None.
            transport: Transport override; built from the profile when None.
            gate: Rate gate override; built from the profile when None.

        Raises:
            ConfigError: If no transport is given and the profile lacks credentials.
        """
        self.profile = profile if profile is not None else ClientProfile.from_env()
        self.gate = gate or RateGate.from_config(self.profile.rate_gate)
        self.transport = transport or RequestsTransport.from_config(
            self.profile.transport
        )

        urls = self.profile.transport
        self.translator = Translator(self.gate, self.transport, urls.translate_url)
        self.nlp = NaturalLanguage(self.gate, self.transport, urls.language_url)
        self.speech = SpeechRecognizer(self.gate, self.transport, urls.speech_url)

        logger.debug(
            "Client ready: character_limit=%d, delay_limit=%.0fs, rate_limit=%.2fs",
            self.gate.character_limit,
            self.gate.delay_limit_seconds,
            self.gate.per_request_delay_seconds,
        )

    @classmethod
    def from_yaml(cls, path: Path, **kwargs: Any) -> "LanguageClient":
        """Build a client from a YAML profile, with environment overrides.

        Args:
            path: YAML configuration file.
            **kwargs: Transport or gate overrides.

        Returns:
            Configured client.
        """
        profile = ClientProfile.from_env(ClientProfile.from_yaml(path))
        return cls(profile, **kwargs)

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "LanguageClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
