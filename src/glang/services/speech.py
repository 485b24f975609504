"""Google Speech-to-Text API (v1) service.

Transcribes audio held locally (sent inline as base64) or in Cloud Storage
(``gs://`` URIs), synchronously or as a long-running operation.
"""

import base64
from pathlib import Path
from typing import Any, Literal

import pandas as pd

from glang.config.profile import SPEECH_BASE_URL
from glang.exceptions import InvalidArgumentError, OperationError
from glang.logger import get_logger
from glang.ratelimit.gate import RateGate
from glang.schemas.results import SpeechOperation, SpeechResult
from glang.services.base import BaseService, extract
from glang.transport.base import BaseTransport

logger = get_logger(__name__)

AudioEncoding = Literal[
    "ENCODING_UNSPECIFIED",
    "LINEAR16",
    "FLAC",
    "MULAW",
    "AMR",
    "AMR_WB",
    "OGG_OPUS",
    "SPEEX_WITH_HEADER_BYTE",
]

AUDIO_ENCODINGS: tuple[str, ...] = (
    "ENCODING_UNSPECIFIED",
    "LINEAR16",
    "FLAC",
    "MULAW",
    "AMR",
    "AMR_WB",
    "OGG_OPUS",
    "SPEEX_WITH_HEADER_BYTE",
)


def _audio_payload(audio_source: str | Path) -> dict[str, str]:
    source = str(audio_source)
    if source.startswith("gs://"):
        return {"uri": source}

    path = Path(source)
    if not path.is_file():
        raise InvalidArgumentError(
            f"Audio file not found: {path}", argument="audio_source"
        )
    content = base64.b64encode(path.read_bytes()).decode("ascii")
    logger.debug("Inlined audio: %s (%d base64 chars)", path, len(content))
    return {"content": content}


def parse_speech_response(response: dict[str, Any]) -> SpeechResult:
    """Flatten recognition results into transcript and word timing frames."""
    transcripts = []
    timings = []
    for result in response.get("results", []):
        for alternative in result.get("alternatives", []):
            transcripts.append(
                {
                    "transcript": alternative.get("transcript"),
                    "confidence": alternative.get("confidence"),
                }
            )
            for word in alternative.get("words", []):
                timings.append(
                    {
                        "startTime": word.get("startTime"),
                        "endTime": word.get("endTime"),
                        "word": word.get("word"),
                    }
                )
    return SpeechResult(
        transcript=pd.DataFrame(transcripts, columns=["transcript", "confidence"]),
        timings=pd.DataFrame(timings, columns=["startTime", "endTime", "word"]),
    )


class SpeechRecognizer(BaseService):
    """Client for the Speech-to-Text API.

    Audio carries no characters, so requests only get the fixed
    per-request pause from the rate gate.
    """

    def __init__(
        self,
        gate: RateGate,
        transport: BaseTransport,
        base_url: str = SPEECH_BASE_URL,
    ):
        super().__init__(gate, transport)
        self.base_url = base_url.rstrip("/")

    def recognize(
        self,
        audio_source: str | Path,
        encoding: AudioEncoding = "LINEAR16",
        sample_rate_hertz: int | None = None,
        language_code: str = "en-US",
        max_alternatives: int = 1,
        profanity_filter: bool = False,
        speech_contexts: list[str] | None = None,
        asynch: bool = False,
    ) -> SpeechResult | SpeechOperation:
        """Transcribe audio.

        Args:
            audio_source: Local file path or ``gs://`` URI.
            encoding: Audio encoding of the source.
            sample_rate_hertz: Sample rate; optional for FLAC and WAV headers.
            language_code: BCP-47 language of the speech.
            max_alternatives: Maximum transcripts per result (1-30).
            profanity_filter: Mask profanities in transcripts.
            speech_contexts: Phrase hints that bias recognition.
            asynch: Start a long-running operation instead of waiting.

        Returns:
            SpeechResult for synchronous calls, SpeechOperation otherwise.

        Raises:
            InvalidArgumentError: If the source or an option is invalid.
            TransportError: If the API call fails.
        """
        if encoding not in AUDIO_ENCODINGS:
            raise InvalidArgumentError(
                f"encoding must be one of {AUDIO_ENCODINGS}, got {encoding!r}",
                argument="encoding",
            )
        if not 1 <= max_alternatives <= 30:
            raise InvalidArgumentError(
                "max_alternatives must be between 1 and 30",
                argument="max_alternatives",
            )
        if sample_rate_hertz is not None and not 8000 <= sample_rate_hertz <= 48000:
            raise InvalidArgumentError(
                "sample_rate_hertz must be between 8000 and 48000",
                argument="sample_rate_hertz",
            )

        config: dict[str, Any] = {
            "encoding": encoding,
            "languageCode": language_code,
            "maxAlternatives": max_alternatives,
            "profanityFilter": profanity_filter,
            "enableWordTimeOffsets": True,
        }
        if sample_rate_hertz is not None:
            config["sampleRateHertz"] = sample_rate_hertz
        if speech_contexts:
            config["speechContexts"] = [{"phrases": list(speech_contexts)}]

        body = {"config": config, "audio": _audio_payload(audio_source)}

        if asynch:
            logger.info("Starting long-running recognition: %s", audio_source)
            response = self._paused_call(
                "POST", f"{self.base_url}/speech:longrunningrecognize", body=body
            )
            name = extract(response, "name")
            return SpeechOperation(name=str(name), metadata=response.get("metadata", {}))

        logger.info("Recognizing speech: %s", audio_source)
        response = self._paused_call("POST", f"{self.base_url}/speech:recognize", body=body)
        return parse_speech_response(response)

    def get_operation(
        self, operation: SpeechOperation | str
    ) -> SpeechResult | SpeechOperation:
        """Poll a long-running recognition.

        Args:
            operation: Operation handle or name from ``recognize(asynch=True)``.

        Returns:
            SpeechResult when finished, otherwise the refreshed operation.

        Raises:
            OperationError: If the finished operation reports an error.
        """
        name = operation.name if isinstance(operation, SpeechOperation) else operation
        response = self._paused_call("GET", f"{self.base_url}/operations/{name}")

        if not response.get("done", False):
            logger.info("Operation %s still running", name)
            return SpeechOperation(
                name=name, done=False, metadata=response.get("metadata", {})
            )

        if "error" in response:
            error = response["error"]
            raise OperationError(
                f"Operation {name} failed: {error.get('message', error)}",
                operation=name,
                code=error.get("code"),
            )

        return parse_speech_response(response.get("response", {}))
