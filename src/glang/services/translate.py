"""Google Translation API (v2) service.

Lists supported languages, detects the language of text and translates
text. Character-bearing calls go through the client's rate gate first.
"""

from collections.abc import Sequence
from typing import Any, Literal

import pandas as pd

from glang.config.profile import TRANSLATE_BASE_URL
from glang.exceptions import InvalidArgumentError, ResponseParseError
from glang.logger import get_logger
from glang.ratelimit.gate import RateGate
from glang.services.base import BaseService, as_string_list, extract
from glang.transport.base import BaseTransport

logger = get_logger(__name__)

TranslateFormat = Literal["text", "html"]
TranslateModel = Literal["nmt", "base"]

_FORMATS = ("text", "html")
_MODELS = ("nmt", "base")


class Translator(BaseService):
    """Client for the Translation API.

    Example:
        translator = Translator(gate, transport)
        df = translator.translate(["Hallo Welt"], target="en")
        print(df["translatedText"])
    """

    def __init__(
        self,
        gate: RateGate,
        transport: BaseTransport,
        base_url: str = TRANSLATE_BASE_URL,
    ):
        super().__init__(gate, transport)
        self.base_url = base_url.rstrip("/")

    def list_languages(self, target: str = "en") -> pd.DataFrame:
        """List languages supported for translation.

        Codes are generally ISO 639-1 identifiers (``en``, ``ja``); some
        are BCP-47 codes with a region (``zh-TW``).

        Args:
            target: Language in which to localise the language names.

        Returns:
            DataFrame with ``language`` and ``name`` columns.

        Raises:
            InvalidArgumentError: If target is not a single string.
        """
        if not isinstance(target, str) or not target:
            raise InvalidArgumentError(
                "target must be a single language code", argument="target"
            )

        response = self.transport.call(
            "GET", f"{self.base_url}/languages", params={"target": target}
        )
        languages = extract(response, "data", "languages")
        return pd.DataFrame(languages, columns=["language", "name"])

    def detect(self, strings: str | Sequence[str]) -> pd.DataFrame:
        """Detect the language of each string.

        Args:
            strings: Text or texts to inspect.

        Returns:
            DataFrame with one row per input: ``text``, ``language``,
            ``confidence`` and ``isReliable``.
        """
        texts = as_string_list(strings)
        char_num = sum(len(t) for t in texts)

        logger.info(
            "Detecting language: %d characters - %s...", char_num, texts[0][:50]
        )

        response = self._gated_call(
            char_num, "POST", f"{self.base_url}/detect", body={"q": texts}
        )
        detections = extract(response, "data", "detections")
        if len(detections) != len(texts):
            raise ResponseParseError(
                f"Expected {len(texts)} detections, got {len(detections)}"
            )

        rows: list[dict[str, Any]] = []
        for text, candidates in zip(texts, detections):
            # Each detection is a list of candidates, best first
            best = candidates[0] if candidates else {}
            rows.append(
                {
                    "text": text,
                    "language": best.get("language"),
                    "confidence": best.get("confidence"),
                    "isReliable": best.get("isReliable"),
                }
            )
        return pd.DataFrame(rows, columns=["text", "language", "confidence", "isReliable"])

    def translate(
        self,
        strings: str | Sequence[str],
        target: str = "en",
        format: TranslateFormat = "text",
        source: str = "",
        model: TranslateModel = "nmt",
    ) -> pd.DataFrame:
        """Translate text into the target language.

        Args:
            strings: Text or texts to translate.
            target: Target language code.
            format: Whether the text is plain ``text`` or ``html``.
            source: Source language code; detected by the API when empty.
            model: Translation model, ``nmt`` or ``base``.

        Returns:
            DataFrame with ``text`` and ``translatedText`` columns, plus
            ``detectedSourceLanguage`` when no source was given.

        Raises:
            InvalidArgumentError: If format, model or target are invalid.
        """
        texts = as_string_list(strings)
        if not isinstance(target, str) or not target:
            raise InvalidArgumentError(
                "target must be a single language code", argument="target"
            )
        if not isinstance(source, str):
            raise InvalidArgumentError(
                "source must be a language code or empty", argument="source"
            )
        if format not in _FORMATS:
            raise InvalidArgumentError(
                f"format must be one of {_FORMATS}, got {format!r}", argument="format"
            )
        if model not in _MODELS:
            raise InvalidArgumentError(
                f"model must be one of {_MODELS}, got {model!r}", argument="model"
            )

        char_num = sum(len(t) for t in texts)
        logger.info("Translating: %d characters - %s...", char_num, texts[0][:50])
        if len(texts) > 1:
            logger.debug("Translating vector of strings > 1: %d", len(texts))

        body: dict[str, Any] = {
            "q": texts,
            "target": target,
            "format": format,
            "model": model,
        }
        if source:
            body["source"] = source

        response = self._gated_call(char_num, "POST", self.base_url, body=body)
        translations = extract(response, "data", "translations")
        if len(translations) != len(texts):
            raise ResponseParseError(
                f"Expected {len(texts)} translations, got {len(translations)}"
            )

        df = pd.DataFrame(translations)
        if "translatedText" not in df.columns:
            raise ResponseParseError("Translation response lacks translatedText")
        df.insert(0, "text", texts)
        return df
