"""Google Natural Language API (v1) service.

Runs entity, sentiment, syntax and classification analysis on text and
flattens the nested JSON response into DataFrames.
"""

from collections.abc import Sequence
from typing import Any, Literal

import pandas as pd

from glang.config.profile import LANGUAGE_BASE_URL
from glang.exceptions import InvalidArgumentError
from glang.logger import get_logger
from glang.ratelimit.gate import RateGate
from glang.schemas.results import NlpResult
from glang.services.base import BaseService, as_string_list
from glang.transport.base import BaseTransport

logger = get_logger(__name__)

NlpType = Literal[
    "annotateText",
    "analyzeEntities",
    "analyzeSentiment",
    "analyzeSyntax",
    "analyzeEntitySentiment",
    "classifyText",
]
DocumentType = Literal["PLAIN_TEXT", "HTML"]
EncodingType = Literal["UTF8", "UTF16", "UTF32", "NONE"]

NLP_TYPES: tuple[str, ...] = (
    "annotateText",
    "analyzeEntities",
    "analyzeSentiment",
    "analyzeSyntax",
    "analyzeEntitySentiment",
    "classifyText",
)
DOCUMENT_TYPES: tuple[str, ...] = ("PLAIN_TEXT", "HTML")
ENCODING_TYPES: tuple[str, ...] = ("UTF8", "UTF16", "UTF32", "NONE")

ANNOTATE_FEATURES = {
    "extractSyntax": True,
    "extractEntities": True,
    "extractDocumentSentiment": True,
    "extractEntitySentiment": True,
}


def _parse_sentences(sentences: list[dict[str, Any]]) -> pd.DataFrame:
    rows = []
    for sentence in sentences:
        text = sentence.get("text", {})
        sentiment = sentence.get("sentiment", {})
        rows.append(
            {
                "content": text.get("content"),
                "beginOffset": text.get("beginOffset"),
                "magnitude": sentiment.get("magnitude"),
                "score": sentiment.get("score"),
            }
        )
    return pd.DataFrame(rows, columns=["content", "beginOffset", "magnitude", "score"])


def _parse_tokens(tokens: list[dict[str, Any]]) -> pd.DataFrame:
    rows = []
    for token in tokens:
        text = token.get("text", {})
        edge = token.get("dependencyEdge", {})
        row: dict[str, Any] = {
            "content": text.get("content"),
            "beginOffset": text.get("beginOffset"),
        }
        # partOfSpeech carries tag plus a dozen morphology fields
        row.update(token.get("partOfSpeech", {}))
        row["headTokenIndex"] = edge.get("headTokenIndex")
        row["label"] = edge.get("label")
        row["lemma"] = token.get("lemma")
        rows.append(row)
    return pd.DataFrame(rows)


def _parse_entities(entities: list[dict[str, Any]]) -> pd.DataFrame:
    """One row per entity mention, entity fields repeated."""
    columns = [
        "name",
        "type",
        "salience",
        "mid",
        "wikipedia_url",
        "magnitude",
        "score",
        "beginOffset",
        "mention_content",
        "mention_type",
    ]
    rows = []
    for entity in entities:
        metadata = entity.get("metadata", {})
        sentiment = entity.get("sentiment", {})
        base = {
            "name": entity.get("name"),
            "type": entity.get("type"),
            "salience": entity.get("salience"),
            "mid": metadata.get("mid"),
            "wikipedia_url": metadata.get("wikipedia_url"),
            "magnitude": sentiment.get("magnitude"),
            "score": sentiment.get("score"),
        }
        mentions = entity.get("mentions") or [{}]
        for mention in mentions:
            text = mention.get("text", {})
            rows.append(
                {
                    **base,
                    "beginOffset": text.get("beginOffset"),
                    "mention_content": text.get("content"),
                    "mention_type": mention.get("type"),
                }
            )
    return pd.DataFrame(rows, columns=columns)


def _parse_categories(categories: list[dict[str, Any]]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"name": c.get("name"), "confidence": c.get("confidence")} for c in categories],
        columns=["name", "confidence"],
    )


def parse_nlp_response(text: str, response: dict[str, Any]) -> NlpResult:
    """Flatten a Natural Language response into an NlpResult."""
    sentiment = response.get("documentSentiment")
    return NlpResult(
        text=text,
        sentences=_parse_sentences(response.get("sentences", [])),
        tokens=_parse_tokens(response.get("tokens", [])),
        entities=_parse_entities(response.get("entities", [])),
        classify_text=_parse_categories(response.get("categories", [])),
        document_sentiment=(
            {k: float(v) for k, v in sentiment.items()} if sentiment else None
        ),
        language=response.get("language"),
    )


class NaturalLanguage(BaseService):
    """Client for the Natural Language API."""

    def __init__(
        self,
        gate: RateGate,
        transport: BaseTransport,
        base_url: str = LANGUAGE_BASE_URL,
    ):
        super().__init__(gate, transport)
        self.base_url = base_url.rstrip("/")

    def analyze(
        self,
        string: str,
        nlp_type: NlpType = "annotateText",
        type: DocumentType = "PLAIN_TEXT",
        language: str | None = None,
        encoding_type: EncodingType = "UTF8",
    ) -> NlpResult:
        """Analyse one document.

        Args:
            string: Text (or HTML) to analyse.
            nlp_type: API method; ``annotateText`` runs syntax, entity and sentiment
                analysis together.
            type: Document type, ``PLAIN_TEXT`` or ``HTML``.
            language: Document language; detected by the API when None.
            encoding_type: Encoding used to compute ``beginOffset`` values.

        Returns:
            Parsed analysis.

        Raises:
            InvalidArgumentError: If an option is outside its allowed values.
            TransportError: If the API call fails.
        """
        if not isinstance(string, str) or not string:
            raise InvalidArgumentError("string must be non-empty text", argument="string")
        if nlp_type not in NLP_TYPES:
            raise InvalidArgumentError(
                f"nlp_type must be one of {NLP_TYPES}, got {nlp_type!r}",
                argument="nlp_type",
            )
        if type not in DOCUMENT_TYPES:
            raise InvalidArgumentError(
                f"type must be one of {DOCUMENT_TYPES}, got {type!r}", argument="type"
            )
        if encoding_type not in ENCODING_TYPES:
            raise InvalidArgumentError(
                f"encoding_type must be one of {ENCODING_TYPES}, got {encoding_type!r}",
                argument="encoding_type",
            )

        document: dict[str, Any] = {"type": type, "content": string}
        if language:
            document["language"] = language

        body: dict[str, Any] = {"document": document}
        # classifyText takes no encodingType
        if nlp_type != "classifyText":
            body["encodingType"] = encoding_type
        if nlp_type == "annotateText":
            body["features"] = dict(ANNOTATE_FEATURES)

        logger.info("Passed %s: %d characters", nlp_type, len(string))

        response = self._gated_call(
            len(string), "POST", f"{self.base_url}/documents:{nlp_type}", body=body
        )
        return parse_nlp_response(string, response)

    def analyze_many(
        self, strings: str | Sequence[str], **kwargs: Any
    ) -> list[NlpResult]:
        """Analyse several documents, one request each.

        Args:
            strings: Texts to analyse.
            **kwargs: Options forwarded to ``analyze``.

        Returns:
            One result per input, in order.
        """
        texts = as_string_list(strings)
        return [self.analyze(text, **kwargs) for text in texts]
