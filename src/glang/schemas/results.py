"""Service result models.

Natural Language and Speech responses are flattened into DataFrames held
by these models; the Translation service returns DataFrames directly.
"""

from typing import Any

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field


class NlpResult(BaseModel):
    """Parsed response of one Natural Language request.

    Attributes:
        text: The analysed text.
        sentences: One row per sentence (content, beginOffset, magnitude, score).
        tokens: One row per token (content, beginOffset, tag, lemma, ...).
        entities: One row per entity (name, type, salience, mid, wikipedia_url, ...).
        classify_text: One row per category (name, confidence).
        document_sentiment: Overall magnitude and score, when requested.
        language: Language the API reports for the document.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")

    text: str = Field(..., description="The analysed text")
    sentences: pd.DataFrame = Field(default_factory=pd.DataFrame)
    tokens: pd.DataFrame = Field(default_factory=pd.DataFrame)
    entities: pd.DataFrame = Field(default_factory=pd.DataFrame)
    classify_text: pd.DataFrame = Field(default_factory=pd.DataFrame)
    document_sentiment: dict[str, float] | None = Field(default=None)
    language: str | None = Field(default=None)


class SpeechResult(BaseModel):
    """Parsed speech recognition response.

    Attributes:
        transcript: One row per alternative (transcript, confidence).
        timings: One row per recognised word (startTime, endTime, word).
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")

    transcript: pd.DataFrame = Field(default_factory=pd.DataFrame)
    timings: pd.DataFrame = Field(default_factory=pd.DataFrame)


class SpeechOperation(BaseModel):
    """Handle to a long-running recognition job.

    Attributes:
        name: Operation name used to poll for the result.
        done: Whether the provider reports the job finished.
        metadata: Progress metadata as returned by the API.
    """

    model_config = ConfigDict(strict=True, extra="forbid")

    name: str = Field(..., min_length=1)
    done: bool = Field(default=False)
    metadata: dict[str, Any] = Field(default_factory=dict)
