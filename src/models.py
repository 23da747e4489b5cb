from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any

from errors import MalformedResponseError


class TranscriptSegment(BaseModel):
    """One timed line of a caption track, in seconds."""
    model_config = ConfigDict(frozen=True)

    text: str
    start: float
    duration: float


class CaptionTrackReference(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    base_url: str = Field(alias="baseUrl")


class SummaryChoice(BaseModel):
    model_config = ConfigDict(extra="allow")

    text: str
    index: Optional[int] = None
    finish_reason: Optional[str] = None


class SummaryResponse(BaseModel):
    """Completion structure returned by the relay; unknown upstream keys pass through."""
    model_config = ConfigDict(extra="allow", protected_namespaces=())

    choices: List[SummaryChoice] = Field(default_factory=list)
    model: Optional[str] = None
    usage: Optional[Dict[str, Any]] = None

    @property
    def text(self) -> str:
        if not self.choices:
            raise MalformedResponseError("Summary response has no choices")
        return self.choices[0].text


class PageKind(str, Enum):
    YOUTUBE = "youtube"
    WIKIPEDIA = "wikipedia"
    SELECTION = "selection"


class ExplainStatus(str, Enum):
    OK = "ok"
    PARSING_FAILED = "parsing_failed"
    SUMMARY_FAILED = "summary_failed"
    EMPTY = "empty"


class Extraction(BaseModel):
    kind: PageKind
    text: str
    segments: List[TranscriptSegment] = Field(default_factory=list)


class ExplainResult(BaseModel):
    kind: PageKind
    status: ExplainStatus
    source: str = ""
    segments: List[TranscriptSegment] = Field(default_factory=list)
    summary: Optional[str] = None
    error: Optional[str] = None


class SummarizeRequest(BaseModel):
    text: str = ""


class ExplainRequest(BaseModel):
    url: str
    html: Optional[str] = None
    selection: Optional[str] = None
