"""
Content analysis schemas shared across services and endpoints.

Field names on the wire are camelCase, matching the browser extension; the
models accept snake_case as well.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from services.classification import ContentType, DetectionSettings


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SentimentRequest(BaseModel):
    """Request for sentiment scoring."""

    text: str = Field(..., min_length=1, description="Text to score")
    threshold: float = Field(0.5, ge=0.0, le=1.0, description="Scores below this are reported as negative")


class RephraseRequest(BaseModel):
    """Request for rephrasing flagged content."""

    text: str = Field(..., min_length=1, description="Text to rephrase")
    type: ContentType = Field(ContentType.negative, description="Framing: warning, negative, or info")


class ClassifyRequest(CamelModel):
    """Request for a single-unit verdict."""

    text: str = Field(..., min_length=1)
    settings: DetectionSettings = Field(default_factory=DetectionSettings)


class ClassifyResponse(BaseModel):
    type: Optional[ContentType] = Field(None, description="Verdict; null when no action is needed")


class PageTextUnit(CamelModel):
    id: Optional[str] = Field(None, description="Caller-side identifier of the page element")
    text: str = Field(..., description="Text content of the element")


class PageScanRequest(CamelModel):
    """Request to scan the text units of one page."""

    url: str = Field(..., min_length=1, description="Page URL")
    domain: Optional[str] = Field(None, description="Page host; derived from url when omitted")
    settings: DetectionSettings = Field(default_factory=DetectionSettings)
    units: List[PageTextUnit] = Field(..., min_length=1)
    persist: bool = Field(True, description="Store flagged results")


class PageScanResult(CamelModel):
    unit_id: Optional[str] = None
    type: ContentType
    original_content: str
    rephrased_content: str
    record_id: Optional[int] = None


class PageScanResponse(CamelModel):
    url: str
    domain: str
    scanned: int
    flagged: int
    failed: int
    results: List[PageScanResult] = Field(default_factory=list)


class AnalysisResultCreate(CamelModel):
    """An analysis result submitted by the extension after it rephrased a passage."""

    type: ContentType
    original_content: str = Field(..., min_length=1)
    rephrased_content: Optional[str] = None
    url: str = Field(..., min_length=1)
    domain: Optional[str] = None


class AnalysisResultResponse(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    type: ContentType
    original_content: str
    rephrased_content: Optional[str] = None
    url: str
    domain: str
    timestamp: datetime


class ClearResultsResponse(BaseModel):
    deleted: int
