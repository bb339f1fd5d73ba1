"""Scan request/response schemas.

The response mirrors ScanResult.to_dict(); field names are camelCase on
the wire because the rendering layer consumes them directly.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ScanRequest(BaseModel):
    """Request to scan a URL.

    Both fields are optional here so that missing values reach the scanner's
    own validation and produce its error message.
    """

    url: str | None = Field(None, description="Page URL; https:// is assumed if no scheme")
    mode: str | None = Field(None, description='"block" or "allow"')


class RecommendationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    snippet: str | None = None
    snippet_lang: str | None = Field(None, alias="snippetLang")


class CheckResultResponse(BaseModel):
    id: str
    name: str
    score: int = Field(..., ge=0, le=100)
    weight: int
    status: Literal["pass", "warn", "fail"]
    summary: str
    details: list[str]
    recommendation: RecommendationResponse | None = None


class CrawlerVerdictResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    user_agent: str = Field(..., alias="userAgent")
    operator: str
    purpose: str
    respects_robots: bool | str = Field(..., alias="respectsRobots")
    allowed: bool


class InsightResponse(BaseModel):
    type: Literal["good", "warning", "tip"]
    text: str


class ScanResponse(BaseModel):
    """Complete scan result."""

    model_config = ConfigDict(populate_by_name=True)

    url: str
    mode: Literal["block", "allow"]
    score: int = Field(..., ge=0, le=100)
    checks: list[CheckResultResponse]
    robots_txt_found: bool = Field(..., alias="robotsTxtFound")
    robots_txt_url: str = Field(..., alias="robotsTxtUrl")
    bots: list[CrawlerVerdictResponse]
    summary: str
    scanned_at: datetime = Field(..., alias="scannedAt")
    insights: list[InsightResponse]
