"""Estimation models for Rehab Estimator.

Pydantic models for the rehab estimate call: uploaded photos, finish levels,
the structured Estimation consumed by the investment analysis, and
grounding sources cited by the model.
"""

import base64
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class FinishLevel(str, Enum):
    """Finish quality the estimate is priced for."""

    BUDGET = "Budget"
    STANDARD = "Standard"
    MID_RANGE = "Mid-Range"
    HIGH_END = "High-End"
    LUXURY = "Luxury"


class UploadedFile(BaseModel):
    """A single property photo, base64 encoded, with its MIME type."""

    data: str = Field(
        description="Base64-encoded image payload"
    )
    mime_type: str = Field(
        alias="type",
        description="MIME type (e.g., image/jpeg)"
    )

    class Config:
        populate_by_name = True

    @classmethod
    def from_bytes(cls, raw: bytes, mime_type: str) -> "UploadedFile":
        """Build an UploadedFile from raw image bytes."""
        return cls(data=base64.b64encode(raw).decode("ascii"), mime_type=mime_type)

    def to_bytes(self) -> bytes:
        """Decode the base64 payload."""
        return base64.b64decode(self.data)


class GroundingSource(BaseModel):
    """A web citation returned with a search-grounded response."""

    uri: str = Field(min_length=1, description="Source URL")
    title: str = Field(min_length=1, description="Source page title")


class RepairItem(BaseModel):
    """One row of the itemized breakdown."""

    area: str = Field(description="Area of the property (e.g., Kitchen)")
    observations: str = Field(default="", description="What is visible in the photos")
    recommendations: str = Field(default="", description="Suggested repairs")
    estimated_cost: str = Field(
        default="",
        alias="estimatedCost",
        description="Cost range for the area (e.g., $12,500 - $13,800)"
    )
    difficulty: Optional[int] = Field(
        default=None,
        ge=1,
        le=5,
        description="Difficulty rating (1-5)"
    )

    class Config:
        populate_by_name = True


class EstimationSummary(BaseModel):
    """Project summary section of an estimate."""

    total_estimated_cost: str = Field(
        alias="totalEstimatedCost",
        description="Total cost range (e.g., $55,000 - $60,000)"
    )
    overall_difficulty: Optional[int] = Field(
        default=None,
        alias="overallDifficulty",
        ge=1,
        le=5,
        description="Overall difficulty rating (1-5)"
    )
    assumptions: List[str] = Field(default_factory=list)
    key_risks: List[str] = Field(default_factory=list, alias="keyRisks")
    actionable_advice: List[str] = Field(default_factory=list, alias="actionableAdvice")

    class Config:
        populate_by_name = True


class Estimation(BaseModel):
    """Structured rehab estimate.

    Input contract for the investment analysis call. Built by the caller,
    typically with services.estimate_parser.parse_estimate_markdown.
    """

    summary: EstimationSummary
    repairs: List[RepairItem] = Field(default_factory=list)

    def condition_summary(self) -> str:
        """Join per-area observations into one line for prompting."""
        return ". ".join(f"{r.area}: {r.observations}" for r in self.repairs)


class RehabEstimateResult(BaseModel):
    """Result of the rehab estimate call."""

    markdown: str = Field(description="Model narrative, verbatim")
    sources: List[GroundingSource] = Field(default_factory=list)
