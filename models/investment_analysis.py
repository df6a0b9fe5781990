"""Investment analysis models for Rehab Estimator.

Pydantic models for the investment analysis call. Everything except
suggestedMAO, purchasePrice, investorFit.fitsCriteria and groundingSources
comes from the model and is treated as untrusted: types are lenient and
omitted fields stay unset.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field

from models.estimation import GroundingSource

Amount = Union[str, float, int]

# Free text from the model; numbers, lists or objects are kept as given
ModelText = Any


class RepairLevel(str, Enum):
    """Rehab level classification."""

    LIGHT_COSMETIC = "Light Cosmetic"
    MEDIUM = "Medium"
    HEAVY = "Heavy"
    GUT = "Gut"


class InvestorFit(BaseModel):
    """Deal verdict plus narrative."""

    fits_criteria: Optional[bool] = Field(
        default=None,
        alias="fitsCriteria",
        description="Purchase price at or below MAO (computed locally)"
    )
    analysis: Optional[str] = Field(
        default=None,
        description="Deterministic verdict followed by the model's analysis"
    )

    class Config:
        populate_by_name = True
        extra = "allow"


class Comparable(BaseModel):
    """A comparable sale found by the model."""

    address: Optional[ModelText] = None
    sold_date: Optional[ModelText] = Field(default=None, alias="soldDate")
    sold_price: Optional[Amount] = Field(default=None, alias="soldPrice")
    sqft: Optional[Amount] = None
    bed_bath: Optional[ModelText] = Field(default=None, alias="bedBath")

    class Config:
        populate_by_name = True
        extra = "allow"


class ExitStrategy(BaseModel):
    """A proposed exit strategy."""

    strategy: Optional[ModelText] = None
    details: Optional[ModelText] = None

    class Config:
        extra = "allow"


class InvestmentAnalysis(BaseModel):
    """Assembled investment analysis."""

    suggested_arv: Optional[Amount] = Field(
        default=None,
        alias="suggestedARV",
        description="After Repair Value suggested by the model"
    )
    estimated_repair_cost: Optional[Amount] = Field(
        default=None,
        alias="estimatedRepairCost"
    )
    investor_fit: Optional[InvestorFit] = Field(
        default=None,
        alias="investorFit"
    )
    property_condition: Optional[ModelText] = Field(
        default=None,
        alias="propertyCondition"
    )
    estimated_repair_level: Optional[ModelText] = Field(
        default=None,
        alias="estimatedRepairLevel",
        description="One of: Light Cosmetic, Medium, Heavy, Gut"
    )
    comps_search_criteria: Optional[ModelText] = Field(
        default=None,
        alias="compsSearchCriteria"
    )
    comparables: Optional[List[Comparable]] = None
    exit_strategies: Optional[List[ExitStrategy]] = Field(
        default=None,
        alias="exitStrategies"
    )

    # Computed locally, never taken from the model
    suggested_mao: Optional[str] = Field(
        default=None,
        alias="suggestedMAO",
        description="Maximum Allowable Offer, whole-dollar USD"
    )
    purchase_price: Optional[str] = Field(
        default=None,
        alias="purchasePrice",
        description="Purchase price, whole-dollar USD"
    )
    grounding_sources: Optional[List[GroundingSource]] = Field(
        default=None,
        alias="groundingSources"
    )

    class Config:
        populate_by_name = True
        extra = "allow"

    @property
    def repair_level(self) -> Optional[RepairLevel]:
        """estimated_repair_level as a RepairLevel, if it is one of the known values."""
        try:
            return RepairLevel(self.estimated_repair_level)
        except (ValueError, TypeError):
            return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a camelCase dict holding only the fields that were set."""
        return self.model_dump(by_alias=True, exclude_unset=True)
