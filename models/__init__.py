"""Data models for Rehab Estimator."""

from models.estimation import (
    FinishLevel,
    UploadedFile,
    GroundingSource,
    RepairItem,
    EstimationSummary,
    Estimation,
    RehabEstimateResult,
)
from models.investment_analysis import (
    RepairLevel,
    InvestorFit,
    Comparable,
    ExitStrategy,
    InvestmentAnalysis,
)

__all__ = [
    "FinishLevel",
    "UploadedFile",
    "GroundingSource",
    "RepairItem",
    "EstimationSummary",
    "Estimation",
    "RehabEstimateResult",
    "RepairLevel",
    "InvestorFit",
    "Comparable",
    "ExitStrategy",
    "InvestmentAnalysis",
]
