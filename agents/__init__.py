"""Rehab Estimator agents.

- RehabEstimateAgent: photos + address -> markdown rehab estimate
- InvestmentAnalysisAgent: estimate + purchase price -> investment analysis
"""

from agents.estimate_agent import RehabEstimateAgent, build_estimate_prompt, get_rehab_estimate
from agents.investment_agent import (
    InvestmentAnalysisAgent,
    assemble_investment_analysis,
    build_analysis_prompt,
    get_investment_analysis,
)

__all__ = [
    "RehabEstimateAgent",
    "InvestmentAnalysisAgent",
    "build_estimate_prompt",
    "build_analysis_prompt",
    "assemble_investment_analysis",
    "get_rehab_estimate",
    "get_investment_analysis",
]
