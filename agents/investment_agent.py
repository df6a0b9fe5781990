"""Investment Analysis Agent for Rehab Estimator.

Turns a rehab estimate and a proposed purchase price into an investment
analysis: ARV from comparable sales, condition summary, repair level, exit
strategies, and a locally computed deal verdict.

This agent:
1. Renders the analyst prompt from the address, estimate and price
2. Calls Gemini with Google Search grounding
3. Parses the fenced JSON object from the response
4. Recomputes MAO, purchase price and the fit verdict (70% rule)
5. Prepends the verdict to the model narrative and attaches sources
"""

import copy
from typing import Any, Dict, List, Optional

import structlog

from config.errors import MalformedStructuredBlockError
from config.settings import Settings
from models.estimation import Estimation, GroundingSource
from models.investment_analysis import InvestmentAnalysis
from services.financials import DealMetrics, derive_deal_metrics, stitch_investor_narrative
from services.gemini_service import GeminiService
from services.structured_output import extract_json_block

logger = structlog.get_logger(__name__)

OPERATION = "investment analysis"


# =============================================================================
# PROMPT
# =============================================================================

INVESTMENT_ANALYSIS_PROMPT = """**System Instruction:** You are an expert real estate investment analyst. Your task is to provide a comprehensive investment analysis for the property at "{address}", given the estimated rehabilitation costs.

**CRUCIAL - Multi-Step Process for Finding Comps:**
1.  **Identify Property Details & Neighborhood Boundaries:**
    *   First, use Google Search to find the **"Year Built"** for the subject property at **"{address}"**.
    *   Second, use Google Search/Maps to identify the specific **subdivision name** of the property.
    *   Third, identify any **major highways or roads** that act as clear boundaries for this subdivision. Comps should NOT cross these barriers.

2.  **Find Comps with Quality-First Fallback Logic:** Your goal is to find 1-3 *highly relevant* comparable sales (comps) to determine an accurate After Repair Value (ARV). Quality is more important than quantity. Follow this search process:
    *   **Attempt 1 (Ideal Criteria):** Search for comps meeting ALL of these strict criteria:
        *   **Neighborhood:** Located within the **same subdivision** and **NOT separated by a major highway/road**. This is the most important rule.
        *   **Recency:** Sold within the last **6 months** from today's date.
        *   **Proximity:** Located within a **0.5-mile radius** of the subject property.
        *   **Age:** Built within **+/- 10 years** of the subject property's Year Built.
    *   **Attempt 2 (Relax Proximity):** If you cannot find at least 1-2 comps, relax the proximity to a **1-mile radius** and search again, but strictly maintain all other criteria (same subdivision, no major barriers, 6 months recency, +/- 10 years built).
    *   **Attempt 3 (Relax Recency):** If you still cannot find at least 1-2 comps, relax the recency to **sold within the last 12 months** and search again, keeping the proximity at 1 mile and the age/neighborhood criteria the same.

3.  **Report Your Findings:** You MUST populate the `compsSearchCriteria` field in the JSON output with a clear statement explaining which criteria were used to find the comps (e.g., "Comps were found using the ideal criteria," or "Comps search criteria were relaxed to a 1-mile radius to find sufficient results."). This is not optional. If you find fewer than 3 comps, that is acceptable as long as they are high quality.

**Property Information:**
*   **Address:** {address}
*   **Estimated Rehab Cost:** {total_repair_cost}
*   **Property Condition Summary (from previous analysis):** {condition_summary}

**Your Task:**
Generate a complete investment analysis. Provide your output as a single JSON object inside a markdown code block. Adhere strictly to the schema provided below.

**GUIDANCE FOR ANALYSIS:**
*   **investorFit.analysis:** Provide a neutral, data-driven analysis of the property as an investment. Discuss the relationship between the After Repair Value (ARV) and the rehab costs. Mention that investors often use formulas like the 70% rule to calculate a Maximum Allowable Offer (MAO). This rule is a baseline and can be adjusted for market conditions. Do NOT make a final judgment on whether the deal is "good" or "bad"; just present the facts. Set "fitsCriteria" to a placeholder value of `true`.
*   **exitStrategies:** When discussing "Fix and Flip", frame it in the context of acquiring a property at a discount to its ARV to allow for profit after rehab costs. For "Buy and Hold" or "BRRRR" strategies, introduce and briefly explain the importance of follow-up analysis using key buy-and-hold metrics like the **1% Rule** for initial rent screening, **Cash-on-Cash Return** (which accounts for financing), and **DSCR (Debt Service Coverage Ratio)** for loan qualification.

**Output Format (Strict JSON):**
```json
{{
  "suggestedARV": "...",
  "estimatedRepairCost": "{total_repair_cost}",
  "investorFit": {{
    "fitsCriteria": true,
    "analysis": "..."
  }},
  "propertyCondition": "...",
  "estimatedRepairLevel": "...",
  "compsSearchCriteria": "...",
  "comparables": [
    {{
      "address": "...",
      "soldDate": "...",
      "soldPrice": "...",
      "sqft": "...",
      "bedBath": "..."
    }}
  ],
  "exitStrategies": [
    {{
      "strategy": "...",
      "details": "..."
    }}
  ]
}}
```

**Field Explanations:**
*   **suggestedARV:** (String or Number) After Repair Value. A dollar amount based on your search for comparable sales.
*   **investorFit:** (Object) - See "GUIDANCE FOR ANALYSIS" above.
*   **propertyCondition:** (String) A 1-2 sentence summary of the property's overall condition based on the provided summary.
*   **estimatedRepairLevel:** (String) Classify the rehab level. Must be one of: 'Light Cosmetic', 'Medium', 'Heavy', 'Gut'.
*   **compsSearchCriteria:** (String) A sentence explaining the criteria used to find the comps (e.g., ideal, relaxed radius, relaxed recency).
*   **comparables:** (Array of Objects) List 1-3 recent comparable sales you found via Google Search.
*   **exitStrategies:** (Array of Objects) Propose 2-3 viable exit strategies with brief explanations, following the guidance above.
"""


def build_analysis_prompt(address: str, estimation: Estimation) -> str:
    """Render the analyst prompt for an address and its estimate."""
    return INVESTMENT_ANALYSIS_PROMPT.format(
        address=address,
        total_repair_cost=estimation.summary.total_estimated_cost,
        condition_summary=estimation.condition_summary()
    )


# =============================================================================
# RESULT ASSEMBLY
# =============================================================================


def assemble_investment_analysis(
    parsed: Dict[str, Any],
    estimation: Estimation,
    purchase_price: str,
    sources: List[GroundingSource],
    raw_text: Optional[str] = None
) -> InvestmentAnalysis:
    """Merge model JSON with locally computed deal fields and sources.

    Only suggestedMAO, purchasePrice, investorFit.fitsCriteria,
    investorFit.analysis and groundingSources are written. Fields the model
    omitted stay absent.

    Args:
        parsed: JSON object from the model response.
        estimation: Estimate the analysis was requested for.
        purchase_price: Caller-supplied purchase price (numeric string).
        sources: Grounding sources of the response.
        raw_text: Raw response text, for diagnostics only.

    Returns:
        Assembled InvestmentAnalysis.

    Raises:
        MalformedStructuredBlockError: If investorFit is not an object or the
            result does not validate.
    """
    data = copy.deepcopy(parsed)

    investor_fit = data.get("investorFit")
    if not isinstance(investor_fit, dict):
        logger.error("investor_fit_missing", raw_text=raw_text)
        raise MalformedStructuredBlockError(
            reason="investorFit is missing or not an object",
            raw_text=raw_text
        )

    metrics: DealMetrics = derive_deal_metrics(
        data.get("suggestedARV"),
        estimation.summary.total_estimated_cost,
        purchase_price
    )

    model_analysis = investor_fit.get("analysis")
    if model_analysis is None:
        model_analysis = ""

    data["suggestedMAO"] = metrics.formatted_mao
    data["purchasePrice"] = metrics.formatted_purchase_price
    investor_fit["fitsCriteria"] = metrics.fits_criteria
    investor_fit["analysis"] = stitch_investor_narrative(metrics.verdict, str(model_analysis))
    data["groundingSources"] = [s.model_dump() for s in sources]

    try:
        analysis = InvestmentAnalysis.model_validate(data)
    except ValueError as e:
        logger.error("investment_analysis_invalid", error=str(e), raw_text=raw_text)
        raise MalformedStructuredBlockError(
            reason=f"schema validation failed: {e}",
            raw_text=raw_text
        ) from e

    logger.info(
        "investment_analysis_assembled",
        arv=metrics.arv,
        max_rehab_cost=metrics.max_rehab_cost,
        mao=metrics.mao,
        purchase_price=metrics.purchase_price,
        fits_criteria=metrics.fits_criteria,
        source_count=len(sources)
    )

    return analysis


class InvestmentAnalysisAgent:
    """Generates investment analyses with Gemini."""

    def __init__(
        self,
        gemini_service: Optional[GeminiService] = None,
        settings: Optional[Settings] = None
    ):
        """Initialize InvestmentAnalysisAgent.

        Args:
            gemini_service: Optional Gemini service instance.
            settings: Settings for a new Gemini service when none is given.
        """
        self.gemini = gemini_service or GeminiService(settings=settings)

    async def run(
        self,
        address: str,
        estimation: Estimation,
        purchase_price: str
    ) -> InvestmentAnalysis:
        """Generate an investment analysis.

        Args:
            address: Property address.
            estimation: Structured rehab estimate.
            purchase_price: Proposed purchase price as a numeric string.

        Returns:
            Assembled InvestmentAnalysis.

        Raises:
            EmptyResponseError: If the model returned no text.
            MissingStructuredBlockError: If the response has no ```json block.
            MalformedStructuredBlockError: If the block is not a usable object.
        """
        prompt = build_analysis_prompt(address, estimation)

        logger.info(
            "investment_analysis_requested",
            address=address,
            total_estimated_cost=estimation.summary.total_estimated_cost,
            repair_count=len(estimation.repairs)
        )

        result = await self.gemini.generate(
            prompt,
            temperature=self.gemini.settings.analysis_temperature,
            operation=OPERATION
        )

        parsed = extract_json_block(result.text)
        return assemble_investment_analysis(
            parsed,
            estimation,
            purchase_price,
            result.sources,
            raw_text=result.text
        )


async def get_investment_analysis(
    address: str,
    estimation: Estimation,
    purchase_price: str,
    settings: Optional[Settings] = None
) -> InvestmentAnalysis:
    """Generate an investment analysis with a one-off agent."""
    agent = InvestmentAnalysisAgent(settings=settings)
    return await agent.run(address, estimation, purchase_price)
