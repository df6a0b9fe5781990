"""Rehab Estimate Agent for Rehab Estimator.

Produces an area-by-area rehabilitation cost estimate from property photos.

This agent:
1. Renders the estimator prompt for the address and finish level
2. Attaches one inline image per uploaded photo
3. Calls Gemini with Google Search grounding at temperature 0
4. Returns the markdown verbatim with the cited web sources
"""

from typing import Optional, Sequence, Union

import structlog

from config.settings import Settings
from models.estimation import FinishLevel, RehabEstimateResult, UploadedFile
from services.gemini_service import GeminiService

logger = structlog.get_logger(__name__)

OPERATION = "rehab estimate"


# =============================================================================
# PROMPT
# =============================================================================

REHAB_ESTIMATE_PROMPT = """System Instruction: You are an expert real-estate rehab estimator. Your task is to provide a detailed, area-by-area rehabilitation cost estimate based on photos of a property at "{address}".

**Crucial Step: Use Google Search to find local contractor pricing and material costs for the region around "{address}" to ensure accuracy.**

All cost estimates should be tailored to a "{finish_level}" finish level and be as precise as possible, aiming for a tight range of +/- 5%.

User Prompt:
Please analyze the provided photos and generate a detailed rehabilitation estimate. Follow this structure precisely and provide your output in markdown format.

1.  **Project Summary:**
    *   Provide a total estimated cost range for the entire project. This range must be tight (+/- 5%) and based on your search for local pricing.
    *   Give an overall project difficulty rating on a 1-5 scale (1 = simple cosmetic, 5 = major structural/permit work).
    *   List any key assumptions you're making (e.g., "assuming no hidden water damage behind walls," "cost estimates are for mid-market labor in the region").
    *   **Key Risks:** Identify and list the 2-3 biggest risks based on the visual evidence. Example: "The 20% contingency is non-negotiable due to the high probability of finding extensive subfloor rot in Bathroom 2 and unpermitted wiring in the addition."
    *   **Actionable Advice:** Provide clear, imperative next steps for the investor. Example: "Strongly recommend getting firm bids from a licensed General Contractor, electrician, and plumber *before* closing. This property should not be purchased without these professional on-site assessments."

2.  **Itemized Breakdown:**
    *   Create a markdown table with the following columns: "Area", "Observations", "Recommendations", "Estimated Cost", "Difficulty (1-5)".
    *   Walk through each key area of the property visible in the photos (e.g., Exterior, Roof, Kitchen, Bathroom 1, Living Room, Foundation, Electrical, Plumbing, etc.).
    *   For each area:
        *   **Observations:** Describe what you see, noting any visible damage, wear, or defects.
        *   **Recommendations:** Suggest specific repairs or replacements needed.
        *   **Estimated Cost:** Give a ballpark cost for the recommended work, grounded in local pricing for a "{finish_level}" finish level.
        *   **Difficulty (1-5):** Rate the complexity of the work for that specific area.

**Output Format (Strict Markdown):**

### Project Summary
**Total Estimated Cost:** [e.g., $55,000 - $60,000]
**Overall Difficulty:** [e.g., 4]
**Assumptions:**
*   [Assumption 1]
*   [Assumption 2]
**Key Risks:**
*   [Risk 1]
*   [Risk 2]
**Actionable Advice:**
*   [Advice 1]
*   [Advice 2]

### Itemized Breakdown
| Area | Observations | Recommendations | Estimated Cost | Difficulty (1-5) |
| :--- | :--- | :--- | :--- | :--- |
| [e.g., Kitchen] | [e.g., Dated oak cabinets, laminate countertops are peeling.] | [e.g., Replace all cabinets and countertops. Install new sink and faucet.] | [e.g., $12,500 - $13,800] | [e.g., 3] |
| [Next Area] | ... | ... | ... | ... |
"""


def build_estimate_prompt(address: str, finish_level: Union[FinishLevel, str]) -> str:
    """Render the estimator prompt for an address and finish level."""
    if isinstance(finish_level, FinishLevel):
        finish_level = finish_level.value
    return REHAB_ESTIMATE_PROMPT.format(address=address, finish_level=finish_level)


class RehabEstimateAgent:
    """Generates rehab estimates with Gemini."""

    def __init__(
        self,
        gemini_service: Optional[GeminiService] = None,
        settings: Optional[Settings] = None
    ):
        """Initialize RehabEstimateAgent.

        Args:
            gemini_service: Optional Gemini service instance.
            settings: Settings for a new Gemini service when none is given.
        """
        self.gemini = gemini_service or GeminiService(settings=settings)

    async def run(
        self,
        address: str,
        files: Sequence[UploadedFile],
        finish_level: Union[FinishLevel, str]
    ) -> RehabEstimateResult:
        """Generate a rehab estimate.

        Args:
            address: Property address.
            files: Property photos.
            finish_level: Finish quality to price for.

        Returns:
            RehabEstimateResult with the markdown and grounding sources.

        Raises:
            EmptyResponseError: If the model returned no text.
        """
        prompt = build_estimate_prompt(address, finish_level)

        logger.info(
            "rehab_estimate_requested",
            address=address,
            image_count=len(files),
            finish_level=str(getattr(finish_level, "value", finish_level))
        )

        result = await self.gemini.generate(
            prompt,
            temperature=self.gemini.settings.estimate_temperature,
            files=files,
            operation=OPERATION
        )

        return RehabEstimateResult(markdown=result.text, sources=result.sources)


async def get_rehab_estimate(
    address: str,
    files: Sequence[UploadedFile],
    finish_level: Union[FinishLevel, str],
    settings: Optional[Settings] = None
) -> RehabEstimateResult:
    """Generate a rehab estimate with a one-off agent."""
    agent = RehabEstimateAgent(settings=settings)
    return await agent.run(address, files, finish_level)
