"""Deal math for investment analysis.

Pure functions that turn loosely formatted model output ("$12,500 - $13,800",
"$200,000", 185000) into numbers and derive the Maximum Allowable Offer (MAO)
with the 70% rule:

    MAO = ARV * 0.70 - max(rehab cost range)

The parsers never raise. Anything they cannot read degrades to 0.
"""

import math
import re
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, List

# =============================================================================
# Constants
# =============================================================================

MAO_ARV_RATIO = 0.70

# Runs of digits, thousands separators and decimal points
NUMERIC_RUN_PATTERN = re.compile(r"[\d,.]+")

# Leading decimal number of a string, the way a lenient float parser reads it
# ("1.2.3" -> "1.2", "5." -> "5", ".5" -> ".5")
DECIMAL_PREFIX_PATTERN = re.compile(r"\d+\.?\d*|\.\d+")

# Leading signed number for purchase price input ("120000", " -5", "1e5")
NUMBER_PREFIX_PATTERN = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

ANALYSIS_HEADING = "**AI Analysis:**"

FITS_VERDICT = (
    "Based on the 70% rule, the purchase price is at or below the Maximum Allowable Offer. "
    "This indicates a potentially strong investment opportunity."
)

WARNING_VERDICT_TEMPLATE = (
    "Warning: Based on the 70% rule, the Maximum Allowable Offer (MAO) for this property is "
    "{mao}. The current purchase price of {purchase_price} is significantly higher than this "
    "target. For this deal to be profitable under standard investor criteria, the property "
    "would need to be acquired at or below the MAO."
)


# =============================================================================
# Parsing
# =============================================================================


def _parse_numeric_run(run: str) -> float:
    """Parse one digit/comma/point run. Returns NaN when nothing is readable."""
    match = DECIMAL_PREFIX_PATTERN.match(run.replace(",", ""))
    if not match:
        return math.nan
    return float(match.group(0))


def _numeric_runs(text: str) -> List[str]:
    return NUMERIC_RUN_PATTERN.findall(text)


def parse_currency(value: Any) -> float:
    """Read a currency amount from a number or free text.

    Numbers are returned as-is. For strings, the first run of digits, commas
    and decimal points is parsed with thousands separators removed.

    Examples:
        >>> parse_currency("$12,500")
        12500.0
        >>> parse_currency("")
        0.0
        >>> parse_currency(5000)
        5000
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return value
    if not isinstance(value, str):
        return 0.0

    runs = _numeric_runs(value)
    if not runs:
        return 0.0

    parsed = _parse_numeric_run(runs[0])
    return 0.0 if math.isnan(parsed) else parsed


def parse_range_max(text: Any) -> float:
    """Return the largest number found in a range string.

    "$12,500 - $13,800" -> 13800. The upper bound drives all downstream
    arithmetic, never the lower bound or midpoint.
    """
    if not isinstance(text, str):
        return 0.0

    numbers = [n for n in map(_parse_numeric_run, _numeric_runs(text)) if not math.isnan(n)]
    return max(numbers) if numbers else 0.0


def parse_purchase_price(value: Any) -> float:
    """Read the caller's purchase price from a numeric string; 0 if unreadable."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else 0.0
    if not isinstance(value, str):
        return 0.0

    match = NUMBER_PREFIX_PATTERN.match(value)
    if not match:
        return 0.0
    parsed = float(match.group(1))
    return parsed if math.isfinite(parsed) else 0.0


# =============================================================================
# Derivation
# =============================================================================


def compute_mao(arv: float, max_rehab_cost: float) -> float:
    """Maximum Allowable Offer under the 70% rule."""
    return arv * MAO_ARV_RATIO - max_rehab_cost


def format_usd(amount: float) -> str:
    """Format as whole-dollar USD, e.g. 126200 -> "$126,200", -5000 -> "-$5,000".

    Halves round away from zero.
    """
    if not math.isfinite(amount):
        amount = 0
    rounded = int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,}"


def fits_criteria(purchase_price: float, mao: float) -> bool:
    """True when the price is positive and at or below a positive MAO."""
    return purchase_price > 0 and mao > 0 and purchase_price <= mao


def build_deal_verdict(fits: bool, formatted_mao: str, formatted_purchase_price: str) -> str:
    """Pick the fixed verdict sentence for the deal."""
    if fits:
        return FITS_VERDICT
    return WARNING_VERDICT_TEMPLATE.format(
        mao=formatted_mao,
        purchase_price=formatted_purchase_price
    )


def stitch_investor_narrative(verdict: str, analysis: str) -> str:
    """Put the verdict in front of the model's analysis, which is kept verbatim."""
    return f"{verdict}\n\n{ANALYSIS_HEADING}\n{analysis}"


@dataclass
class DealMetrics:
    """Locally computed deal figures."""
    arv: float
    max_rehab_cost: float
    purchase_price: float
    mao: float
    formatted_mao: str
    formatted_purchase_price: str
    fits_criteria: bool

    @property
    def verdict(self) -> str:
        return build_deal_verdict(
            self.fits_criteria,
            self.formatted_mao,
            self.formatted_purchase_price
        )


def derive_deal_metrics(
    suggested_arv: Any,
    total_estimated_cost: Any,
    purchase_price: Any
) -> DealMetrics:
    """Compute MAO, formatted amounts and the fit verdict.

    Args:
        suggested_arv: Model-suggested ARV (string or number).
        total_estimated_cost: Estimate total cost range string.
        purchase_price: Caller-supplied purchase price (numeric string).

    Returns:
        DealMetrics for the deal.
    """
    arv = parse_currency(suggested_arv)
    max_rehab_cost = parse_range_max(total_estimated_cost)
    price = parse_purchase_price(purchase_price)
    mao = compute_mao(arv, max_rehab_cost)

    return DealMetrics(
        arv=arv,
        max_rehab_cost=max_rehab_cost,
        purchase_price=price,
        mao=mao,
        formatted_mao=format_usd(mao),
        formatted_purchase_price=format_usd(price),
        fits_criteria=fits_criteria(price, mao)
    )
