"""Estimate markdown parser.

Builds an Estimation from the markdown returned by the rehab estimate call.
The estimate prompt asks for this layout:

    ### Project Summary
    **Total Estimated Cost:** $55,000 - $60,000
    **Overall Difficulty:** 4
    **Assumptions:**
    *   ...
    **Key Risks:**
    *   ...
    **Actionable Advice:**
    *   ...

    ### Itemized Breakdown
    | Area | Observations | Recommendations | Estimated Cost | Difficulty (1-5) |
    | :--- | :--- | :--- | :--- | :--- |
    | Kitchen | ... | ... | $12,500 - $13,800 | 3 |

Only the total cost is required; everything else is read when present.
"""

import re
from typing import Dict, List, Optional

import structlog

from config.errors import EstimateParseError
from models.estimation import Estimation, EstimationSummary, RepairItem

logger = structlog.get_logger(__name__)

LABEL_PATTERN = re.compile(r"^\s*\*\*(?P<label>[^*]+?):?\*\*:?\s*(?P<value>.*)$")
BULLET_PATTERN = re.compile(r"^\s*(?:[*\-•]|\d+\.)\s+(?P<item>.+)$")
ALIGNMENT_CELL_PATTERN = re.compile(r"^:?-{3,}:?$")
DIFFICULTY_PATTERN = re.compile(r"[1-5]")

LIST_SECTIONS: Dict[str, str] = {
    "assumptions": "assumptions",
    "key risks": "key_risks",
    "actionable advice": "actionable_advice",
}

TABLE_COLUMNS = 5


def _clean(text: str) -> str:
    return text.strip().strip("*").strip()


def _is_placeholder(text: str) -> bool:
    return not text or text == "..." or (text.startswith("[") and text.endswith("]"))


def parse_difficulty(text: str) -> Optional[int]:
    """First 1-5 digit in text, or None."""
    match = DIFFICULTY_PATTERN.search(text or "")
    return int(match.group(0)) if match else None


def _split_row(line: str) -> List[str]:
    cells = [cell.strip() for cell in line.strip().split("|")]
    # Leading and trailing pipes leave empty edge cells
    if cells and cells[0] == "":
        cells = cells[1:]
    if cells and cells[-1] == "":
        cells = cells[:-1]
    return cells


def _parse_table_row(line: str) -> Optional[RepairItem]:
    cells = _split_row(line)
    if len(cells) < TABLE_COLUMNS:
        return None
    if all(ALIGNMENT_CELL_PATTERN.match(c) for c in cells if c):
        return None

    area = _clean(cells[0])
    if area.lower() == "area" or _is_placeholder(area):
        return None

    return RepairItem(
        area=area,
        observations=cells[1],
        recommendations=cells[2],
        estimated_cost=_clean(cells[3]),
        difficulty=parse_difficulty(cells[4])
    )


def parse_estimate_markdown(markdown: str) -> Estimation:
    """Parse estimate markdown into an Estimation.

    Args:
        markdown: Markdown returned by the rehab estimate call.

    Returns:
        Estimation with summary and itemized repairs.

    Raises:
        EstimateParseError: If no total estimated cost is present.
    """
    total_cost: Optional[str] = None
    overall_difficulty: Optional[int] = None
    lists: Dict[str, List[str]] = {name: [] for name in LIST_SECTIONS.values()}
    repairs: List[RepairItem] = []
    section: Optional[str] = None

    for line in (markdown or "").splitlines():
        stripped = line.strip()
        if not stripped:
            continue

        if stripped.startswith("|"):
            section = None
            item = _parse_table_row(stripped)
            if item is not None:
                repairs.append(item)
            continue

        if stripped.startswith("#"):
            section = None
            continue

        label_match = LABEL_PATTERN.match(stripped)
        if label_match:
            label = label_match.group("label").strip().lower()
            value = _clean(label_match.group("value"))
            section = LIST_SECTIONS.get(label)
            if label == "total estimated cost" and value:
                total_cost = value
            elif label == "overall difficulty":
                overall_difficulty = parse_difficulty(value)
            continue

        bullet_match = BULLET_PATTERN.match(stripped)
        if bullet_match and section:
            item_text = bullet_match.group("item").strip()
            if not _is_placeholder(item_text):
                lists[section].append(item_text)

    if not total_cost:
        raise EstimateParseError(
            "Estimate does not contain a total estimated cost.",
            details={"markdown_length": len(markdown or "")}
        )

    logger.debug(
        "estimate_markdown_parsed",
        total_estimated_cost=total_cost,
        repair_count=len(repairs)
    )

    return Estimation(
        summary=EstimationSummary(
            total_estimated_cost=total_cost,
            overall_difficulty=overall_difficulty,
            **lists
        ),
        repairs=repairs
    )
