"""Grounding source extraction.

Turns the Google Search grounding metadata attached to a Gemini response into
GroundingSource citations. Works on google-genai response objects and on
plain dicts (snake_case or camelCase keys), e.g. responses loaded from JSON.
"""

from typing import Any, List, Optional, Sequence

from models.estimation import GroundingSource


def _field(obj: Any, snake: str, camel: Optional[str] = None) -> Any:
    if obj is None:
        return None
    if isinstance(obj, dict):
        value = obj.get(snake)
        if value is None and camel:
            value = obj.get(camel)
        return value
    return getattr(obj, snake, None)


def grounding_chunks_from_response(response: Any) -> List[Any]:
    """Grounding chunks of the first candidate, or [] when there are none."""
    candidates = _field(response, "candidates")
    if not candidates:
        return []
    metadata = _field(candidates[0], "grounding_metadata", "groundingMetadata")
    return list(_field(metadata, "grounding_chunks", "groundingChunks") or [])


def sources_from_chunks(chunks: Sequence[Any]) -> List[GroundingSource]:
    """Keep chunks whose web descriptor has both a URI and a title.

    Chunks missing either are dropped. Order is preserved.
    """
    sources = []
    for chunk in chunks:
        web = _field(chunk, "web")
        uri = _field(web, "uri")
        title = _field(web, "title")
        if uri and title:
            sources.append(GroundingSource(uri=uri, title=title))
    return sources


def extract_grounding_sources(response: Any) -> List[GroundingSource]:
    """Extract web citations from a Gemini response."""
    return sources_from_chunks(grounding_chunks_from_response(response))
