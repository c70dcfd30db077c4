# =============================================================================
# dumpling/shaping.py  —  Response Shaping (Context Budget Discipline)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns a raw Dumpling API response into the text a tool returns to the
#   host.  Most tools pass the response through as pretty JSON; some keep
#   only the fields an assistant can reason about.
#
# THREE FIELD RULES (used by Projection):
#   - plain     → copied only when the key is PRESENT in the response
#                 (a present null stays null, an absent key stays absent)
#   - optional  → copied only when the value is truthy (featuredSnippet,
#                 relatedSearches, segments, ...); never emitted as null
#   - preview   → base64 payloads cut to `preview_length` chars + "...",
#                 or null when the response has none
#
# WHY PREVIEWS?
#   A merged PDF or a generated image is megabytes of base64.  Dumping that
#   into an assistant's context buys nothing and costs a lot, so the tool
#   shows enough to prove the payload exists and no more.
# =============================================================================

from dataclasses import dataclass
import json
from typing import Any, Callable, Optional

from dumpling.config import DEFAULT_PREVIEW_LENGTH


def to_text(value: Any) -> str:
    """Pretty-print a JSON value (2-space indent, unicode kept as-is)."""
    return json.dumps(value, indent=2, ensure_ascii=False)


def preview(value: Optional[str], length: int = DEFAULT_PREVIEW_LENGTH) -> Optional[str]:
    """Short prefix of a base64 payload, or None when there is no payload."""
    if not value or not isinstance(value, str):
        return None
    return value[:length] + "..."


def pick(data: Any, *keys: str) -> dict:
    """Copy the given keys that are present in `data`, in the order given."""
    if not isinstance(data, dict):
        return {}
    return {key: data[key] for key in keys if key in data}


@dataclass(frozen=True)
class Projection:
    """Declarative field selection for one tool's response."""

    fields: tuple[str, ...]
    optional: frozenset = frozenset()
    previews: frozenset = frozenset()

    def apply(self, data: Any, preview_length: int = DEFAULT_PREVIEW_LENGTH) -> dict:
        source = data if isinstance(data, dict) else {}
        shaped = {}
        for key in self.fields:
            if key in self.previews:
                shaped[key] = preview(source.get(key), preview_length)
            elif key in self.optional:
                if source.get(key):
                    shaped[key] = source[key]
            elif key in source:
                shaped[key] = source[key]
        return shaped


# -----------------------------------------------------------------------------
# Field projections, keyed by tool name
# -----------------------------------------------------------------------------
# Tools not listed here (and not in _CUSTOM_SHAPERS below) return the whole
# response: get-google-reviews, crawl, extract, extract-document,
# extract-image, extract-video, read-pdf-metadata and both knowledge-base
# tools.
# -----------------------------------------------------------------------------
PROJECTIONS: dict[str, Projection] = {
    "get-autocomplete": Projection(("searchParameters", "suggestions")),
    "search-maps": Projection(("searchParameters", "ll", "places")),
    "search-places": Projection(("searchParameters", "places")),
    "search-news": Projection(("searchParameters", "news")),
    "scrape": Projection(("title", "metadata", "url", "format", "cleaned", "content")),
    "screenshot": Projection(
        ("url", "imageBase64", "format"), previews=frozenset({"imageBase64"})
    ),
    "doc-to-text": Projection(("text", "pages", "metadata")),
    "convert-to-pdf": Projection(("pdfBase64", "metadata"), previews=frozenset({"pdfBase64"})),
    "merge-pdfs": Projection(
        ("mergedPdfBase64", "pageCount"), previews=frozenset({"mergedPdfBase64"})
    ),
    "trim-video": Projection(
        ("outputBase64", "format", "duration", "size"), previews=frozenset({"outputBase64"})
    ),
    "extract-audio": Projection(
        ("transcript", "language", "durationInSeconds", "segments"),
        optional=frozenset({"segments"}),
    ),
    "write-pdf-metadata": Projection(
        ("outputBase64", "success", "updatedMetadata"), previews=frozenset({"outputBase64"})
    ),
    "generate-agent-completion": Projection(("completion", "toolCalls", "tokenUsage")),
    "run-js-code": Projection(("result", "console", "executionTime", "error")),
    "run-python-code": Projection(
        ("result", "stdout", "stderr", "executionTime", "outputFiles")
    ),
}


# -----------------------------------------------------------------------------
# Tools whose output is more than a field selection
# -----------------------------------------------------------------------------
def shape_transcript(data: Any, preview_length: int = DEFAULT_PREVIEW_LENGTH) -> str:
    """Plain-text transcript, not JSON."""
    source = data if isinstance(data, dict) else {}
    transcript = source.get("transcript") or ""
    language = source.get("language") or ""
    return f"Transcript: {transcript}\nLanguage: {language}"


def shape_search(data: Any, preview_length: int = DEFAULT_PREVIEW_LENGTH) -> str:
    """Organic results trimmed to title/link/snippet/position.

    Scraped page content is attached as `content` only for results the
    upstream actually scraped.  featuredSnippet, relatedSearches and
    peopleAlsoAsk appear only when the response has them.
    """
    source = data if isinstance(data, dict) else {}
    organic = []
    for item in source.get("organic") or []:
        result = pick(item, "title", "link", "snippet", "position")
        scraped = item.get("scrapeOutput") if isinstance(item, dict) else None
        if isinstance(scraped, dict) and "content" in scraped:
            result["content"] = scraped["content"]
        organic.append(result)

    shaped = pick(source, "searchParameters")
    shaped["organicResults"] = organic
    for key in ("featuredSnippet", "relatedSearches", "peopleAlsoAsk"):
        if source.get(key):
            shaped[key] = source[key]
    return to_text(shaped)


def _image_shaper(label: str) -> Callable[[Any, int], str]:
    # Both image tools list their images the same way; only the field that
    # names the generator differs ("model" vs "provider").
    def shape(data: Any, preview_length: int = DEFAULT_PREVIEW_LENGTH) -> str:
        source = data if isinstance(data, dict) else {}
        images = [
            {"imageIndex": index, "imageBase64": preview(image, preview_length)}
            for index, image in enumerate(source.get("images") or [])
        ]
        shaped = {"images": images}
        shaped.update(pick(source, label, "prompt"))
        return to_text(shaped)

    return shape


_CUSTOM_SHAPERS: dict[str, Callable[[Any, int], str]] = {
    "get-youtube-transcript": shape_transcript,
    "search": shape_search,
    "generate-ai-image": _image_shaper("model"),
    "generate-image": _image_shaper("provider"),
}


def shape_response(tool_name: str, data: Any, preview_length: int = DEFAULT_PREVIEW_LENGTH) -> str:
    """Produce the text result for `tool_name` from the raw API response."""
    custom = _CUSTOM_SHAPERS.get(tool_name)
    if custom is not None:
        return custom(data, preview_length)
    projection = PROJECTIONS.get(tool_name)
    if projection is not None:
        return to_text(projection.apply(data, preview_length))
    return to_text(data)
