# =============================================================================
# dumpling/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# Two kinds of shapes live here:
#
#   1. ARGUMENT SHAPES — the nested objects a tool accepts (scrape options,
#      PDF metadata, knowledge-base entries, ...).  They are TypedDicts, not
#      dataclasses, because they travel straight into the JSON body: keys the
#      caller left out must stay left out, exactly as the Dumpling API
#      expects.  FastMCP turns them into JSON Schema for the host and pydantic
#      validates them before any handler runs.
#
#   2. REQUEST/RESULT RECORDS — OutboundRequest is the one HTTP call a tool
#      makes.  It is created and thrown away inside a single invocation.
#
# Field names are the upstream's camelCase names on purpose: they are part of
# the public tool contract that existing host configurations rely on.
# =============================================================================

from dataclasses import dataclass, field
from typing import Annotated, Any, Literal, Optional
from urllib.parse import urlparse

from pydantic import AfterValidator, Field, ValidationInfo
from typing_extensions import Required, TypedDict

from dumpling.errors import PreconditionError, ValidationError


# -----------------------------------------------------------------------------
# Url — a string that must be an absolute URL
# -----------------------------------------------------------------------------
# Kept as a plain str (not pydantic's AnyUrl) so the value reaches the
# upstream byte-for-byte; AnyUrl would normalise "https://x.com" to
# "https://x.com/".
# -----------------------------------------------------------------------------
def _check_url(value: str, info: ValidationInfo) -> str:
    parsed = urlparse(value)
    if not parsed.scheme or not parsed.netloc:
        raise ValidationError(info.field_name or "url", f"{value!r} is not an absolute URL")
    return value


Url = Annotated[str, AfterValidator(_check_url), Field(json_schema_extra={"format": "uri"})]


# -----------------------------------------------------------------------------
# Enumerations shared by several tools
# -----------------------------------------------------------------------------
DateRange = Literal["anyTime", "pastHour", "pastDay", "pastWeek", "pastMonth", "pastYear"]
ScrapeFormat = Literal["markdown", "html", "screenshot"]
ImageQuality = Literal["standard", "hd"]


# -----------------------------------------------------------------------------
# Web / search options
# -----------------------------------------------------------------------------
class SearchScrapeOptions(TypedDict, total=False):
    """How each scraped search result should be returned."""

    format: ScrapeFormat
    cleaned: bool


class CrawlScrapeOptions(TypedDict, total=False):
    """How each crawled page should be scraped."""

    format: ScrapeFormat
    cleaned: bool
    renderJs: bool


# -----------------------------------------------------------------------------
# Document & media options
# -----------------------------------------------------------------------------
class DocToTextOptions(TypedDict, total=False):
    ocr: bool
    language: str


class PdfConversionOptions(TypedDict, total=False):
    quality: float
    pageSize: str
    margin: float


class MergePdfOptions(TypedDict, total=False):
    addPageNumbers: bool
    addTableOfContents: bool


class TrimVideoOptions(TypedDict, total=False):
    quality: float
    width: float
    height: float
    fps: float


class DocumentExtractionOptions(TypedDict, total=False):
    ocr: bool
    language: str
    includeMetadata: bool


class ImageExtractionOptions(TypedDict, total=False):
    language: str
    confidence: Annotated[float, Field(ge=0, le=1)]
    detectOrientation: bool


class AudioExtractionOptions(TypedDict, total=False):
    model: Literal["standard", "enhanced"]
    speakerDiarization: bool
    wordTimestamps: bool
    filterProfanity: bool


class VideoExtractionOptions(TypedDict, total=False):
    language: str
    timestampInterval: Annotated[float, Field(gt=0)]
    confidence: Annotated[float, Field(ge=0, le=1)]
    speakerDiarization: bool


class PdfMetadata(TypedDict, total=False):
    """Metadata fields to write into a PDF.  Only supplied keys are changed."""

    title: str
    author: str
    subject: str
    keywords: list[str]
    creator: str
    producer: str
    creationDate: str
    modDate: str
    customProperties: dict[str, str]


# -----------------------------------------------------------------------------
# AI / knowledge-base shapes
# -----------------------------------------------------------------------------
class AgentToolSpec(TypedDict):
    """A tool the upstream agent may call during a completion."""

    name: str
    description: str
    parameters: dict[str, Any]


class KnowledgeBaseEntry(TypedDict, total=False):
    text: Required[str]
    metadata: dict[str, Any]


# -----------------------------------------------------------------------------
# OutboundRequest — the single HTTP call a tool makes
# -----------------------------------------------------------------------------
@dataclass
class OutboundRequest:
    """One POST to the Dumpling API.

    body keeps only the arguments the caller actually supplied; None means
    "not sent", mirroring how the upstream treats omitted JSON keys.
    """

    path: str
    body: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def build(cls, path: str, **arguments: Any) -> "OutboundRequest":
        return cls(path=path, body={k: v for k, v in arguments.items() if v is not None})


def endpoint(tool_name: str) -> str:
    """Upstream path for a tool; every tool lives under /api/v1/<tool-name>."""
    return f"/api/v1/{tool_name}"


# -----------------------------------------------------------------------------
# Cross-field preconditions
# -----------------------------------------------------------------------------
# The schema can say "url is optional" and "base64 is optional", but not
# "at least one of them".  These helpers run inside the tool before the
# credential check and before any network call.
# -----------------------------------------------------------------------------
def require_one_of(**candidates: Optional[Any]) -> None:
    """Raise PreconditionError unless at least one candidate is non-empty.

    Empty strings and empty lists count as missing.
    """
    if not any(candidates.values()):
        names = list(candidates)
        joined = ", ".join(names[:-1]) + f" or {names[-1]}" if len(names) > 1 else names[0]
        raise PreconditionError(f"Either {joined} is required")
