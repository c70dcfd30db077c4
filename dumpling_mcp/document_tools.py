# =============================================================================
# dumpling_mcp/document_tools.py  —  Documents, PDFs & Media
# =============================================================================
#
# Tools: doc-to-text, convert-to-pdf, merge-pdfs, trim-video,
#        extract-document, extract-image, extract-audio, extract-video,
#        read-pdf-metadata, write-pdf-metadata
#
# INPUT CONVENTION:
#   Every tool here takes its file either as a public `url` OR inline as
#   `base64`.  The schema marks both optional; the "at least one" rule is
#   enforced by the gateway (one_of=...) before the API key is even looked
#   up.  merge-pdfs does the same with its two lists.
#
# OUTPUT CONVENTION:
#   Tools that produce a file (PDF, video) return a base64 PREVIEW, never
#   the full payload.
# =============================================================================

from typing import Annotated, Literal, Optional

from fastmcp import FastMCP
from pydantic import Field

from dumpling.models import (
    AudioExtractionOptions,
    DocToTextOptions,
    DocumentExtractionOptions,
    ImageExtractionOptions,
    MergePdfOptions,
    PdfConversionOptions,
    PdfMetadata,
    TrimVideoOptions,
    Url,
    VideoExtractionOptions,
)
from dumpling_mcp.server import MUTATING, READ_ONLY, UpstreamGateway


FileUrl = Annotated[Optional[Url], Field(description="Public URL of the file.")]
FileBase64 = Annotated[
    Optional[str], Field(description="Base64-encoded file content, used when there is no url.")
]

SOURCE = ("url", "base64")


def register(mcp: FastMCP, gateway: UpstreamGateway) -> None:
    """Register the document and media tools on `mcp`."""

    @mcp.tool(name="doc-to-text", annotations=READ_ONLY)
    async def doc_to_text(
        url: FileUrl = None,
        base64: FileBase64 = None,
        options: Annotated[
            Optional[DocToTextOptions], Field(description="OCR and language settings.")
        ] = None,
    ) -> str:
        """Convert a document (PDF, Word, ...) to plain text.

        Provide url or base64.  Returns text, pages and metadata.
        """
        return await gateway.call(
            "doc-to-text",
            "convert document to text",
            {"url": url, "base64": base64, "options": options},
            one_of=SOURCE,
        )

    @mcp.tool(name="convert-to-pdf", annotations=READ_ONLY)
    async def convert_to_pdf(
        url: FileUrl = None,
        base64: FileBase64 = None,
        format: Annotated[
            Optional[Literal["docx", "doc", "ppt", "pptx", "xls", "xlsx", "txt", "html", "image"]],
            Field(description="Format of the input file."),
        ] = None,
        options: Annotated[
            Optional[PdfConversionOptions], Field(description="Quality, page size and margin.")
        ] = None,
    ) -> str:
        """Convert a file to PDF.  Returns a pdfBase64 preview and metadata."""
        return await gateway.call(
            "convert-to-pdf",
            "convert to PDF",
            {"url": url, "base64": base64, "format": format, "options": options},
            one_of=SOURCE,
        )

    @mcp.tool(name="merge-pdfs", annotations=READ_ONLY)
    async def merge_pdfs(
        urls: Annotated[Optional[list[Url]], Field(description="URLs of the PDFs, in order.")] = None,
        base64Files: Annotated[
            Optional[list[str]], Field(description="Base64-encoded PDFs, in order.")
        ] = None,
        options: Annotated[
            Optional[MergePdfOptions], Field(description="Page numbering and table of contents.")
        ] = None,
    ) -> str:
        """Merge several PDFs into one.

        Provide a non-empty urls or base64Files list.  Returns a preview of
        the merged PDF (mergedPdfBase64) and its pageCount.
        """
        return await gateway.call(
            "merge-pdfs",
            "merge PDFs",
            {"urls": urls, "base64Files": base64Files, "options": options},
            one_of=("urls", "base64Files"),
        )

    @mcp.tool(name="trim-video", annotations=READ_ONLY)
    async def trim_video(
        startTime: Annotated[float, Field(ge=0, description="Start of the clip, in seconds.")],
        endTime: Annotated[float, Field(ge=0, description="End of the clip, in seconds.")],
        url: FileUrl = None,
        base64: FileBase64 = None,
        output: Annotated[
            Optional[Literal["mp4", "webm", "gif"]], Field(description="Output container.")
        ] = None,
        options: Annotated[
            Optional[TrimVideoOptions], Field(description="Quality, size and frame rate.")
        ] = None,
    ) -> str:
        """Trim a video to the given time range.

        Returns an outputBase64 preview plus format, duration and size.
        """
        return await gateway.call(
            "trim-video",
            "trim video",
            {
                "url": url,
                "base64": base64,
                "startTime": startTime,
                "endTime": endTime,
                "output": output,
                "options": options,
            },
            one_of=SOURCE,
        )

    @mcp.tool(name="extract-document", annotations=READ_ONLY)
    async def extract_document(
        format: Annotated[
            Literal["text", "structured", "tables", "forms"],
            Field(description="What to pull out of the document."),
        ],
        url: FileUrl = None,
        base64: FileBase64 = None,
        options: Annotated[
            Optional[DocumentExtractionOptions], Field(description="OCR, language and metadata.")
        ] = None,
    ) -> str:
        """Extract text, structure, tables or form fields from a document."""
        return await gateway.call(
            "extract-document",
            "extract document content",
            {"url": url, "base64": base64, "format": format, "options": options},
            one_of=SOURCE,
        )

    @mcp.tool(name="extract-image", annotations=READ_ONLY)
    async def extract_image(
        extractionType: Annotated[
            Literal["text", "objects", "faces", "colors", "all"],
            Field(description="What to detect in the image."),
        ],
        url: FileUrl = None,
        base64: FileBase64 = None,
        options: Annotated[
            Optional[ImageExtractionOptions],
            Field(description="Language, confidence threshold and orientation detection."),
        ] = None,
    ) -> str:
        """Extract text and other information from an image."""
        return await gateway.call(
            "extract-image",
            "extract image content",
            {"url": url, "base64": base64, "extractionType": extractionType, "options": options},
            one_of=SOURCE,
        )

    @mcp.tool(name="extract-audio", annotations=READ_ONLY)
    async def extract_audio(
        url: FileUrl = None,
        base64: FileBase64 = None,
        language: Annotated[Optional[str], Field(description="Spoken language code, e.g. 'en'.")] = None,
        options: Annotated[
            Optional[AudioExtractionOptions],
            Field(description="Model, diarization, word timestamps and profanity filter."),
        ] = None,
    ) -> str:
        """Transcribe an audio file.

        Returns transcript, language and durationInSeconds, plus segments
        when the API produced them.
        """
        return await gateway.call(
            "extract-audio",
            "extract audio content",
            {"url": url, "base64": base64, "language": language, "options": options},
            one_of=SOURCE,
        )

    @mcp.tool(name="extract-video", annotations=READ_ONLY)
    async def extract_video(
        extractionType: Annotated[
            Literal["transcript", "scenes", "objects", "summary", "all"],
            Field(description="What to extract from the video."),
        ],
        url: FileUrl = None,
        base64: FileBase64 = None,
        options: Annotated[
            Optional[VideoExtractionOptions],
            Field(description="Language, timestamp interval, confidence and diarization."),
        ] = None,
    ) -> str:
        """Extract a transcript, scenes, objects or a summary from a video."""
        return await gateway.call(
            "extract-video",
            "extract video content",
            {"url": url, "base64": base64, "extractionType": extractionType, "options": options},
            one_of=SOURCE,
        )

    @mcp.tool(name="read-pdf-metadata", annotations=READ_ONLY)
    async def read_pdf_metadata(
        url: FileUrl = None,
        base64: FileBase64 = None,
        includeExtended: Annotated[
            Optional[bool], Field(description="Include extended (XMP) metadata.")
        ] = None,
    ) -> str:
        """Read the metadata of a PDF."""
        return await gateway.call(
            "read-pdf-metadata",
            "read PDF metadata",
            {"url": url, "base64": base64, "includeExtended": includeExtended},
            one_of=SOURCE,
        )

    @mcp.tool(name="write-pdf-metadata", annotations=MUTATING)
    async def write_pdf_metadata(
        metadata: Annotated[PdfMetadata, Field(description="Metadata fields to set.")],
        url: FileUrl = None,
        base64: FileBase64 = None,
    ) -> str:
        """Write metadata into a PDF.

        Returns an outputBase64 preview of the updated PDF, success and
        updatedMetadata.
        """
        return await gateway.call(
            "write-pdf-metadata",
            "write PDF metadata",
            {"url": url, "base64": base64, "metadata": metadata},
            one_of=SOURCE,
        )
