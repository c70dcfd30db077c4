# =============================================================================
# dumpling_mcp/web_tools.py  —  Page-Level Web Tools
# =============================================================================
#
# Tools: get-youtube-transcript, scrape, crawl, screenshot, extract
#
# These fetch a specific URL (or a site, for crawl) through the Dumpling API.
# Screenshots come back as a short base64 preview; the full image is never
# pushed into the assistant's context.
# =============================================================================

from typing import Annotated, Any, Literal, Optional

from fastmcp import FastMCP
from pydantic import Field

from dumpling.models import CrawlScrapeOptions, ScrapeFormat, Url
from dumpling_mcp.server import READ_ONLY, UpstreamGateway


RenderJs = Annotated[
    Optional[bool], Field(description="Render the page in a headless browser before reading it.")
]


def register(mcp: FastMCP, gateway: UpstreamGateway) -> None:
    """Register the web tools on `mcp`."""

    @mcp.tool(name="get-youtube-transcript", annotations=READ_ONLY)
    async def get_youtube_transcript(
        videoUrl: Annotated[Url, Field(description="URL of the YouTube video.")],
        includeTimestamps: Annotated[
            Optional[bool], Field(description="Prefix transcript lines with timestamps.")
        ] = None,
        timestampsToCombine: Annotated[
            Optional[float], Field(ge=1, description="Number of timestamped lines to merge into one.")
        ] = None,
        preferredLanguage: Annotated[
            Optional[str], Field(description="Preferred transcript language code, e.g. 'en'.")
        ] = None,
    ) -> str:
        """Fetch the transcript of a YouTube video.

        Returns plain text: the transcript followed by its language.
        """
        return await gateway.call(
            "get-youtube-transcript",
            "fetch YouTube transcript",
            {
                "videoUrl": videoUrl,
                "includeTimestamps": includeTimestamps,
                "timestampsToCombine": timestampsToCombine,
                "preferredLanguage": preferredLanguage,
            },
        )

    @mcp.tool(name="scrape", annotations=READ_ONLY)
    async def scrape(
        url: Annotated[Url, Field(description="Page to scrape.")],
        format: Annotated[Optional[ScrapeFormat], Field(description="Output format.")] = None,
        cleaned: Annotated[
            Optional[bool], Field(description="Strip navigation, ads and boilerplate.")
        ] = None,
        renderJs: RenderJs = None,
    ) -> str:
        """Scrape the content of a single web page.

        Returns title, metadata, url, format, cleaned and content.
        """
        return await gateway.call(
            "scrape",
            "scrape URL",
            {"url": url, "format": format, "cleaned": cleaned, "renderJs": renderJs},
        )

    @mcp.tool(name="crawl", annotations=READ_ONLY)
    async def crawl(
        baseUrl: Annotated[Url, Field(description="Where the crawl starts.")],
        maxPages: Annotated[Optional[float], Field(ge=1, description="Stop after this many pages.")] = None,
        crawlBeyondBaseUrl: Annotated[
            Optional[bool], Field(description="Follow links outside baseUrl.")
        ] = None,
        depth: Annotated[Optional[float], Field(ge=0, description="Maximum link depth.")] = None,
        strategy: Annotated[
            Optional[str], Field(description="Crawl order strategy understood by the API.")
        ] = None,
        filterRegex: Annotated[
            Optional[str], Field(description="Only crawl URLs matching this regular expression.")
        ] = None,
        scrapeOptions: Annotated[
            Optional[CrawlScrapeOptions], Field(description="How each crawled page is scraped.")
        ] = None,
    ) -> str:
        """Recursively crawl a website and return the content of every page."""
        return await gateway.call(
            "crawl",
            "crawl website",
            {
                "baseUrl": baseUrl,
                "maxPages": maxPages,
                "crawlBeyondBaseUrl": crawlBeyondBaseUrl,
                "depth": depth,
                "strategy": strategy,
                "filterRegex": filterRegex,
                "scrapeOptions": scrapeOptions,
            },
        )

    @mcp.tool(name="screenshot", annotations=READ_ONLY)
    async def screenshot(
        url: Annotated[Url, Field(description="Page to capture.")],
        width: Annotated[Optional[float], Field(ge=1, description="Viewport width in pixels.")] = None,
        height: Annotated[Optional[float], Field(ge=1, description="Viewport height in pixels.")] = None,
        deviceScaleFactor: Annotated[
            Optional[float], Field(gt=0, description="Device pixel ratio, e.g. 2 for retina.")
        ] = None,
        fullPage: Annotated[
            Optional[bool], Field(description="Capture the whole scrollable page.")
        ] = None,
        format: Annotated[Optional[Literal["png", "jpeg"]], Field(description="Image format.")] = None,
        quality: Annotated[
            Optional[float], Field(ge=0, le=100, description="JPEG quality (0-100).")
        ] = None,
        renderJs: RenderJs = None,
        waitFor: Annotated[
            Optional[float], Field(ge=0, description="Milliseconds to wait before capturing.")
        ] = None,
    ) -> str:
        """Capture a screenshot of a web page.

        Returns the url, the format and a truncated base64 preview of the
        image (imageBase64).
        """
        return await gateway.call(
            "screenshot",
            "capture screenshot",
            {
                "url": url,
                "width": width,
                "height": height,
                "deviceScaleFactor": deviceScaleFactor,
                "fullPage": fullPage,
                "format": format,
                "quality": quality,
                "renderJs": renderJs,
                "waitFor": waitFor,
            },
        )

    @mcp.tool(name="extract", annotations=READ_ONLY)
    async def extract(
        url: Annotated[Url, Field(description="Page to extract data from.")],
        instructions: Annotated[str, Field(description="What to extract, in plain language.")],
        schema: Annotated[
            Optional[dict[str, Any]], Field(description="JSON Schema the extracted data should follow.")
        ] = None,
        renderJs: RenderJs = None,
    ) -> str:
        """Extract structured data from a web page following your instructions."""
        return await gateway.call(
            "extract",
            "extract data",
            {"url": url, "instructions": instructions, "schema": schema, "renderJs": renderJs},
        )
