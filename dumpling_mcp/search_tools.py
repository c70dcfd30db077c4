# =============================================================================
# dumpling_mcp/search_tools.py  —  Google Search Family
# =============================================================================
#
# Tools: search, get-autocomplete, search-maps, search-places, search-news,
#        get-google-reviews
#
# All of these are read-only lookups, safe to retry.  Results are trimmed
# (see dumpling/shaping.py) so the assistant gets links and snippets, not
# the full SERP payload.
# =============================================================================

from typing import Annotated, Literal, Optional

from fastmcp import FastMCP
from pydantic import Field

from dumpling.models import DateRange, SearchScrapeOptions
from dumpling_mcp.server import READ_ONLY, UpstreamGateway


# Parameters shared by most search endpoints.
Query = Annotated[str, Field(description="The search query.")]
Country = Annotated[Optional[str], Field(description="Country code to search from, e.g. 'us'.")]
Location = Annotated[Optional[str], Field(description="Location to search from, e.g. 'New York, NY'.")]
Language = Annotated[Optional[str], Field(description="Language code for results, e.g. 'en'.")]
Page = Annotated[Optional[float], Field(ge=1, description="Results page number, starting at 1.")]
Range = Annotated[Optional[DateRange], Field(description="Restrict results to a time window.")]


def register(mcp: FastMCP, gateway: UpstreamGateway) -> None:
    """Register the search tools on `mcp`."""

    @mcp.tool(name="search", annotations=READ_ONLY)
    async def search(
        query: Query,
        country: Country = None,
        location: Location = None,
        language: Language = None,
        dateRange: Range = None,
        page: Page = None,
        scrapeResults: Annotated[
            Optional[bool], Field(description="Also scrape the pages behind the top results.")
        ] = None,
        numResultsToScrape: Annotated[
            Optional[float], Field(ge=1, description="How many top results to scrape.")
        ] = None,
        scrapeOptions: Annotated[
            Optional[SearchScrapeOptions],
            Field(description="Output format and cleaning for scraped results."),
        ] = None,
    ) -> str:
        """Perform a Google web search, optionally scraping the top results.

        Returns searchParameters and organicResults (title, link, snippet,
        position, plus the page content for scraped results).  When Google
        provides them, featuredSnippet, relatedSearches and peopleAlsoAsk are
        included as well.
        """
        return await gateway.call(
            "search",
            "perform search",
            {
                "query": query,
                "country": country,
                "location": location,
                "language": language,
                "dateRange": dateRange,
                "page": page,
                "scrapeResults": scrapeResults,
                "numResultsToScrape": numResultsToScrape,
                "scrapeOptions": scrapeOptions,
            },
        )

    @mcp.tool(name="get-autocomplete", annotations=READ_ONLY)
    async def get_autocomplete(
        query: Query,
        location: Location = None,
        country: Country = None,
        language: Language = None,
    ) -> str:
        """Get Google search autocomplete suggestions for a partial query."""
        return await gateway.call(
            "get-autocomplete",
            "get autocomplete suggestions",
            {"query": query, "location": location, "country": country, "language": language},
        )

    @mcp.tool(name="search-maps", annotations=READ_ONLY)
    async def search_maps(
        query: Query,
        gpsPositionZoom: Annotated[
            Optional[str],
            Field(description="Map centre and zoom as '@latitude,longitude,zoom', e.g. '@40.7,-74.0,14z'."),
        ] = None,
        placeId: Annotated[Optional[str], Field(description="Google place ID to search around.")] = None,
        cid: Annotated[Optional[str], Field(description="Google customer ID (CID) of a place.")] = None,
        language: Language = None,
        page: Page = None,
    ) -> str:
        """Search Google Maps.  Returns searchParameters, the map position (ll) and places."""
        return await gateway.call(
            "search-maps",
            "perform maps search",
            {
                "query": query,
                "gpsPositionZoom": gpsPositionZoom,
                "placeId": placeId,
                "cid": cid,
                "language": language,
                "page": page,
            },
        )

    @mcp.tool(name="search-places", annotations=READ_ONLY)
    async def search_places(
        query: Query,
        country: Country = None,
        location: Location = None,
        language: Language = None,
        page: Page = None,
    ) -> str:
        """Search Google Places for businesses and points of interest."""
        return await gateway.call(
            "search-places",
            "perform places search",
            {
                "query": query,
                "country": country,
                "location": location,
                "language": language,
                "page": page,
            },
        )

    @mcp.tool(name="search-news", annotations=READ_ONLY)
    async def search_news(
        query: Query,
        country: Country = None,
        location: Location = None,
        language: Language = None,
        dateRange: Range = None,
        page: Page = None,
    ) -> str:
        """Search Google News.  Returns searchParameters and news articles."""
        return await gateway.call(
            "search-news",
            "perform news search",
            {
                "query": query,
                "country": country,
                "location": location,
                "language": language,
                "dateRange": dateRange,
                "page": page,
            },
        )

    @mcp.tool(name="get-google-reviews", annotations=READ_ONLY)
    async def get_google_reviews(
        placeId: Annotated[Optional[str], Field(description="Google place ID of the business.")] = None,
        businessName: Annotated[
            Optional[str], Field(description="Business name, used when no placeId is known.")
        ] = None,
        location: Annotated[
            Optional[str], Field(description="Location to disambiguate businessName.")
        ] = None,
        language: Language = None,
        limit: Annotated[Optional[float], Field(ge=1, description="Maximum number of reviews.")] = None,
        sortBy: Annotated[
            Optional[Literal["relevance", "newest"]], Field(description="Review ordering.")
        ] = None,
    ) -> str:
        """Fetch Google reviews for a place.

        Identify the place with either placeId or businessName (at least one
        is required).  Returns the full review payload.
        """
        return await gateway.call(
            "get-google-reviews",
            "get Google reviews",
            {
                "placeId": placeId,
                "businessName": businessName,
                "location": location,
                "language": language,
                "limit": limit,
                "sortBy": sortBy,
            },
            one_of=("placeId", "businessName"),
        )
