# =============================================================================
# dumpling_mcp/ai_tools.py  —  Agents, Knowledge Bases & Image Generation
# =============================================================================
#
# Tools: generate-agent-completion, search-knowledge-base,
#        add-to-knowledge-base, generate-ai-image, generate-image
#
# The two image tools hit different upstream endpoints with different
# option sets ("model" vs "provider"); they are kept separate rather than
# merged into one tool with a switch.
# =============================================================================

from typing import Annotated, Any, Literal, Optional

from fastmcp import FastMCP
from pydantic import Field

from dumpling.models import AgentToolSpec, ImageQuality, KnowledgeBaseEntry
from dumpling_mcp.server import MUTATING, READ_ONLY, UpstreamGateway


Prompt = Annotated[str, Field(description="What to generate.")]
Width = Annotated[Optional[float], Field(ge=1, description="Image width in pixels.")]
Height = Annotated[Optional[float], Field(ge=1, description="Image height in pixels.")]
NumImages = Annotated[Optional[float], Field(ge=1, description="Number of images to generate.")]
Quality = Annotated[Optional[ImageQuality], Field(description="Rendering quality.")]
Style = Annotated[Optional[str], Field(description="Style hint, e.g. 'photorealistic'.")]
NegativePrompt = Annotated[Optional[str], Field(description="What the image should NOT contain.")]


def register(mcp: FastMCP, gateway: UpstreamGateway) -> None:
    """Register the AI and knowledge-base tools on `mcp`."""

    @mcp.tool(name="generate-agent-completion", annotations=READ_ONLY)
    async def generate_agent_completion(
        prompt: Annotated[str, Field(description="Message for the agent.")],
        agentId: Annotated[Optional[str], Field(description="ID of a configured Dumpling agent.")] = None,
        model: Annotated[Optional[str], Field(description="Model override.")] = None,
        temperature: Annotated[
            Optional[float], Field(ge=0, description="Sampling temperature.")
        ] = None,
        maxTokens: Annotated[
            Optional[float], Field(ge=1, description="Maximum tokens in the completion.")
        ] = None,
        tools: Annotated[
            Optional[list[AgentToolSpec]], Field(description="Tools the agent may call.")
        ] = None,
        context: Annotated[
            Optional[list[str]], Field(description="Extra context passages for the agent.")
        ] = None,
    ) -> str:
        """Get a completion from a Dumpling AI agent.

        Returns completion, toolCalls and tokenUsage.
        """
        return await gateway.call(
            "generate-agent-completion",
            "generate agent completion",
            {
                "prompt": prompt,
                "agentId": agentId,
                "model": model,
                "temperature": temperature,
                "maxTokens": maxTokens,
                "tools": tools,
                "context": context,
            },
        )

    @mcp.tool(name="search-knowledge-base", annotations=READ_ONLY)
    async def search_knowledge_base(
        kbId: Annotated[str, Field(description="Knowledge base ID.")],
        query: Annotated[str, Field(description="What to look for.")],
        limit: Annotated[Optional[float], Field(ge=1, description="Maximum number of matches.")] = None,
        metadata: Annotated[
            Optional[dict[str, Any]], Field(description="Only match entries with this metadata.")
        ] = None,
        similarityThreshold: Annotated[
            Optional[float], Field(ge=0, le=1, description="Minimum similarity score (0-1).")
        ] = None,
    ) -> str:
        """Semantic search over a knowledge base."""
        return await gateway.call(
            "search-knowledge-base",
            "search knowledge base",
            {
                "kbId": kbId,
                "query": query,
                "limit": limit,
                "metadata": metadata,
                "similarityThreshold": similarityThreshold,
            },
        )

    @mcp.tool(name="add-to-knowledge-base", annotations=MUTATING)
    async def add_to_knowledge_base(
        kbId: Annotated[str, Field(description="Knowledge base ID.")],
        entries: Annotated[
            list[KnowledgeBaseEntry], Field(description="Entries to add, each with text and optional metadata.")
        ],
        upsert: Annotated[
            Optional[bool], Field(description="Update entries that already exist.")
        ] = None,
    ) -> str:
        """Add entries to a knowledge base."""
        return await gateway.call(
            "add-to-knowledge-base",
            "add to knowledge base",
            {"kbId": kbId, "entries": entries, "upsert": upsert},
        )

    @mcp.tool(name="generate-ai-image", annotations=READ_ONLY)
    async def generate_ai_image(
        prompt: Prompt,
        model: Annotated[Optional[str], Field(description="Image model to use.")] = None,
        width: Width = None,
        height: Height = None,
        numImages: NumImages = None,
        quality: Quality = None,
        style: Style = None,
        negativePrompt: NegativePrompt = None,
    ) -> str:
        """Generate images from a text prompt.

        Returns one base64 preview per image, plus the model and prompt used.
        """
        return await gateway.call(
            "generate-ai-image",
            "generate AI image",
            {
                "prompt": prompt,
                "model": model,
                "width": width,
                "height": height,
                "numImages": numImages,
                "quality": quality,
                "style": style,
                "negativePrompt": negativePrompt,
            },
        )

    @mcp.tool(name="generate-image", annotations=READ_ONLY)
    async def generate_image(
        prompt: Prompt,
        provider: Annotated[
            Optional[Literal["dalle", "stable-diffusion", "midjourney"]],
            Field(description="Image generation provider."),
        ] = None,
        width: Width = None,
        height: Height = None,
        numImages: NumImages = None,
        quality: Quality = None,
        style: Style = None,
        negativePrompt: NegativePrompt = None,
    ) -> str:
        """Generate images with a chosen provider (DALL-E, Stable Diffusion, Midjourney).

        Returns one base64 preview per image, plus the provider and prompt.
        """
        return await gateway.call(
            "generate-image",
            "generate image",
            {
                "prompt": prompt,
                "provider": provider,
                "width": width,
                "height": height,
                "numImages": numImages,
                "quality": quality,
                "style": style,
                "negativePrompt": negativePrompt,
            },
        )
