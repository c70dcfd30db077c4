"""Tests for response shaping (field projection and base64 previews)."""

import json

import pytest

from dumpling.shaping import PROJECTIONS, Projection, pick, preview, shape_response


def _shaped(tool_name, data, preview_length=100):
    return json.loads(shape_response(tool_name, data, preview_length))


class TestHelpers:
    def test_preview_truncates_and_appends_ellipsis(self):
        assert preview("A" * 500) == "A" * 100 + "..."
        assert preview("abcdef", 3) == "abc..."

    def test_preview_of_short_value_still_marks_truncation(self):
        assert preview("abc") == "abc..."

    def test_preview_of_missing_value_is_none(self):
        assert preview(None) is None
        assert preview("") is None

    def test_pick_keeps_present_keys_only(self):
        assert pick({"a": 1, "b": None}, "a", "b", "c") == {"a": 1, "b": None}

    def test_pick_on_non_dict(self):
        assert pick(["a"], "a") == {}

    def test_projection_rules(self):
        projection = Projection(
            ("plain", "maybe", "blob"),
            optional=frozenset({"maybe"}),
            previews=frozenset({"blob"}),
        )

        assert projection.apply({"plain": 1, "maybe": [], "blob": "xyz"}, 1) == {
            "plain": 1,
            "blob": "x...",
        }
        assert projection.apply({}) == {"blob": None}


class TestSearchShaping:
    """The search tool's documented projection."""

    RAW = {
        "searchParameters": {"q": "mcp"},
        "organic": [
            {
                "title": "Model Context Protocol",
                "link": "https://modelcontextprotocol.io",
                "snippet": "An open protocol",
                "position": 1,
                "sitelinks": [{"title": "Docs", "link": "https://modelcontextprotocol.io/docs"}],
                "date": "2024-11-25",
            },
            {
                "title": "Scraped",
                "link": "https://example.com",
                "snippet": "s",
                "position": 2,
                "scrapeOutput": {"title": "Scraped", "content": "# Page body", "format": "markdown"},
            },
        ],
        "credits": 1,
    }

    def test_organic_results_are_trimmed(self):
        shaped = _shaped("search", self.RAW)

        first, second = shaped["organicResults"]
        assert first == {
            "title": "Model Context Protocol",
            "link": "https://modelcontextprotocol.io",
            "snippet": "An open protocol",
            "position": 1,
        }
        assert second["content"] == "# Page body"
        assert shaped["searchParameters"] == {"q": "mcp"}
        assert "credits" not in shaped

    def test_absent_optional_sections_are_omitted_not_null(self):
        shaped = _shaped("search", self.RAW)

        assert "featuredSnippet" not in shaped
        assert "relatedSearches" not in shaped
        assert "peopleAlsoAsk" not in shaped

    def test_present_optional_sections_are_kept(self):
        raw = dict(
            self.RAW,
            featuredSnippet={"snippet": "MCP is..."},
            relatedSearches=[{"query": "mcp server"}],
            peopleAlsoAsk=[],
        )

        shaped = _shaped("search", raw)

        assert shaped["featuredSnippet"] == {"snippet": "MCP is..."}
        assert shaped["relatedSearches"] == [{"query": "mcp server"}]
        assert "peopleAlsoAsk" not in shaped

    @pytest.mark.parametrize("scrape_output", ["raw text", ["a"], {"title": "no content"}])
    def test_unusable_scrape_output_adds_no_content(self, scrape_output):
        raw = {"organic": [{"title": "t", "link": "https://t.io", "scrapeOutput": scrape_output}]}

        assert _shaped("search", raw)["organicResults"] == [{"title": "t", "link": "https://t.io"}]

    def test_scraped_null_content_is_kept(self):
        raw = {"organic": [{"title": "t", "scrapeOutput": {"content": None}}]}

        assert _shaped("search", raw)["organicResults"] == [{"title": "t", "content": None}]

    def test_non_list_organic_raises(self):
        with pytest.raises(TypeError):
            shape_response("search", {"organic": 7})

    def test_missing_organic_list(self):
        assert _shaped("search", {"searchParameters": {}})["organicResults"] == []


class TestBinaryPreviews:
    def test_screenshot(self):
        shaped = _shaped("screenshot", {"url": "https://a.b", "imageBase64": "i" * 1000, "format": "png"})

        assert shaped == {"url": "https://a.b", "imageBase64": "i" * 100 + "...", "format": "png"}

    def test_convert_to_pdf_without_payload_is_null(self):
        shaped = _shaped("convert-to-pdf", {"metadata": {"pages": 2}})

        assert shaped == {"pdfBase64": None, "metadata": {"pages": 2}}

    def test_preview_length_is_configurable(self):
        shaped = _shaped("merge-pdfs", {"mergedPdfBase64": "p" * 50, "pageCount": 7}, preview_length=10)

        assert shaped == {"mergedPdfBase64": "p" * 10 + "...", "pageCount": 7}

    def test_trim_video_and_write_pdf_metadata(self):
        trimmed = _shaped("trim-video", {"outputBase64": "v" * 200, "format": "mp4", "duration": 5, "size": 1})
        written = _shaped("write-pdf-metadata", {"outputBase64": "w", "success": True, "updatedMetadata": {}})

        assert trimmed["outputBase64"] == "v" * 100 + "..."
        assert written == {"outputBase64": "w...", "success": True, "updatedMetadata": {}}

    def test_generated_images_are_indexed_previews(self):
        raw = {"images": ["a" * 300, "b" * 300], "model": "flux", "prompt": "a cat", "cost": 2}

        shaped = _shaped("generate-ai-image", raw)

        assert shaped == {
            "images": [
                {"imageIndex": 0, "imageBase64": "a" * 100 + "..."},
                {"imageIndex": 1, "imageBase64": "b" * 100 + "..."},
            ],
            "model": "flux",
            "prompt": "a cat",
        }

    def test_generate_image_reports_provider(self):
        shaped = _shaped("generate-image", {"images": [], "provider": "dalle", "prompt": "p", "model": "x"})

        assert shaped == {"images": [], "provider": "dalle", "prompt": "p"}


class TestOtherShapes:
    def test_transcript_is_plain_text(self):
        text = shape_response("get-youtube-transcript", {"transcript": "hello world", "language": "en"})

        assert text == "Transcript: hello world\nLanguage: en"

    def test_missing_transcript_renders_empty(self):
        text = shape_response("get-youtube-transcript", {"transcript": None})

        assert text == "Transcript: \nLanguage: "

    def test_extract_audio_segments_only_when_present(self):
        without = _shaped("extract-audio", {"transcript": "t", "language": "en", "durationInSeconds": 3})
        with_segments = _shaped(
            "extract-audio",
            {"transcript": "t", "language": "en", "durationInSeconds": 3, "segments": [{"start": 0}]},
        )

        assert "segments" not in without
        assert with_segments["segments"] == [{"start": 0}]

    def test_projection_drops_extra_fields(self):
        shaped = _shaped(
            "run-python-code",
            {"result": 2, "stdout": "2\n", "stderr": "", "executionTime": 12, "outputFiles": [], "vm": "x"},
        )

        assert list(shaped) == ["result", "stdout", "stderr", "executionTime", "outputFiles"]

    def test_passthrough_tools_return_whole_response(self):
        raw = {"reviews": [{"rating": 5}], "nextPageToken": None}

        assert _shaped("get-google-reviews", raw) == raw
        assert "get-google-reviews" not in PROJECTIONS

    def test_output_is_pretty_printed(self):
        text = shape_response("crawl", {"pages": [{"url": "https://a.b"}]})

        assert text.startswith("{\n  ")

    def test_non_ascii_is_kept(self):
        assert "café" in shape_response("extract", {"name": "café"})
