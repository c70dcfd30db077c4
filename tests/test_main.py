"""Tests for the command-line entry point (introspection flags and startup failures)."""

import json

import pytest

from main import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("DUMPLING_BASE_URL", "DUMPLING_TIMEOUT", "DUMPLING_PREVIEW_LENGTH", "DUMPLING_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_list_tools_prints_every_schema(capsys, no_api_key):
    assert main(["--list-tools"]) == 0

    tools = json.loads(capsys.readouterr().out)
    assert len(tools) == 28
    assert [tool["name"] for tool in tools] == sorted(tool["name"] for tool in tools)
    assert all({"name", "description", "inputSchema"} <= set(tool) for tool in tools)


def test_describe_one_tool(capsys):
    assert main(["--describe", "scrape"]) == 0

    tool = json.loads(capsys.readouterr().out)
    assert tool["name"] == "scrape"
    assert "url" in tool["inputSchema"]["properties"]


def test_describe_unknown_tool_fails(capsys):
    assert main(["--describe", "nope"]) == 1
    assert capsys.readouterr().out == ""


def test_bad_configuration_fails_startup(monkeypatch, capsys):
    monkeypatch.setenv("DUMPLING_TIMEOUT", "forever")

    assert main(["--list-tools"]) == 1
    assert capsys.readouterr().out == ""


def test_flags_are_mutually_exclusive():
    with pytest.raises(SystemExit):
        main(["--list-tools", "--describe", "scrape"])
