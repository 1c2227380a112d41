import asyncio

from fastmcp import Client

from conftest import VALID_IMAGE
from core.image_generation import GENERATE_IMAGE_TOOL, MISSING_ARGUMENTS_MESSAGE
from tools.mcp_server import create_server


def _run(server, coro_factory):
    async def _go():
        async with Client(server) as client:
            return await coro_factory(client)

    return asyncio.run(_go())


def test_lists_the_image_tool(config, json_webhook) -> None:
    server = create_server(config, webhook=json_webhook({"success": True}).client(config))

    tools = _run(server, lambda client: client.list_tools())

    assert [tool.name for tool in tools] == ["generate_image_with_gemini"]
    tool = tools[0]
    assert tool.description == GENERATE_IMAGE_TOOL.description
    assert sorted(tool.inputSchema["required"]) == ["image_base64", "prompt"]
    for name in ("image_base64", "prompt"):
        listed = tool.inputSchema["properties"][name]
        expected = GENERATE_IMAGE_TOOL.input_schema["properties"][name]
        assert listed["type"] == "string"
        assert listed["description"] == expected["description"]


def test_call_returns_success_text(config, json_webhook) -> None:
    fake = json_webhook({"success": True, "generated_image": "abc", "timestamp": "2024-01-01T00:00:00Z"})
    server = create_server(config, webhook=fake.client(config))

    result = _run(
        server,
        lambda client: client.call_tool_mcp(
            "generate_image_with_gemini", {"image_base64": VALID_IMAGE, "prompt": "a cat"}
        ),
    )

    assert result.isError is False
    assert "**Format**: image/png" in result.content[0].text
    assert "**Processed at**: 2024-01-01T00:00:00Z" in result.content[0].text
    assert fake.calls == 1


def test_validation_error_is_reported_as_error_result(config, json_webhook) -> None:
    fake = json_webhook({"success": True})
    server = create_server(config, webhook=fake.client(config))

    result = _run(
        server,
        lambda client: client.call_tool_mcp(
            "generate_image_with_gemini", {"image_base64": "", "prompt": "a cat"}
        ),
    )

    assert result.isError is True
    assert MISSING_ARGUMENTS_MESSAGE in result.content[0].text
    assert fake.calls == 0


def test_remote_failure_is_reported_as_error_result(config, json_webhook) -> None:
    fake = json_webhook({"success": False, "error": "quota exceeded"})
    server = create_server(config, webhook=fake.client(config))

    result = _run(
        server,
        lambda client: client.call_tool_mcp(
            "generate_image_with_gemini", {"image_base64": VALID_IMAGE, "prompt": "a cat"}
        ),
    )

    assert result.isError is True
    assert "quota exceeded" in result.content[0].text


def test_unknown_tool_is_rejected_by_the_server(config, json_webhook) -> None:
    fake = json_webhook({"success": True})
    server = create_server(config, webhook=fake.client(config))

    result = _run(server, lambda client: client.call_tool_mcp("generate_video", {}))

    assert result.isError is True
    assert fake.calls == 0
