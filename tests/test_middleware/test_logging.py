"""Tests for logging middleware."""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from brev_ssh.middleware.logging import LoggingMiddleware


@pytest.fixture
def mock_logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def tool_context() -> MagicMock:
    context = MagicMock()
    context.method = "tools/call"
    context.message.name = "sync_ssh_config"
    context.message.arguments = {}
    return context


@pytest.mark.asyncio
async def test_logs_tool_call_and_result(mock_logger: MagicMock, tool_context: MagicMock) -> None:
    middleware = LoggingMiddleware(logger=mock_logger)

    result = await middleware.on_message(tool_context, AsyncMock(return_value="line1\nline2"))

    assert result == "line1\nline2"
    start, end = mock_logger.log.call_args_list
    assert start.args == (logging.INFO, ">>> %s", "TOOL: sync_ssh_config()")
    assert end.args[0] == logging.INFO
    assert end.args[2:4] == ("TOOL: sync_ssh_config()", "11 chars, 2 lines")


@pytest.mark.asyncio
async def test_formats_arguments(mock_logger: MagicMock, tool_context: MagicMock) -> None:
    tool_context.message.arguments = {"host": "ws-1", "port": 2222}
    middleware = LoggingMiddleware(logger=mock_logger)

    await middleware.on_message(tool_context, AsyncMock(return_value=None))

    assert mock_logger.log.call_args_list[0].args[2] == "TOOL: sync_ssh_config(host='ws-1', port=2222)"


@pytest.mark.asyncio
async def test_slow_call_logged_as_warning(mock_logger: MagicMock, tool_context: MagicMock) -> None:
    middleware = LoggingMiddleware(logger=mock_logger, slow_threshold_ms=0.0)

    await middleware.on_message(tool_context, AsyncMock(return_value="ok"))

    end = mock_logger.log.call_args_list[-1]
    assert end.args[0] == logging.WARNING
    assert end.args[4].endswith("SLOW!")


@pytest.mark.asyncio
async def test_failure_logged_and_reraised(mock_logger: MagicMock, tool_context: MagicMock) -> None:
    middleware = LoggingMiddleware(logger=mock_logger)

    with pytest.raises(ValueError):
        await middleware.on_message(tool_context, AsyncMock(side_effect=ValueError("bad")))

    args = mock_logger.error.call_args.args
    assert args[1:3] == ("TOOL: sync_ssh_config()", "ValueError")
    assert len(mock_logger.log.call_args_list) == 1


@pytest.mark.asyncio
async def test_resource_read(mock_logger: MagicMock) -> None:
    context = MagicMock()
    context.method = "resources/read"
    context.message.uri = "hosts://list"
    middleware = LoggingMiddleware(logger=mock_logger)

    await middleware.on_message(context, AsyncMock(return_value="x"))

    assert mock_logger.log.call_args_list[0].args == (logging.INFO, ">>> %s", "RESOURCE: hosts://list")


@pytest.mark.asyncio
async def test_listing_requests(mock_logger: MagicMock) -> None:
    context = MagicMock()
    context.method = "tools/list"
    result = MagicMock(spec=["tools"])
    result.tools = [1, 2]
    middleware = LoggingMiddleware(logger=mock_logger)

    await middleware.on_message(context, AsyncMock(return_value=result))

    end = mock_logger.log.call_args_list[-1]
    assert end.args[2:4] == ("LIST TOOLS", "2 tools")


@pytest.mark.asyncio
async def test_other_methods_logged_at_debug(mock_logger: MagicMock) -> None:
    context = MagicMock()
    context.method = "initialize"
    middleware = LoggingMiddleware(logger=mock_logger)

    await middleware.on_message(context, AsyncMock(return_value=None))

    assert mock_logger.log.call_args_list[0].args == (logging.DEBUG, ">>> %s", "MCP: initialize")


@pytest.mark.asyncio
async def test_payloads_logged_when_enabled(mock_logger: MagicMock, tool_context: MagicMock) -> None:
    tool_context.message.arguments = {"x": "y" * 50}
    middleware = LoggingMiddleware(logger=mock_logger, include_payloads=True, max_payload_length=20)

    await middleware.on_message(tool_context, AsyncMock(return_value={"a": 1}))

    debug_messages = [call.args[1] for call in mock_logger.debug.call_args_list]
    assert debug_messages[0].endswith("... [truncated]")
    assert debug_messages[1] == '{"a": 1}'


@pytest.mark.parametrize(
    ("result", "summary"),
    [
        (None, "null"),
        ("abc", "3 chars"),
        ([1, 2], "2 items"),
        ({"a": 1}, "1 keys"),
        (3.5, "float"),
    ],
)
def test_summarize(result: object, summary: str) -> None:
    assert LoggingMiddleware.summarize(result) == summary
