"""Tests for local forward reachability checks."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from brev_ssh.utils.ping import check_forwards, connect_address, forward_is_listening


@pytest.mark.parametrize(
    ("hostname", "expected"),
    [("0.0.0.0", "127.0.0.1"), (None, "127.0.0.1"), ("", "127.0.0.1"), ("10.0.0.5", "10.0.0.5")],
)
def test_connect_address(hostname: str | None, expected: str) -> None:
    assert connect_address(hostname) == expected


@pytest.mark.asyncio
async def test_wildcard_forward_is_checked_on_loopback() -> None:
    mock_writer = MagicMock()
    mock_writer.wait_closed = AsyncMock()

    with patch("asyncio.open_connection", new_callable=AsyncMock) as mock_conn:
        mock_conn.return_value = (MagicMock(), mock_writer)

        assert await forward_is_listening("0.0.0.0", 2222) is True

    mock_conn.assert_called_once_with("127.0.0.1", 2222)
    mock_writer.close.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [TimeoutError(), ConnectionRefusedError(), OSError("unreachable")])
async def test_forward_not_listening(error: Exception) -> None:
    with patch("asyncio.open_connection", new_callable=AsyncMock) as mock_conn:
        mock_conn.side_effect = error

        assert await forward_is_listening("0.0.0.0", 2222) is False


@pytest.mark.asyncio
async def test_check_forwards_mixed() -> None:
    mock_writer = MagicMock()
    mock_writer.wait_closed = AsyncMock()
    attempts: list[tuple[str, int]] = []

    async def fake_open_connection(host: str, port: int) -> tuple:
        attempts.append((host, port))
        if port == 2222:
            return (MagicMock(), mock_writer)
        raise ConnectionRefusedError()

    with patch("asyncio.open_connection", side_effect=fake_open_connection):
        results = await check_forwards({"ws-1": ("0.0.0.0", 2222), "ws-2": ("0.0.0.0", 2223)})

    assert results == {"ws-1": True, "ws-2": False}
    assert sorted(attempts) == [("127.0.0.1", 2222), ("127.0.0.1", 2223)]


@pytest.mark.asyncio
async def test_check_forwards_empty() -> None:
    assert await check_forwards({}) == {}
