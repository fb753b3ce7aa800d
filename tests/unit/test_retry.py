"""
Unit tests for exponential backoff
"""

from unittest.mock import AsyncMock, patch

import pytest

from core.utils.retry import exponential_backoff


@pytest.mark.unit
class TestExponentialBackoff:
    """Test retry loop behaviour"""

    @pytest.mark.asyncio
    async def test_success_first_attempt(self):
        """Test no delay when the first attempt succeeds"""
        func = AsyncMock(return_value="ok")

        with patch("core.utils.retry.asyncio.sleep", new=AsyncMock()) as sleep:
            assert await exponential_backoff(func) == "ok"

        func.assert_awaited_once()
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delays_grow_and_are_capped(self):
        """Test delays multiply by backoff_factor up to max_delay"""
        func = AsyncMock(side_effect=[TimeoutError(), TimeoutError(), TimeoutError(), "ok"])

        with patch("core.utils.retry.asyncio.sleep", new=AsyncMock()) as sleep:
            result = await exponential_backoff(
                func,
                max_attempts=4,
                initial_delay=1.0,
                max_delay=3.0,
                backoff_factor=2.0,
                jitter=False,
                exceptions=(TimeoutError,),
            )

        assert result == "ok"
        assert [call.args[0] for call in sleep.await_args_list] == [1.0, 2.0, 3.0]

    @pytest.mark.asyncio
    async def test_unlisted_exceptions_propagate_immediately(self):
        """Test only configured exceptions are retried"""
        func = AsyncMock(side_effect=KeyError("bad"))

        with patch("core.utils.retry.asyncio.sleep", new=AsyncMock()):
            with pytest.raises(KeyError):
                await exponential_backoff(func, exceptions=(TimeoutError,))

        func.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_invalid_max_attempts(self):
        """Test max_attempts < 1 is rejected"""
        func = AsyncMock()

        with pytest.raises(ValueError, match="max_attempts"):
            await exponential_backoff(func, max_attempts=0)

        func.assert_not_awaited()
