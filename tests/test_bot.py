from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from bot import TwentyFourBot, split_numbers
from config.config import Messages
from games.twentyfour import TwentyFourGame


def make_config(**overrides):
    values = dict(
        discord_token="token",
        redis_host="localhost",
        redis_port=6379,
        redis_enabled=False,
        command_prefix="!",
        cache_ttl=60,
        messages=Messages(failure="No solution found", usage="Usage: !24 a b c d"),
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def make_ctx(guild_id=None):
    ctx = MagicMock()
    ctx.send = AsyncMock()
    ctx.guild = SimpleNamespace(id=guild_id) if guild_id is not None else None
    return ctx


def test_split_numbers():
    assert split_numbers("4 1 8 7") == ["4", "1", "8", "7"]
    assert split_numbers(" 4, 1,8 ,7 ") == ["4", "1", "8", "7"]
    assert split_numbers("") == []
    assert split_numbers(None) == []


@pytest.mark.asyncio
async def test_answer_puzzle():
    bot = TwentyFourBot(make_config())
    assert bot.redis_client is None
    assert bot.answer_puzzle("1 2 3 4") == "((1+2)+3)*4 = 24"
    assert bot.answer_puzzle("1 1 1 1") == "No solution found"
    assert bot.answer_puzzle("0 1 2 3") == "No solution found"
    assert bot.answer_puzzle(None) == "Usage: !24 a b c d"


@pytest.mark.asyncio
async def test_commands_are_registered_with_aliases():
    bot = TwentyFourBot(make_config())
    bot.add_commands()
    assert bot.get_command("24") is not None
    assert bot.get_command("solve24").name == "24"
    assert bot.get_command("24stats") is not None
    assert bot.get_command("check24").name == "24check"


@pytest.mark.asyncio
async def test_solve_command_replies_with_solution():
    bot = TwentyFourBot(make_config())
    ctx = make_ctx()
    await bot._handle_solve(ctx, "6 6 6 6")
    ctx.send.assert_awaited_once_with("((6+6)+6)+6 = 24")


@pytest.mark.asyncio
async def test_solve_command_without_arguments_shows_usage():
    bot = TwentyFourBot(make_config())
    ctx = make_ctx()
    await bot._handle_solve(ctx)
    ctx.send.assert_awaited_once_with("Usage: !24 a b c d")


@pytest.mark.asyncio
async def test_solve_command_hides_unexpected_errors():
    bot = TwentyFourBot(make_config())
    bot.game = MagicMock()
    bot.game.solve.side_effect = RuntimeError("boom")
    ctx = make_ctx()
    await bot._handle_solve(ctx, "4 1 8 7")
    ctx.send.assert_awaited_once_with("No solution found")


@pytest.mark.asyncio
async def test_stats_command(fake_redis):
    bot = TwentyFourBot(make_config())
    bot.redis_client = fake_redis
    bot.game = TwentyFourGame(redis_client=fake_redis)

    await bot._handle_solve(make_ctx(42), "4 1 8 7")
    await bot._handle_solve(make_ctx(42), "1 1 1 1")

    ctx = make_ctx(42)
    await bot._handle_stats(ctx)
    ctx.send.assert_awaited_once_with(
        "**24 Stats:**\n- Solved: 1\n- No solution: 1\n- Invalid input: 0"
    )


@pytest.mark.asyncio
async def test_stats_command_needs_redis_and_a_server():
    bot = TwentyFourBot(make_config())

    ctx = make_ctx()
    await bot._handle_stats(ctx)
    ctx.send.assert_awaited_once_with("Stats are only kept for servers.")

    ctx = make_ctx(42)
    await bot._handle_stats(ctx)
    ctx.send.assert_awaited_once_with("Stats are not available without Redis.")


@pytest.mark.asyncio
async def test_check_command():
    bot = TwentyFourBot(make_config())

    ctx = make_ctx()
    await bot._handle_check(ctx, "4 1 8 7 (8 - 4) * (7 - 1)")
    ctx.send.assert_awaited_once_with("Correct! (8 - 4) * (7 - 1) = 24")

    assert bot.check_puzzle("1 2 3 4 1+2+3+4") == "Not quite: 1+2+3+4 = 10, not 24"
    assert bot.check_puzzle("1 2 3 4") == "Usage: `!24check <a> <b> <c> <d> <expression>`"
    assert bot.check_puzzle(None) == "Usage: `!24check <a> <b> <c> <d> <expression>`"
