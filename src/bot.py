import logging
import re
from collections import deque
from typing import List, Optional

import discord
import redis
from discord.ext import commands

from config.config import Config
from db.redis_client import RedisClient
from games.twentyfour import TwentyFourGame

logger = logging.getLogger(__name__)


def split_numbers(arg: Optional[str]) -> List[str]:
    """Split '4 1 8 7' or '4, 1, 8, 7' into the raw entries."""
    if not arg or not arg.strip():
        return []
    return re.split(r'[\s,]+', arg.strip())


class TwentyFourBot(commands.Bot):
    def __init__(self, config: Config):
        intents = discord.Intents.default()
        intents.message_content = True  # Needed to read command arguments

        super().__init__(command_prefix=config.command_prefix, intents=intents)
        self.config = config
        self.redis_client = RedisClient(config.redis_host, config.redis_port) if config.redis_enabled else None
        self.game = TwentyFourGame(redis_client=self.redis_client, cache_ttl=config.cache_ttl)

        # Message deduplication buffer
        self.processed_messages = deque(maxlen=100)

        # Command handlers dictionary: name -> (handler, aliases)
        self.command_handlers = {
            '24': (self._handle_solve, ['solve24']),
            '24stats': (self._handle_stats, []),
            '24check': (self._handle_check, ['check24']),
        }

    async def setup_hook(self):
        """This is called when the bot is ready to start"""
        self.add_commands()

    async def on_ready(self):
        logger.info("Logged in as %s (ID: %s)", self.user, self.user.id)
        await self.change_presence(
            activity=discord.Game(name=f"24 | {self.config.command_prefix}24 a b c d")
        )

    def add_commands(self):
        """Register commands using the command handlers dictionary"""
        for cmd_name, (handler, aliases) in self.command_handlers.items():
            # Create a closure that properly captures the handler
            def make_callback(h):
                async def callback(ctx, *, arg=None):
                    if arg is None:
                        await h(ctx)
                    else:
                        await h(ctx, arg)
                return callback

            cmd = commands.Command(make_callback(handler), name=cmd_name, aliases=aliases)
            self.add_command(cmd)

        logger.info("Registered commands: %s", ", ".join(c.name for c in self.commands))

    def answer_puzzle(self, arg: Optional[str], server_id: Optional[str] = None) -> str:
        """Reply text for a solve request."""
        values = split_numbers(arg)
        if not values:
            return self.config.messages.usage

        result = self.game.solve(values, server_id=server_id)
        return self.game.format_result(result, self.config.messages.failure)

    async def _handle_solve(self, ctx, arg=None):
        """Handle the 24 command - solves the puzzle for four numbers"""
        server_id = str(ctx.guild.id) if ctx.guild else None
        logger.info("24 requested by %s: %s", ctx.author, arg)
        try:
            reply = self.answer_puzzle(arg, server_id)
        except Exception:
            logger.exception("Error solving puzzle %r", arg)
            reply = self.config.messages.failure
        await ctx.send(reply)

    def check_puzzle(self, arg: Optional[str]) -> str:
        """Reply text for a player checking their own answer."""
        parts = arg.split(None, 4) if arg else []
        if len(parts) < 5:
            return f"Usage: `{self.config.command_prefix}24check <a> <b> <c> <d> <expression>`"

        correct, message = self.game.check_answer(parts[:4], parts[4])
        if correct:
            return f"Correct! {message}"
        return f"Not quite: {message}"

    async def _handle_check(self, ctx, arg=None):
        """Handle the 24check command - checks a player's expression for four numbers"""
        logger.info("24check requested by %s: %s", ctx.author, arg)
        await ctx.send(self.check_puzzle(arg))

    async def _handle_stats(self, ctx, arg=None):
        """Handle the 24stats command - shows per-server outcome counters"""
        if ctx.guild is None:
            await ctx.send("Stats are only kept for servers.")
            return
        if self.redis_client is None:
            await ctx.send("Stats are not available without Redis.")
            return

        try:
            stats = self.game.get_stats(str(ctx.guild.id))
        except redis.RedisError as e:
            logger.warning("Could not read stats: %s", e)
            await ctx.send("Stats are not available right now.")
            return

        await ctx.send(
            f"**24 Stats:**\n"
            f"- Solved: {stats['solved']}\n"
            f"- No solution: {stats['no_solution']}\n"
            f"- Invalid input: {stats['invalid_input']}"
        )

    async def on_message(self, message: discord.Message):
        """Called when a message is received"""
        # Ignore messages from the bot itself
        if message.author == self.user:
            return

        # Deduplication check
        if message.id in self.processed_messages:
            return
        self.processed_messages.append(message.id)

        await self.process_commands(message)
