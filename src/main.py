import asyncio
import logging
import discord
from dotenv import load_dotenv
from bot import TwentyFourBot
from config.config import Config

logger = logging.getLogger(__name__)

async def main():
    # Load environment variables
    load_dotenv()

    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s %(levelname)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    try:
        logger.info("Discord.py Version: %s", discord.__version__)
        config = Config()
        bot = TwentyFourBot(config)
        logger.info("Starting bot...")
        async with bot:
            await bot.start(config.discord_token)
    except Exception as e:
        logger.error("Error starting bot: %s", e)
        raise

if __name__ == "__main__":
    asyncio.run(main())
