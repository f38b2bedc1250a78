import logging
import os
from dataclasses import dataclass
import yaml

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'settings.yaml')

@dataclass
class Messages:
    failure: str = "Invalid numbers\nNo solution found 😔"
    usage: str = "Usage: `!24 <a> <b> <c> <d>` with four numbers greater than zero"

class Config:
    def __init__(self):
        self.discord_token = os.getenv('DISCORD_TOKEN')
        self.redis_host = os.getenv('REDIS_HOST', 'localhost')
        self.redis_port = int(os.getenv('REDIS_PORT', 6379))
        self.redis_enabled = os.getenv('REDIS_ENABLED', 'true').strip().lower() not in ('0', 'false', 'no')
        self.settings_path = os.getenv('SETTINGS_PATH', DEFAULT_SETTINGS_PATH)

        # Validate required environment variables
        if not self.discord_token:
            raise ValueError("Missing required environment variables")

        settings = self._load_settings()
        self.command_prefix = str(settings.get('command_prefix', '!'))
        self.cache_ttl = int(settings.get('cache_ttl', 3600))
        messages = settings.get('messages') or {}
        defaults = Messages()
        self.messages = Messages(
            failure=messages.get('failure', defaults.failure),
            usage=messages.get('usage', defaults.usage)
        )

    def _load_settings(self) -> dict:
        try:
            with open(self.settings_path, 'r', encoding='utf-8') as f:
                settings = yaml.safe_load(f)

            if not settings:
                logger.warning("Empty settings file %s, using defaults", self.settings_path)
                return {}
            return settings
        except yaml.YAMLError as e:
            logger.error("YAML parsing error in %s: %s", self.settings_path, e)
            raise
        except Exception as e:
            logger.error("Error loading settings: %s", e)
            raise ValueError(f"Failed to load settings: {str(e)}")
