"""
Bot Registry System.

This module provides a centralized registry of bot personas, looked up by
id from the terminal (`/use <id>`) and from the `--bot` startup argument.

To add a new bot:
1. Subclass Bot in pokechat/bots/
2. Import it here
3. Register it with _registry.register(YourBot())
"""

from typing import Dict, List, Optional

from pokechat.bots.base import Bot
from pokechat.bots.pokedex_generic import PokedexGenericBot
from pokechat.bots.pokedex_kb import PokedexKbBot
from pokechat.errors import UnknownBotError


class BotRegistry:
    """
    Centralized registry of bots.

    Keeps bots in registration order, so the first registered bot is the
    default and `/bots` lists them in a stable order.
    """

    def __init__(self):
        """Initialize an empty bot registry."""
        self._bots: Dict[str, Bot] = {}

    def register(self, bot: Bot):
        """
        Register a bot in the registry.

        Args:
            bot: A Bot instance with a non-empty id

        Raises:
            ValueError: If the id is empty or already registered
        """
        if not bot.id:
            raise ValueError(f"Bot {bot!r} has no id")
        if bot.id in self._bots:
            raise ValueError(f"Duplicate bot id: {bot.id}")
        self._bots[bot.id] = bot

    def get(self, bot_id: str) -> Optional[Bot]:
        """Return the bot with this id, or None."""
        return self._bots.get(bot_id)

    def require(self, bot_id: str) -> Bot:
        """
        Return the bot with this id.

        Raises:
            UnknownBotError: If bot_id is not registered
        """
        bot = self.get(bot_id)
        if bot is None:
            raise UnknownBotError(
                f"No bot with id \"{bot_id}\". Available: {', '.join(self.ids())}"
            )
        return bot

    def ids(self) -> List[str]:
        return list(self._bots)

    def list(self) -> List[Bot]:
        return list(self._bots.values())

    def __contains__(self, bot_id: str) -> bool:
        return bot_id in self._bots

    def __len__(self) -> int:
        return len(self._bots)


def create_default_registry() -> BotRegistry:
    """Registry holding the built-in personas, generic bot first."""
    registry = BotRegistry()
    registry.register(PokedexGenericBot())
    registry.register(PokedexKbBot())
    return registry


# Global registry instance
_registry = create_default_registry()


def get_registry() -> BotRegistry:
    return _registry


def get_bot_by_id(bot_id: str) -> Optional[Bot]:
    """
    Look up a bot in the global registry.

    This is a convenience wrapper around _registry.get().
    """
    return _registry.get(bot_id)
