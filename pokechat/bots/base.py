"""
Bot persona contract.

A bot is a persona the terminal can talk to. Every bot is initialised once
when it is attached and then answers one user turn at a time.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pokechat.config.settings import Settings
from pokechat.llm.gemini_client import TokenCallback


class Bot(ABC):
    """
    Base class for all bot personas.

    Subclasses set the `id`, `name` and `description` class attributes and
    implement init() and answer().
    """

    id: str = ""
    name: str = ""
    description: str = ""

    @abstractmethod
    async def init(self, settings: Settings) -> None:
        """Prepare the bot (create its chat session, build indexes...)."""

    @abstractmethod
    async def answer(self, text: str, on_token: Optional[TokenCallback] = None) -> str:
        """
        Answer one user turn.

        Args:
            text: The user's question
            on_token: Optional callback receiving streamed fragments in order

        Returns:
            str: The complete answer
        """

    def precheck(self, text: str) -> Optional[str]:
        """Return a canned reply to skip the model entirely, or None."""
        return None

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} id={self.id!r}>"
