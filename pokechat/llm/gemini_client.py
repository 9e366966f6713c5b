"""
Gemini chat client wrapper.

This module provides:
1. A cached factory for Gemini chat models (LangChain ChatGoogleGenerativeAI)
2. ChatService, a chat session that keeps turn history and streams replies

Each bot owns its own ChatService, so personas never share history.
"""

import asyncio
from functools import lru_cache
from typing import Callable, List, Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from loguru import logger

from pokechat.config.settings import get_settings
from pokechat.errors import ChatError, RequestTimeoutError


TokenCallback = Callable[[str], None]


@lru_cache(maxsize=8)
def get_chat_model(
    max_output_tokens: int,
    temperature: float = 1.0,
    top_k: int = 40,
    top_p: float = 0.9,
) -> ChatGoogleGenerativeAI:
    """
    Get a Gemini chat model (cached per generation config).

    Args:
        max_output_tokens: Upper bound on reply length
        temperature: Sampling temperature
        top_k: Top-k sampling
        top_p: Nucleus sampling

    Returns:
        ChatGoogleGenerativeAI: Configured Gemini chat model

    Raises:
        MissingCredentialError: If GOOGLE_API_KEY is not configured

    Example:
        >>> model = get_chat_model(max_output_tokens=300)
        >>> chat = ChatService(model, system_instruction="You are Professor Binary.")
    """
    settings = get_settings()

    return ChatGoogleGenerativeAI(
        model=settings.gemini_model,
        google_api_key=settings.require_api_key(),
        temperature=temperature,
        top_k=top_k,
        top_p=top_p,
        max_output_tokens=max_output_tokens,
    )


def _chunk_text(chunk: BaseMessage) -> str:
    """Extract plain text from a streamed message chunk."""
    content = chunk.content
    if isinstance(content, str):
        return content
    # Gemini may return a list of content parts
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type", "text") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class ChatService:
    """
    A chat session with a model.

    Holds the system instruction and the accumulated turn history, and
    sends one turn at a time. A turn is only added to the history once the
    model has answered it completely.
    """

    def __init__(
        self,
        model: BaseChatModel,
        system_instruction: str = "",
        timeout: Optional[float] = None,
    ):
        """
        Initialize the chat session.

        Args:
            model: Any LangChain chat model (Gemini in production)
            system_instruction: Persona and guardrails for the model
            timeout: Seconds allowed per turn (None waits indefinitely)
        """
        self.model = model
        self.system_instruction = system_instruction.strip()
        self.timeout = timeout
        self.history: List[BaseMessage] = []

    def reset(self):
        """Forget all previous turns."""
        self.history.clear()

    def _messages_for(self, prompt: str) -> List[BaseMessage]:
        messages: List[BaseMessage] = []
        if self.system_instruction:
            messages.append(SystemMessage(content=self.system_instruction))
        messages.extend(self.history)
        messages.append(HumanMessage(content=prompt))
        return messages

    async def _stream(self, messages: List[BaseMessage], on_token: Optional[TokenCallback]) -> str:
        fragments = []
        async for chunk in self.model.astream(messages):
            text = _chunk_text(chunk)
            if not text:
                continue
            fragments.append(text)
            if on_token:
                on_token(text)
        return "".join(fragments)

    async def send(self, prompt: str, on_token: Optional[TokenCallback] = None) -> str:
        """
        Send a prompt and return the model's complete reply.

        The reply is always streamed from the model. When `on_token` is
        given it receives every fragment in order; the returned string is
        their concatenation.

        Args:
            prompt: This turn's user prompt
            on_token: Optional callback for incremental output

        Returns:
            str: The full reply text

        Raises:
            RequestTimeoutError: If the turn exceeds the timeout
            ChatError: If the model call fails
        """
        messages = self._messages_for(prompt)

        try:
            reply = await asyncio.wait_for(self._stream(messages, on_token), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise RequestTimeoutError(f"Chat model did not answer within {self.timeout}s") from e
        except Exception as e:
            logger.error(f"Chat call failed: {e}")
            raise ChatError(f"Chat model call failed: {e}") from e

        self.history.append(HumanMessage(content=prompt))
        self.history.append(AIMessage(content=reply))
        return reply
