"""
pokedex-generic

A single-purpose Pokémon chatbot with no retrieval.
- Owns its own ChatService, so personas never share history.
- Uses ONLY the model's general knowledge (no tools/browsing).
- Keeps answers short for live demos.
"""

from typing import Optional

from langchain_core.language_models import BaseChatModel

from pokechat.agent.graph import create_answer_graph
from pokechat.bots.base import Bot
from pokechat.config.settings import Settings
from pokechat.llm.gemini_client import ChatService, TokenCallback, get_chat_model


SYSTEM_INSTRUCTION = """
You are Professor Binary, a friendly but wise terminal chatbot that ONLY answers questions about Pokémon.
- Allowed topics: Pokémon games, anime, manga, mechanics, types, moves, regions, Pokédex lore, strategies, history, trivia.
- If the user asks non-Pokémon things, respond briefly: "I can only chat about Pokémon."
- Use general knowledge only. Do NOT use tools, browsing, or external APIs.
- Be concise and accurate; if uncertain, say what you're unsure about.
- Avoid spoilers unless explicitly requested.
- Keep your answers brief to maximum of three sentences.
"""

# Repeated in-turn: models follow immediate instructions more closely
PROMPT_TEMPLATE = """
User question: {question}

Answer as Professor Binary in at most two sentences.
If you are unsure, say so briefly. Pokémon-only topics.
"""

MAX_OUTPUT_TOKENS = 1000


class PokedexGenericBot(Bot):
    id = "pokedex-generic"
    name = "Professor Binary Lite (Generic)"
    description = "General Pokémon Q&A (games, anime, types, moves, regions)."

    def __init__(self):
        self.chat: Optional[ChatService] = None
        self._graph = None

    async def init(self, settings: Settings, chat_model: Optional[BaseChatModel] = None) -> None:
        """
        Create the chat session for this bot.

        Args:
            settings: Application settings
            chat_model: Model override (tests); defaults to Gemini
        """
        model = chat_model or get_chat_model(max_output_tokens=MAX_OUTPUT_TOKENS)
        self.chat = ChatService(
            model,
            system_instruction=SYSTEM_INSTRUCTION,
            timeout=settings.request_timeout,
        )
        self._graph = create_answer_graph(self.chat, PROMPT_TEMPLATE)

    async def answer(self, text: str, on_token: Optional[TokenCallback] = None) -> str:
        if self._graph is None:
            raise RuntimeError(f"Bot {self.id!r} used before init()")

        final_state = await self._graph.ainvoke(
            {"question": text},
            config={"configurable": {"on_token": on_token}},
        )
        return final_state["answer"]
