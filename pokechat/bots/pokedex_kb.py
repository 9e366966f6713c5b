"""
pokedex-kb

Answers general Pokémon questions, but when the question is about one of
our custom megas (Victreebel, Hawlucha, Dragonite) it retrieves the entry
from the knowledge base and grounds the answer in that text.
"""

from typing import Optional

from langchain_core.language_models import BaseChatModel
from loguru import logger

from pokechat.agent.graph import create_answer_graph
from pokechat.bots.base import Bot
from pokechat.config.settings import Settings
from pokechat.llm.embeddings import make_embedder
from pokechat.llm.gemini_client import ChatService, TokenCallback, get_chat_model
from pokechat.memory.knowledge_base import load_megas
from pokechat.memory.retrieval import RetrievalResult, retrieve
from pokechat.memory.vector_store import Embedder, VectorIndex, build_index


SYSTEM_INSTRUCTION = """
You are Professor Binary. You ONLY answer questions about Pokémon.
If a KB Entry is provided for a Mega form, use ONLY that info for that answer.
Be concise and accurate. Avoid spoilers unless asked.
"""

PROMPT_TEMPLATE = """
{context}User question: {question}

RULES (MUST FOLLOW):
1) MAX THREE SENTENCES total.
2) If a KB Entry is shown above, ground the answer ONLY in that KB.
3) If the KB doesn't cover it, say you're unsure in one sentence.
4) Pokémon-only; otherwise say: "I can only chat about Pokémon."
"""

MAX_OUTPUT_TOKENS = 300


class PokedexKbBot(Bot):
    id = "pokedex-kb"
    name = "Professor Binary Lite (Knowledge-Base)"
    description = "General Pokémon Q&A; uses KB for Mega Victreebel, Mega Hawlucha, Mega Dragonite."

    def __init__(self):
        self.chat: Optional[ChatService] = None
        self.embed: Optional[Embedder] = None
        self.index: Optional[VectorIndex] = None
        self.sim_threshold: float = 0.60
        self.top_k: int = 2
        self.debug: bool = False
        self.last_retrieval: Optional[RetrievalResult] = None
        self._graph = None

    async def init(
        self,
        settings: Settings,
        chat_model: Optional[BaseChatModel] = None,
        embed: Optional[Embedder] = None,
    ) -> None:
        """
        Load the knowledge base, build its index and create the chat session.

        Args:
            settings: Application settings
            chat_model: Model override (tests); defaults to Gemini
            embed: Embedder override (tests); defaults to Gemini embeddings

        Raises:
            MissingCredentialError: If no API key is configured
            EmbeddingError: If any knowledge-base entry fails to embed
        """
        # 1) Load KB + build vector index
        documents = load_megas(settings.kb_path)
        self.embed = embed or make_embedder(
            settings.google_api_key,
            model=settings.embedding_model,
            timeout=settings.request_timeout,
        )
        self.index = await build_index(documents, self.embed)

        # 2) Create a dedicated ChatService owned by this bot
        model = chat_model or get_chat_model(max_output_tokens=MAX_OUTPUT_TOKENS)
        self.chat = ChatService(
            model,
            system_instruction=SYSTEM_INSTRUCTION,
            timeout=settings.request_timeout,
        )

        self.sim_threshold = settings.similarity_threshold
        self.top_k = settings.retrieval_top_k
        self.debug = settings.kb_debug
        self.last_retrieval = None

        self._graph = create_answer_graph(self.chat, PROMPT_TEMPLATE, retriever=self._retrieve)

    async def _retrieve(self, question: str) -> RetrievalResult:
        result = await retrieve(
            question,
            self.embed,
            self.index,
            k=self.top_k,
            threshold=self.sim_threshold,
        )
        self.last_retrieval = result
        if self.debug and result.top is not None:
            logger.info(
                f"KB lookup: top={result.top.id} score={result.top.score:.3f} "
                f"grounded={result.grounded}"
            )
        return result

    async def answer(self, text: str, on_token: Optional[TokenCallback] = None) -> str:
        if self._graph is None:
            raise RuntimeError(f"Bot {self.id!r} used before init()")

        self.last_retrieval = None
        final_state = await self._graph.ainvoke(
            {"question": text},
            config={"configurable": {"on_token": on_token}},
        )
        return final_state["answer"]
