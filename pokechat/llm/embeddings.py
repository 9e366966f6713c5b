"""
Gemini embedding provider.

make_embedder() returns an async function that turns text into a vector
(a plain list of floats, ~768 dimensions for text-embedding-004). The
vector store only depends on that function, never on Gemini directly.
"""

import asyncio
from typing import List, Optional

from langchain_core.embeddings import Embeddings
from langchain_google_genai import GoogleGenerativeAIEmbeddings
from loguru import logger

from pokechat.errors import EmbeddingError, MissingCredentialError, RequestTimeoutError
from pokechat.memory.vector_store import Embedder


def make_embedder(
    api_key: Optional[str],
    model: str = "models/text-embedding-004",
    timeout: Optional[float] = None,
) -> Embedder:
    """
    Create an async embedding function backed by Gemini.

    Args:
        api_key: Google API key
        model: Embedding model name
        timeout: Seconds allowed per call (None waits indefinitely)

    Returns:
        Embedder: async (text) -> List[float]

    Raises:
        MissingCredentialError: If no API key is given

    Example:
        >>> embed = make_embedder(api_key)
        >>> vector = await embed("Pikachu is an Electric-type Pokémon")
    """
    if not api_key:
        raise MissingCredentialError("Missing GOOGLE_API_KEY for embeddings.")

    client = GoogleGenerativeAIEmbeddings(model=model, google_api_key=api_key)
    return embedder_from(client, timeout=timeout)


def embedder_from(client: Embeddings, timeout: Optional[float] = None) -> Embedder:
    """
    Adapt any LangChain Embeddings object to the Embedder signature.

    Provider failures are re-raised as EmbeddingError; no default vector
    is ever returned in their place.
    """

    async def embed(text: str) -> List[float]:
        try:
            vector = await asyncio.wait_for(client.aembed_query(text), timeout=timeout)
        except asyncio.TimeoutError as e:
            raise RequestTimeoutError(f"Embedding call did not finish within {timeout}s") from e
        except Exception as e:
            logger.error(f"Embedding call failed: {e}")
            raise EmbeddingError(f"Embedding call failed: {e}") from e

        if not vector:
            raise EmbeddingError("Embedding provider returned an empty vector")
        return list(vector)

    return embed
