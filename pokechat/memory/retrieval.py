"""
Retrieval policy for knowledge-base grounding.

Embeds the user's question, looks it up in the vector index and decides
whether the best hit is close enough to ground the answer in. Only the top
hit is ever used as context; the remaining hits are kept for the debug
overlay.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from loguru import logger

from pokechat.memory.vector_store import Embedder, ScoredEntry, VectorIndex


DEFAULT_TOP_K = 2
DEFAULT_THRESHOLD = 0.60


@dataclass(frozen=True)
class RetrievalResult:
    """Outcome of one retrieval: the ranked hits and the grounding decision."""

    hits: List[ScoredEntry] = field(default_factory=list)
    threshold: float = DEFAULT_THRESHOLD

    @property
    def top(self) -> Optional[ScoredEntry]:
        return self.hits[0] if self.hits else None

    @property
    def grounded(self) -> bool:
        """True when the top hit meets the threshold (inclusive)."""
        return select_context(self.hits, self.threshold) is not None

    @property
    def context_entry(self) -> Optional[ScoredEntry]:
        return select_context(self.hits, self.threshold)


def select_context(hits: List[ScoredEntry], threshold: float) -> Optional[ScoredEntry]:
    """
    Pick the entry to ground on, if any.

    Args:
        hits: Search results, best first
        threshold: Minimum score for the top hit

    Returns:
        The top hit when its score >= threshold, else None
    """
    if not hits:
        return None
    top = hits[0]
    return top if top.score >= threshold else None


def format_context(entry: ScoredEntry) -> str:
    """Render a hit as the KB block placed above the user question."""
    return (
        f"KB Entry ({entry.label} • {entry.id} • score={entry.score:.3f}):\n"
        f"{entry.text}\n---\n"
    )


async def retrieve(
    query: str,
    embed: Embedder,
    index: VectorIndex,
    k: int = DEFAULT_TOP_K,
    threshold: float = DEFAULT_THRESHOLD,
) -> RetrievalResult:
    """
    Embed a query and rank the knowledge base against it.

    Embedding failures propagate to the caller. They must not be turned
    into "no context", which would hide why the answer is ungrounded.

    Args:
        query: The user's question
        embed: Async embedding function
        index: Knowledge-base index
        k: Number of hits to fetch
        threshold: Minimum top score for grounding

    Returns:
        RetrievalResult: Hits plus the grounding decision
    """
    query_vector = await embed(query)
    hits = index.search(query_vector, k)
    result = RetrievalResult(hits=hits, threshold=threshold)

    if result.top is not None:
        logger.debug(
            f"Top hit {result.top.id} score={result.top.score:.3f} "
            f"threshold={threshold:.2f} grounded={result.grounded}"
        )
    return result
