"""
In-Memory Vector Store for the Knowledge Base.

Every knowledge-base document is embedded once at startup and kept in an
ordered list together with its vector. A query is answered by scoring every
entry against the query vector and returning the best k.

Why a plain list:
-----------------
The knowledge base holds a handful of documents and is never updated after
startup, so a linear scan is exact and fast enough. There is no persistence
and no approximate index.

Usage:
    embed = make_embedder(api_key)
    index = await build_index(load_megas(), embed)
    hits = index.search(await embed("Which mega is fastest?"), k=2)
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, List, Sequence, Tuple

from loguru import logger

from pokechat.errors import DimensionMismatchError
from pokechat.memory.knowledge_base import Document
from pokechat.memory.similarity import cosine_similarity


# An embedder turns text into a vector. It is async and may raise.
Embedder = Callable[[str], Awaitable[List[float]]]


@dataclass(frozen=True)
class IndexEntry:
    """A document together with its embedding."""

    id: str
    label: str
    text: str
    vector: Tuple[float, ...]

    @property
    def dimensions(self) -> int:
        return len(self.vector)


@dataclass(frozen=True)
class ScoredEntry(IndexEntry):
    """An index entry ranked against one query."""

    score: float


class VectorIndex:
    """
    Read-only, ordered collection of embedded documents.

    Invariant: all entries share one dimensionality. Query vectors must
    match it, otherwise search raises DimensionMismatchError.
    """

    def __init__(self, entries: Iterable[IndexEntry] = ()):
        """
        Initialize the index.

        Args:
            entries: Embedded documents, in the order they should rank on ties

        Raises:
            DimensionMismatchError: If the entries disagree on dimensionality
        """
        self._entries: Tuple[IndexEntry, ...] = tuple(entries)

        if self._entries:
            expected = self._entries[0].dimensions
            for entry in self._entries[1:]:
                if entry.dimensions != expected:
                    raise DimensionMismatchError(expected, entry.dimensions)

    @property
    def entries(self) -> Tuple[IndexEntry, ...]:
        return self._entries

    @property
    def dimensions(self) -> int:
        """Vector length shared by all entries (0 for an empty index)."""
        return self._entries[0].dimensions if self._entries else 0

    def __len__(self) -> int:
        return len(self._entries)

    def search(self, query_vector: Sequence[float], k: int = 3) -> List[ScoredEntry]:
        """
        Return the k entries most similar to the query vector.

        Results are sorted by descending score. Equal scores keep the
        insertion order, since Python's sort is stable (also with reverse=True).

        Args:
            query_vector: Embedding of the query
            k: Maximum number of results

        Returns:
            List[ScoredEntry]: min(k, len(index)) results, best first
        """
        if k <= 0 or not self._entries:
            return []

        scored = [
            ScoredEntry(
                id=entry.id,
                label=entry.label,
                text=entry.text,
                vector=entry.vector,
                score=cosine_similarity(query_vector, entry.vector),
            )
            for entry in self._entries
        ]
        scored.sort(key=lambda hit: hit.score, reverse=True)
        return scored[:k]


async def build_index(documents: Iterable[Document], embed: Embedder) -> VectorIndex:
    """
    Embed every document and build the index.

    Documents are embedded one at a time, in order. If any call fails the
    exception propagates and no index is returned.

    Args:
        documents: Knowledge-base documents
        embed: Async function mapping text to a vector

    Returns:
        VectorIndex: Index with one entry per document
    """
    entries = []
    for document in documents:
        vector = await embed(document.text)
        entries.append(IndexEntry(
            id=document.id,
            label=document.label,
            text=document.text,
            vector=tuple(float(x) for x in vector),
        ))

    index = VectorIndex(entries)
    logger.info(f"Built vector index: {len(index)} entries, {index.dimensions} dims")
    return index
