"""
Tests for the retrieval policy (threshold-based grounding).
"""

import asyncio

import pytest

from pokechat.errors import EmbeddingError
from pokechat.memory.retrieval import (
    RetrievalResult,
    format_context,
    retrieve,
    select_context,
)
from pokechat.memory.vector_store import ScoredEntry, VectorIndex, build_index


def hit(entry_id, score):
    return ScoredEntry(id=entry_id, label=entry_id.title(), text=f"about {entry_id}", vector=(1.0,), score=score)


class TestSelectContext:
    """Test the threshold decision."""

    def test_below_threshold_injects_nothing(self):
        """0.59 against 0.60 falls back to general knowledge."""
        assert select_context([hit("a", 0.59)], 0.60) is None

    def test_threshold_is_inclusive(self):
        """A score exactly at the threshold grounds the answer."""
        top = hit("a", 0.60)
        assert select_context([top], 0.60) is top

    def test_only_top_hit_is_considered(self):
        """The second hit never becomes context, even above threshold."""
        hits = [hit("a", 0.9), hit("b", 0.85)]
        assert select_context(hits, 0.60).id == "a"

    def test_no_hits(self):
        assert select_context([], 0.60) is None


class TestRetrievalResult:
    """Test the retrieval result helpers."""

    def test_grounded_result(self):
        result = RetrievalResult(hits=[hit("a", 0.75), hit("b", 0.2)], threshold=0.6)

        assert result.grounded is True
        assert result.top.id == "a"
        assert result.context_entry.id == "a"

    def test_ungrounded_result_keeps_hits(self):
        """Hits below threshold stay available for the debug overlay."""
        result = RetrievalResult(hits=[hit("a", 0.4), hit("b", 0.3)], threshold=0.6)

        assert result.grounded is False
        assert result.context_entry is None
        assert [h.id for h in result.hits] == ["a", "b"]

    def test_empty_result(self):
        result = RetrievalResult()

        assert result.top is None
        assert result.grounded is False


class TestFormatContext:
    """Test the KB block injected into prompts."""

    def test_format(self):
        block = format_context(hit("mega-dragonite", 0.81234))

        assert block == (
            "KB Entry (Mega-Dragonite • mega-dragonite • score=0.812):\n"
            "about mega-dragonite\n---\n"
        )


class TestRetrieve:
    """Test embedding + search + decision end to end."""

    @pytest.fixture
    def index(self, two_documents, two_document_embedder):
        return asyncio.run(build_index(two_documents, two_document_embedder))

    def test_matching_query_is_grounded(self, index, two_document_embedder):
        """A query that embeds onto a document grounds on it."""
        result = asyncio.run(retrieve("Electric mouse", two_document_embedder, index, k=2, threshold=0.6))

        assert result.grounded is True
        assert result.top.id == "a"
        assert result.top.score == pytest.approx(1.0)
        assert len(result.hits) == 2

    def test_fetches_k_hits(self, index, two_document_embedder):
        result = asyncio.run(retrieve("Electric mouse", two_document_embedder, index, k=1))
        assert len(result.hits) == 1

    def test_weak_match_is_not_grounded(self, index, two_document_embedder):
        """With a high threshold, a 0.8 top score is not enough."""
        result = asyncio.run(retrieve("something else", two_document_embedder, index, k=2, threshold=0.9))

        assert result.top.id == "b"
        assert result.grounded is False

    def test_embedding_failure_propagates(self, index):
        """A failed query embedding aborts retrieval instead of returning 'no context'."""
        async def broken_embed(text):
            raise EmbeddingError("network down")

        with pytest.raises(EmbeddingError, match="network down"):
            asyncio.run(retrieve("anything", broken_embed, index))

    def test_empty_index(self, two_document_embedder):
        result = asyncio.run(retrieve("Electric mouse", two_document_embedder, VectorIndex()))

        assert result.hits == []
        assert result.grounded is False
