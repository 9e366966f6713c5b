"""
Tests for the embedding inspection tools.
"""

import asyncio
import io

from rich.console import Console

from pokechat.memory.vector_store import IndexEntry, VectorIndex
from pokechat.tools.embeddings_nearest import find_nearest, print_hit
from pokechat.tools.embeddings_table import render_table


class TestEmbeddingsTable:
    """Test the embedding preview table."""

    def test_table_shows_first_dimensions(self):
        index = VectorIndex([
            IndexEntry(id="mega-dragonite", label="Mega Dragonite", text="...", vector=tuple(float(i) for i in range(10))),
        ])
        console = Console(file=io.StringIO(), width=250, color_system=None)

        table = render_table(index, dims=8)
        console.print(table)

        text = console.file.getvalue()
        assert len(table.columns) == 3 + 8
        assert "mega-dragonite" in text
        assert "7.0000" in text
        assert "8.0000" not in text

    def test_short_vectors_are_padded(self):
        index = VectorIndex([IndexEntry(id="x", label="X", text="x", vector=(0.5, 0.25))])

        table = render_table(index, dims=4)

        assert table.row_count == 1


class TestEmbeddingsNearest:
    """Test nearest-entry lookup against the bundled knowledge base."""

    def test_finds_matching_mega(self, mega_embedder):
        hit = asyncio.run(find_nearest("Does Mega Hawlucha ever miss?", mega_embedder))

        assert hit.id == "mega-hawlucha"
        assert hit.score > 0.99

    def test_empty_kb(self, tmp_path, mega_embedder):
        kb = tmp_path / "kb.json"
        kb.write_text("[]", encoding="utf-8")

        assert asyncio.run(find_nearest("anything", mega_embedder, kb)) is None

    def test_output_explains_the_score(self, mega_embedder):
        """The closest entry is followed by how its cosine score was computed."""
        console = Console(file=io.StringIO(), width=200, color_system=None)
        hit = asyncio.run(find_nearest("Does Mega Hawlucha ever miss?", mega_embedder))

        print_hit(console, hit)

        text = console.file.getvalue()
        assert "Closest: mega-hawlucha (Mega Hawlucha)" in text
        assert "How this was calculated:" in text
        assert "similarity = (A · B) / (||A|| * ||B||)" in text
        assert text.index("Closest:") < text.index("How this was calculated:")

    def test_no_match_skips_explanation(self):
        console = Console(file=io.StringIO(), width=200, color_system=None)

        print_hit(console, None)

        text = console.file.getvalue()
        assert "No match found." in text
        assert "How this was calculated" not in text
