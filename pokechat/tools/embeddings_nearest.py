"""
Nearest knowledge-base entry for a query.

Usage:
    python -m pokechat.tools.embeddings_nearest "which mega never misses?"

The query is embedded, compared against every entry with cosine similarity
    similarity = (A · B) / (||A|| * ||B||)
and the highest-scoring entry is printed.
"""

import argparse
import asyncio
import sys
from typing import Optional

from rich.console import Console

from pokechat.config.settings import get_settings
from pokechat.errors import PokechatError
from pokechat.llm.embeddings import make_embedder
from pokechat.memory.knowledge_base import load_megas
from pokechat.memory.vector_store import Embedder, ScoredEntry, build_index
from pokechat.utils.logger import setup_logger


EXPLANATION = """How this was calculated:
- The query was converted into an embedding (a vector of numbers).
- Each KB entry also has an embedding, computed when the index was built.
- The query embedding is compared to each entry with cosine similarity:
    similarity = (A · B) / (||A|| * ||B||)
- The entry with the highest similarity is returned as the nearest one.
"""


async def find_nearest(query: str, embed: Embedder, kb_path=None) -> Optional[ScoredEntry]:
    """Build the KB index and return the single closest entry (None if the KB is empty)."""
    index = await build_index(load_megas(kb_path), embed)
    hits = index.search(await embed(query), 1)
    return hits[0] if hits else None


def print_hit(console: Console, hit: Optional[ScoredEntry]) -> None:
    """Print the closest entry, its text and how the score was computed."""
    if hit is None:
        console.print("No match found.")
        return

    console.print(f"\n[bold]Closest:[/bold] {hit.id} ({hit.label})  score={hit.score:.4f}\n")
    console.print(hit.text + "\n", markup=False)
    console.print(EXPLANATION, style="dim", markup=False, highlight=False)


async def run(query: str, console: Console) -> None:
    settings = get_settings()
    embed = make_embedder(
        settings.google_api_key,
        model=settings.embedding_model,
        timeout=settings.request_timeout,
    )
    print_hit(console, await find_nearest(query, embed, settings.kb_path))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Find the KB entry closest to a query.")
    parser.add_argument("query", nargs="+", help="Free-text query")
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logger(settings.log_level, settings.log_dir)
    console = Console()

    query = " ".join(args.query).strip()
    if not query:
        parser.error("query must not be empty")

    try:
        asyncio.run(run(query, console))
    except PokechatError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
