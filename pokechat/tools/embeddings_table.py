"""
Embedding preview table.

Embeds every knowledge-base entry and prints the first few components of
each vector, to show what the model's "understanding" of a text looks like.

Usage:
    python -m pokechat.tools.embeddings_table
"""

import asyncio
import sys

from rich.console import Console
from rich.table import Table

from pokechat.config.settings import get_settings
from pokechat.errors import PokechatError
from pokechat.llm.embeddings import make_embedder
from pokechat.memory.knowledge_base import load_megas
from pokechat.memory.vector_store import VectorIndex, build_index
from pokechat.utils.logger import setup_logger


PREVIEW_DIMS = 8


def render_table(index: VectorIndex, dims: int = PREVIEW_DIMS) -> Table:
    """Build a rich table with id, name, vector length and the first `dims` values."""
    table = Table(title=f"Embedding preview (first {dims} dimensions)")
    table.add_column("id", style="cyan")
    table.add_column("name")
    table.add_column("dims", justify="right")
    for i in range(dims):
        table.add_column(f"v{i}", justify="right")

    for entry in index.entries:
        values = [f"{x:.4f}" for x in entry.vector[:dims]]
        values += [""] * (dims - len(values))
        table.add_row(entry.id, entry.label, str(entry.dimensions), *values)

    return table


async def run(console: Console) -> None:
    settings = get_settings()
    embed = make_embedder(
        settings.google_api_key,
        model=settings.embedding_model,
        timeout=settings.request_timeout,
    )
    index = await build_index(load_megas(settings.kb_path), embed)

    console.print(render_table(index))
    console.print(
        "\nEach row is a Pokémon mega form. The numbers are the first values of its\n"
        "embedding vector. Entries with similar meaning have vectors that point in\n"
        "similar directions in this high-dimensional space.\n",
        style="dim",
    )


def main() -> int:
    settings = get_settings()
    setup_logger(settings.log_level, settings.log_dir)
    console = Console()

    try:
        asyncio.run(run(console))
    except PokechatError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
