"""
Knowledge Base Loader.

The knowledge base is a small JSON file describing custom Mega Evolutions.
Each record is validated with Pydantic and flattened into one text blob,
which is what gets embedded and later injected into prompts.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pokechat.config.settings import DEFAULT_KB_PATH
from pokechat.errors import KnowledgeBaseError


@dataclass(frozen=True)
class Document:
    """A knowledge-base document: stable id, display label and full text."""

    id: str
    label: str
    text: str


class BaseStats(BaseModel):
    hp: int
    atk: int
    defense: int = Field(alias="def")
    spa: int
    spd: int
    spe: int


class MegaRecord(BaseModel):
    """One entry of megas.json, using the file's camelCase field names."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    typing: List[str]
    abilities: List[str]
    base_stats: BaseStats = Field(alias="baseStats")
    signature_moves: List[str] = Field(alias="signatureMoves")
    flavor: str
    competitive_notes: str = Field(alias="competitiveNotes")

    def to_document(self) -> Document:
        stats = self.base_stats
        text = "\n".join([
            self.name,
            f"Typing: {'/'.join(self.typing)}",
            f"Abilities: {', '.join(self.abilities)}",
            f"Base Stats: HP {stats.hp} Atk {stats.atk} Def {stats.defense} "
            f"SpA {stats.spa} SpD {stats.spd} Spe {stats.spe}",
            f"Signature Moves: {', '.join(self.signature_moves)}",
            f"Flavor: {self.flavor}",
            f"Notes: {self.competitive_notes}",
        ])
        return Document(id=self.id, label=self.name, text=text)


def load_megas(path: Optional[Path] = None) -> List[Document]:
    """
    Load the Mega Evolution knowledge base.

    Args:
        path: JSON file to read. Defaults to the bundled kb/megas.json

    Returns:
        List[Document]: One document per record, in file order

    Raises:
        KnowledgeBaseError: If the file is missing, not JSON, or a record
            is missing required fields
    """
    kb_path = Path(path) if path else DEFAULT_KB_PATH

    try:
        raw = json.loads(kb_path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise KnowledgeBaseError(f"Knowledge base not found: {kb_path}") from e
    except json.JSONDecodeError as e:
        raise KnowledgeBaseError(f"Knowledge base is not valid JSON: {kb_path} ({e})") from e

    if not isinstance(raw, list):
        raise KnowledgeBaseError(f"Knowledge base must be a JSON list: {kb_path}")

    try:
        documents = [MegaRecord.model_validate(item).to_document() for item in raw]
    except ValidationError as e:
        raise KnowledgeBaseError(f"Malformed knowledge base entry in {kb_path}: {e}") from e

    logger.debug(f"Loaded {len(documents)} knowledge-base documents from {kb_path}")
    return documents
