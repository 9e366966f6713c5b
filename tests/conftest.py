"""
Shared fixtures: settings without .env, stub embedders and fake chat models.
"""

from typing import List

import pytest
from pydantic import Field
from langchain_core.language_models.fake_chat_models import GenericFakeChatModel

from pokechat.config.settings import Settings
from pokechat.memory.knowledge_base import Document


class RecordingChatModel(GenericFakeChatModel):
    """GenericFakeChatModel that remembers the messages of every call."""

    received: list = Field(default_factory=list)

    def _stream(self, messages, stop=None, run_manager=None, **kwargs):
        self.received.append(list(messages))
        yield from super()._stream(messages, stop=stop, run_manager=run_manager, **kwargs)


def make_chat_model(*replies: str) -> RecordingChatModel:
    return RecordingChatModel(messages=iter(replies))


def keyword_embedder(mapping: dict, default: List[float]):
    """
    Build an async embedder returning the vector of the first keyword found
    in the text, or `default`. Records every text it was asked to embed.
    """
    calls = []

    async def embed(text: str) -> List[float]:
        calls.append(text)
        for keyword, vector in mapping.items():
            if keyword in text:
                return list(vector)
        return list(default)

    embed.calls = calls
    return embed


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        google_api_key="test-key",
        request_timeout=5.0,
        similarity_threshold=0.60,
        retrieval_top_k=2,
        kb_debug=False,
        data_dir=tmp_path / "data",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def two_documents():
    return [
        Document(id="a", label="Pikachu", text="Electric mouse"),
        Document(id="b", label="Onix", text="Rock snake"),
    ]


@pytest.fixture
def two_document_embedder():
    return keyword_embedder(
        {"Electric mouse": [1.0, 0.0], "Rock snake": [0.0, 1.0]},
        default=[0.6, 0.8],
    )


@pytest.fixture
def mega_embedder():
    """Maps each bundled mega to its own axis; anything else sits between them."""
    return keyword_embedder(
        {
            "Victreebel": [1.0, 0.0, 0.0],
            "Hawlucha": [0.0, 1.0, 0.0],
            "Dragonite": [0.0, 0.0, 1.0],
        },
        default=[1.0, 1.0, 1.0],
    )
