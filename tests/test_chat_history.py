"""
Tests for transcript storage.
"""

import json

from langchain_core.messages import AIMessage, HumanMessage

from pokechat.memory.chat_history import ChatHistoryManager


class TestChatHistoryManager:
    """Test JSONL session transcripts."""

    def test_new_session_creates_file(self, tmp_path):
        manager = ChatHistoryManager(tmp_path)

        session_id = manager.new_session()

        assert session_id.startswith("session_")
        assert manager.current_session_file.exists()
        assert manager.current_session_file.parent == tmp_path / "chat_history"

    def test_flush_appends_jsonl(self, tmp_path):
        manager = ChatHistoryManager(tmp_path)
        manager.new_session()

        manager.add_message(HumanMessage(content="Who is Pikachu?"), bot_id="pokedex-generic")
        manager.add_message(AIMessage(content="An Electric-type Pokémon."), bot_id="pokedex-generic")
        manager.flush()

        lines = manager.current_session_file.read_text(encoding="utf-8").splitlines()
        records = [json.loads(line) for line in lines]
        assert [r["type"] for r in records] == ["HumanMessage", "AIMessage"]
        assert records[1]["content"] == "An Electric-type Pokémon."
        assert records[0]["bot"] == "pokedex-generic"
        assert manager.message_buffer == []

    def test_flush_without_session_is_noop(self, tmp_path):
        manager = ChatHistoryManager(tmp_path)
        manager.add_message(HumanMessage(content="hi"))

        manager.flush()

        assert manager.message_buffer  # kept until a session exists

    def test_load_missing_session(self, tmp_path):
        manager = ChatHistoryManager(tmp_path)
        assert manager.load_session(tmp_path / "nope.jsonl") == []

