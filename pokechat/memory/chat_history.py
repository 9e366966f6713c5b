"""
Chat Transcript Storage.

This module saves terminal conversations to disk. Messages are stored in
JSONL format (JSON Lines) so a session file can be appended to turn by turn.

Key Features:
- Session-based storage (each terminal run is a separate file)
- Records which bot produced each answer
- Write buffering (flushed after every completed turn)

Transcripts are a record for the user only. The model's working history
lives in each bot's ChatService and is never reloaded from here.
"""

import json
from pathlib import Path
from datetime import datetime
from typing import List, Optional
from langchain_core.messages import BaseMessage


class ChatHistoryManager:
    """
    Manages chat transcripts across terminal sessions.

    Each run creates a new JSONL file in the data directory. Messages are
    buffered in memory and appended on flush().
    """

    def __init__(self, data_dir: Path):
        """
        Initialize the chat history manager.

        Args:
            data_dir: Base directory for data storage
        """
        self.data_dir = Path(data_dir) / "chat_history"
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.current_session_file = None
        self.message_buffer = []

    def new_session(self) -> str:
        """
        Create a new chat session.

        Returns:
            str: The session ID (timestamp based)
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        session_id = f"session_{timestamp}"
        self.current_session_file = self.data_dir / f"{session_id}.jsonl"

        # Create empty file
        self.current_session_file.touch()

        return session_id

    def add_message(self, message: BaseMessage, bot_id: Optional[str] = None):
        """
        Add a message to the current session.

        Args:
            message: A LangChain message (HumanMessage or AIMessage)
            bot_id: The bot active for this turn
        """
        message_dict = {
            "timestamp": datetime.now().isoformat(),
            "type": message.__class__.__name__,
            "content": message.content,
        }

        if bot_id:
            message_dict["bot"] = bot_id

        self.message_buffer.append(message_dict)

    def flush(self):
        """
        Write buffered messages to disk.

        This appends all buffered messages to the current session file
        and clears the buffer.
        """
        if not self.current_session_file or not self.message_buffer:
            return

        with open(self.current_session_file, 'a', encoding='utf-8') as f:
            for message_dict in self.message_buffer:
                f.write(json.dumps(message_dict, ensure_ascii=False) + '\n')

        self.message_buffer.clear()

    def load_session(self, session_file: Path) -> List[dict]:
        """
        Load messages from a session file.

        Args:
            session_file: Path to the session JSONL file

        Returns:
            List[dict]: List of message dictionaries
        """
        messages = []

        if not session_file.exists():
            return messages

        with open(session_file, 'r', encoding='utf-8') as f:
            for line in f:
                line = line.strip()
                if line:
                    messages.append(json.loads(line))

        return messages

