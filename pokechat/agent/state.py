"""
LangGraph Answer State Definition.

This module defines the state that flows through a bot's answer workflow.
"""

from typing import Optional, TypedDict

from pokechat.memory.retrieval import RetrievalResult


class AnswerState(TypedDict, total=False):
    """
    State that flows through the answer workflow for one user turn.

    Each node reads what it needs and returns only the keys it sets.
    Keys without a reducer are replaced by the node's return value.

    Attributes:
        question: The user's raw question
        retrieval: Knowledge-base lookup result (KB bots only)
        context: KB block injected above the question ("" when ungrounded)
        prompt: The fully composed prompt sent to the model
        answer: The model's complete reply
    """

    question: str
    retrieval: Optional[RetrievalResult]
    context: str
    prompt: str
    answer: str
