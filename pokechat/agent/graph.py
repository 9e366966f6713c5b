"""
LangGraph Workflow Definition.

This module builds the state machine a bot runs for every user turn.

Workflow (knowledge-base bot):
START → RETRIEVE → (grounded?) → GROUND → COMPOSE → RESPOND → END
                              ↘ COMPOSE ↗

Workflow (general-knowledge bot):
START → COMPOSE → RESPOND → END
"""

from typing import Optional

from langgraph.graph import StateGraph, END

from pokechat.agent.state import AnswerState
from pokechat.agent.nodes import (
    Retriever,
    ground_node,
    make_compose_node,
    make_respond_node,
    make_retrieve_node,
)
from pokechat.llm.gemini_client import ChatService


def should_ground(state: AnswerState) -> str:
    """
    Decision function: Should the answer be grounded in the knowledge base?

    Args:
        state: Current answer state

    Returns:
        str: "ground" if the top hit met the threshold, "compose" otherwise
    """
    retrieval = state.get("retrieval")

    if retrieval is not None and retrieval.grounded:
        return "ground"

    return "compose"


def create_answer_graph(chat: ChatService, template: str, retriever: Optional[Retriever] = None):
    """
    Create the answer workflow for one bot.

    Args:
        chat: The bot's chat session
        template: Prompt template with {question} and {context} placeholders
        retriever: Optional knowledge-base lookup; enables RETRIEVE/GROUND

    Returns:
        CompiledGraph: Ready to run with `await graph.ainvoke({"question": ...})`
    """
    graph = StateGraph(AnswerState)

    graph.add_node("compose", make_compose_node(template))
    graph.add_node("respond", make_respond_node(chat))

    if retriever is not None:
        graph.add_node("retrieve", make_retrieve_node(retriever))
        graph.add_node("ground", ground_node)
        graph.set_entry_point("retrieve")

        # Skip grounding when no hit clears the threshold
        graph.add_conditional_edges(
            "retrieve",
            should_ground,
            {
                "ground": "ground",
                "compose": "compose"
            }
        )
        graph.add_edge("ground", "compose")
    else:
        graph.set_entry_point("compose")

    graph.add_edge("compose", "respond")
    graph.add_edge("respond", END)

    return graph.compile()
