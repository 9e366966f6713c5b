"""
LangGraph Node Functions.

Nodes are the building blocks of a bot's answer workflow. Each node takes
the current state and returns updates to it:
- retrieve: look the question up in the knowledge base
- ground: turn the best hit into a KB context block
- compose: fill the persona's prompt template
- respond: send the prompt to the chat model, streaming tokens

Nodes that need collaborators (chat session, retriever, template) are
built by small factory functions so a graph can be compiled per bot.
"""

from typing import Awaitable, Callable

from langchain_core.runnables import RunnableConfig

from pokechat.agent.state import AnswerState
from pokechat.llm.gemini_client import ChatService
from pokechat.memory.retrieval import RetrievalResult, format_context


Retriever = Callable[[str], Awaitable[RetrievalResult]]


def make_retrieve_node(retriever: Retriever):
    """
    Build the RETRIEVE node.

    Failures (missing key, network, timeout) propagate out of the graph,
    aborting the turn instead of silently answering without context.
    """

    async def retrieve_node(state: AnswerState) -> dict:
        result = await retriever(state["question"])
        return {"retrieval": result}

    return retrieve_node


def ground_node(state: AnswerState) -> dict:
    """
    GROUND Node: Render the single best hit as prompt context.

    Only reached when the retrieval cleared the threshold.
    """
    entry = state["retrieval"].context_entry
    return {"context": format_context(entry)}


def make_compose_node(template: str):
    """
    Build the COMPOSE node for a prompt template.

    The template may use {question} and {context}.
    """

    def compose_node(state: AnswerState) -> dict:
        prompt = template.format(
            question=state["question"],
            context=state.get("context", ""),
        )
        return {"prompt": prompt.strip()}

    return compose_node


def make_respond_node(chat: ChatService):
    """
    Build the RESPOND node.

    The streaming callback travels in the run config
    (config["configurable"]["on_token"]) rather than in the state.
    """

    async def respond_node(state: AnswerState, config: RunnableConfig) -> dict:
        configurable = (config or {}).get("configurable", {})
        answer = await chat.send(state["prompt"], on_token=configurable.get("on_token"))
        return {"answer": answer}

    return respond_node
