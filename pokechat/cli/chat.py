"""
Terminal-based Chat Interface.

This module provides the command-line interface for talking to the bots,
using Rich for formatting and prompt_toolkit for input.

Features:
- Streamed answers, printed as tokens arrive
- Slash commands: /help, /bots, /use <id>, /quit
- Command history (up/down arrow keys)
- Errors are shown per turn; the session keeps going
"""

from pathlib import Path
from typing import Optional

from langchain_core.messages import AIMessage, HumanMessage
from loguru import logger
from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from pokechat.bots.base import Bot
from pokechat.bots.registry import BotRegistry
from pokechat.config.settings import Settings


HELP_TEXT = """Commands:
  /help             Show this help
  /bots             List available bots
  /use <id>         Switch to a different bot
  /quit             Exit"""

QUIT_WORDS = {"/quit", "quit", "exit"}


class ChatCLI:
    """
    Terminal chat loop over a registry of bots.

    One bot is active at a time. Switching bots re-initialises the new bot
    (its chat session and, for the KB bot, its index).
    """

    def __init__(
        self,
        registry: BotRegistry,
        settings: Settings,
        history_manager=None,
        console: Optional[Console] = None,
        session: Optional[PromptSession] = None,
    ):
        """
        Initialize the chat CLI.

        Args:
            registry: Available bots
            settings: Application settings, passed to Bot.init()
            history_manager: Optional ChatHistoryManager for transcripts
            console: Rich console (defaults to stdout)
            session: prompt_toolkit session (created on first run)
        """
        self.console = console or Console()
        self.registry = registry
        self.settings = settings
        self.history_manager = history_manager
        self.session = session
        self.current_bot: Optional[Bot] = None

    async def attach_bot(self, bot: Bot):
        """
        Initialise a bot and make it the active one.

        The previous bot stays active if init() fails.
        """
        await bot.init(self.settings)
        self.current_bot = bot
        logger.info(f"Attached bot {bot.id}")

    def print_welcome(self):
        """Display welcome message."""
        welcome_text = Text()
        welcome_text.append("Professor Binary\n", style="bold blue")
        welcome_text.append(
            f"Bot: {self.current_bot.name}  |  Model: {self.settings.gemini_model}\n\n",
            style="dim"
        )
        welcome_text.append("Type your question or /help\n")

        self.console.print(Panel(welcome_text, border_style="blue"))

    def print_help(self):
        self.console.print(HELP_TEXT, markup=False)

    def print_bots(self):
        """List registered bots, marking the active one."""
        self.console.print("\n[bold]Available bots:[/bold]")
        for bot in self.registry.list():
            marker = "*" if bot is self.current_bot else "-"
            self.console.print(
                f"  {marker} {bot.id:<18} {bot.name} — {bot.description}",
                markup=False,
                highlight=False
            )
        self.console.print("")

    def print_error(self, error: str):
        """
        Display error message.

        Args:
            error: Error message to display
        """
        self.console.print(f"\n[bold red]Error:[/bold red] {escape(error)}")

    def print_retrieval(self):
        """Show the last KB lookup (KB_DEBUG overlay)."""
        retrieval = getattr(self.current_bot, "last_retrieval", None)
        if retrieval is None:
            return

        verdict = "grounded" if retrieval.grounded else "general knowledge"
        self.console.print(
            f"[dim]KB lookup ({verdict}, threshold {retrieval.threshold:.2f}):[/dim]"
        )
        for hit in retrieval.hits:
            self.console.print(f"[dim]  {hit.id:<20} score={hit.score:.3f}[/dim]")

    async def handle_command(self, line: str) -> bool:
        """
        Execute a slash command.

        Args:
            line: The raw input line

        Returns:
            bool: False when the session should end, True otherwise
        """
        cmd, _, rest = line.strip().partition(" ")
        cmd = cmd.lower()

        if cmd in QUIT_WORDS:
            return False

        if cmd == "/help":
            self.print_help()
        elif cmd == "/bots":
            self.print_bots()
        elif cmd == "/use":
            await self.use_bot(rest.strip())
        else:
            self.console.print("Unknown command. Try /help")

        return True

    async def use_bot(self, bot_id: str):
        """Switch to another bot by id."""
        if not bot_id:
            self.console.print("Usage: /use <id>")
            return

        bot = self.registry.get(bot_id)
        if bot is None:
            self.console.print(f"No bot with id \"{bot_id}\". See /bots.", markup=False)
            return

        try:
            await self.attach_bot(bot)
        except Exception as e:
            logger.error(f"Failed to initialise bot {bot_id}: {e}")
            self.print_error(f"Could not switch to {bot_id}: {e}")
            return

        self.console.print(f"[bold green]Switched to:[/bold green] {escape(bot.name)}")

    async def handle_question(self, question: str) -> Optional[str]:
        """
        Send one question to the active bot and stream the answer.

        Returns:
            The answer, or None if the turn failed or was short-circuited
        """
        bot = self.current_bot

        # Optional fast-fail
        short = bot.precheck(question)
        if short:
            self.console.print(short, markup=False)
            return None

        if self.history_manager:
            self.history_manager.add_message(HumanMessage(content=question), bot_id=bot.id)

        streamed = False

        def on_token(token: str):
            nonlocal streamed
            if not streamed:
                self.console.print("")
                streamed = True
            self.console.print(token, end="", markup=False, highlight=False, soft_wrap=True)

        try:
            answer = await bot.answer(question, on_token=on_token)
        except Exception as e:
            # Display errors but don't crash
            logger.error(f"Turn failed ({bot.id}): {e}")
            self.print_error(str(e))
            return None

        if streamed:
            self.console.print("\n")
        else:
            self.console.print(f"\n{answer}\n", markup=False, highlight=False)

        if self.settings.kb_debug:
            self.print_retrieval()

        if self.history_manager:
            self.history_manager.add_message(AIMessage(content=answer), bot_id=bot.id)
            self.history_manager.flush()

        return answer

    def _create_session(self) -> PromptSession:
        history_file = Path(self.settings.data_dir) / ".chat_history"
        history_file.parent.mkdir(parents=True, exist_ok=True)
        return PromptSession(history=FileHistory(str(history_file)))

    async def run(self, bot_id: Optional[str] = None):
        """
        Main chat loop.

        Args:
            bot_id: Bot to start with (defaults to settings.default_bot)

        Raises:
            UnknownBotError: If the starting bot id is not registered
            MissingCredentialError: If the starting bot cannot authenticate
        """
        await self.attach_bot(self.registry.require(bot_id or self.settings.default_bot))
        self.print_welcome()

        if self.session is None:
            self.session = self._create_session()

        while True:
            try:
                user_input = await self.session.prompt_async("\n> ")
            except (KeyboardInterrupt, EOFError):
                self.console.print("\n[bold yellow]Interrupted[/bold yellow]")
                break

            line = user_input.strip()

            # Skip empty inputs
            if not line:
                continue

            if line.startswith("/") or line.lower() in QUIT_WORDS:
                if not await self.handle_command(line):
                    break
                continue

            await self.handle_question(line)

        self.console.print("[bold blue]Goodbye![/bold blue]\n")
