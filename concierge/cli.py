"""Interactive terminal shell for the shopping concierge."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from typing import Callable

from concierge import ui
from concierge.agent.factory import build_agent, build_runner
from concierge.agent.runner import AgentRunner
from concierge.core.config import Settings, get_settings
from concierge.core.logging import configure_logging

logger = logging.getLogger("concierge.cli")

EXIT_COMMANDS = {"exit", "quit", "bye", "q", ":q", ":wq"}
CLEAR_COMMANDS = {"clear", "cls"}
PROMPT = "\n❯ "


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Chat with the shopping concierge in your terminal")
    parser.add_argument(
        "--planner",
        choices=["auto", "openrouter", "rule"],
        default=None,
        help="Planner backend (defaults to PLANNER_BACKEND or auto)",
    )
    parser.add_argument("--model", default=None, help="OpenRouter model identifier")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def is_exit_command(text: str) -> bool:
    return text.strip().lower() in EXIT_COMMANDS


def clear_screen() -> None:
    os.system("cls" if os.name == "nt" else "clear")


class ConciergeShell:
    """Read requests from the terminal and print the agent's replies."""

    def __init__(
        self,
        runner: AgentRunner,
        *,
        app_name: str = "Shopping Concierge",
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        self.runner = runner
        self.app_name = app_name
        self._read = read
        self._write = write

    def run(self) -> None:
        self._write(ui.welcome_banner(self.app_name))
        with asyncio.Runner() as loop:
            while True:
                try:
                    text = self._read(PROMPT).strip()
                except (EOFError, KeyboardInterrupt):
                    break

                if not text:
                    continue
                if is_exit_command(text):
                    break
                if text.lower() in CLEAR_COMMANDS:
                    clear_screen()
                    self._write(ui.welcome_banner(self.app_name))
                    continue

                self._write(ui.loading_message("Thinking"))
                self._write(self._process(loop, text))
        self._write(ui.farewell())

    def _process(self, loop: asyncio.Runner, text: str) -> str:
        """Run one request; Ctrl+C stops later retries but never the turn in flight."""

        task = loop.get_loop().create_task(self.runner.process(text))

        async def wait() -> str:
            return await asyncio.shield(task)

        while True:
            try:
                return loop.run(wait())
            except KeyboardInterrupt:
                self.runner.cancel()
                self._write(ui.message_box("Cancelling current operation...", "warning"))


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    settings: Settings = get_settings()
    overrides: dict[str, object] = {}
    if args.planner:
        overrides["planner_backend"] = args.planner
    if args.model:
        overrides["openrouter_model"] = args.model
    if args.debug:
        overrides["debug"] = True
    elif not settings.debug:
        # Quiet unless debugging.
        overrides["log_level"] = "WARNING"
    if overrides:
        settings = settings.model_copy(update=overrides)

    configure_logging(settings)
    agent = build_agent(settings)
    ConciergeShell(build_runner(settings, agent), app_name=settings.app_name).run()


if __name__ == "__main__":
    main()
