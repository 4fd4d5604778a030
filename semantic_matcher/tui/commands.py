"""
Command processing shared by the line REPL and the Textual front end.
One input line is handled to completion before the next is read.
"""

import time
from dataclasses import dataclass
from typing import Optional

from ..core.matcher import SemanticMatcher
from ..util.logging import logger
from .formatting import format_search_results, format_stats, help_text

SEARCH_COMMANDS = ("search", "s")
HELP_COMMANDS = ("help", "h")
EXIT_COMMANDS = ("quit", "exit", "q")


@dataclass
class CommandResult:
    output: str
    exit: bool = False


class CommandProcessor:
    """Maps an input line to a matcher operation and its printable output."""

    def __init__(self, matcher: SemanticMatcher, clock=time.perf_counter):
        self.matcher = matcher
        self._clock = clock

    def perform_search(self, query: str, top_k: Optional[int] = None) -> str:
        lines = [f'\nSearching for: "{query}"']
        try:
            start = self._clock()
            response = self.matcher.search(query, top_k)
            duration_ms = int((self._clock() - start) * 1000)
        except Exception as e:
            logger.error("CLI search failed", {"query": query, "error": str(e)})
            lines.append(f"\nSearch failed: {e}\n")
            return "\n".join(lines)

        lines.append(format_search_results(response))
        lines.append(f"Search completed in {duration_ms}ms\n")
        return "\n".join(lines)

    def display_stats(self) -> str:
        try:
            return format_stats(self.matcher.get_stats())
        except Exception as e:
            return f"\nFailed to get stats: {e}\n"

    def reset_collection(self) -> str:
        try:
            self.matcher.reset()
        except Exception as e:
            logger.error("CLI reset failed", {"error": str(e)})
            return f"\nResetting collection...\n\nFailed to reset collection: {e}\n"
        return "\nResetting collection...\nCollection reset successfully.\n"

    def handle(self, line: str) -> CommandResult:
        """Handle one line of user input."""
        trimmed = line.strip()
        if not trimmed:
            return CommandResult("")

        command, _, rest = trimmed.partition(" ")
        command = command.lower()
        args = rest.strip()

        if command in HELP_COMMANDS:
            return CommandResult(help_text())

        if command in SEARCH_COMMANDS:
            if not args:
                return CommandResult("\nPlease provide a search query. Example: search React developer\n")
            return CommandResult(self.perform_search(args))

        if command == "stats":
            return CommandResult(self.display_stats())

        if command == "reset":
            return CommandResult(self.reset_collection())

        if command in EXIT_COMMANDS:
            return CommandResult("\nShutting down...\nGoodbye!", exit=True)

        # Treat unknown commands as search queries
        return CommandResult(self.perform_search(trimmed))
