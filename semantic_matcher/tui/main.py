"""
Interactive front ends for Semantic Matcher: a plain line REPL (default) and
a Textual TUI (--tui). Both feed the same CommandProcessor.
"""

import argparse
import sys
from typing import Callable, Optional

from textual.app import App, ComposeResult
from textual.widgets import Footer, Header, Input, Log

from ..core.config import Settings, get_settings
from ..core.matcher import SemanticMatcher
from ..util.logging import logger
from .commands import CommandProcessor

PROMPT = "semantic-matcher> "


class MatcherApp(App):
    """Textual front end: a scrolling output log above a command input."""

    CSS = """
    #output {
        height: 1fr;
        border: solid cyan;
    }

    #command {
        dock: bottom;
    }
    """

    TITLE = "Semantic Matcher"
    BINDINGS = [("ctrl+c", "quit", "Quit")]

    def __init__(self, processor: CommandProcessor):
        super().__init__()
        self.processor = processor

    def compose(self) -> ComposeResult:
        yield Header()
        yield Log(id="output")
        yield Input(id="command", placeholder='Type "help" for commands or start searching...')
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#output", Log).write_line('Ready! Type "help" for available commands or start searching.')
        self.query_one("#command", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        line = event.value
        event.input.value = ""
        output = self.query_one("#output", Log)
        output.write_line(f"{PROMPT}{line}")

        result = self.processor.handle(line)
        if result.output:
            output.write_lines(result.output.split("\n"))
        if result.exit:
            logger.info("CLI exit requested by user")
            self.exit()


def run_repl(processor: CommandProcessor, read: Optional[Callable[[str], str]] = None,
             write: Callable[[str], None] = print) -> None:
    """Read lines until EOF or an exit command; read defaults to input()."""
    read = read or input
    write('Ready! Type "help" for available commands or start searching.\n')
    while True:
        try:
            line = read(PROMPT)
        except (EOFError, KeyboardInterrupt):
            write("\n\nShutting down...\nGoodbye!")
            return

        result = processor.handle(line)
        if result.output:
            write(result.output)
        if result.exit:
            return


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Semantic Matcher CLI")
    parser.add_argument("--tui", action="store_true",
                        help="Use the full-screen Textual interface instead of the line prompt")
    return parser.parse_args(argv)


def main(argv=None, settings: Optional[Settings] = None, matcher: Optional[SemanticMatcher] = None) -> int:
    """CLI entry point; returns the process exit status."""
    args = parse_args(argv)
    settings = settings or get_settings()
    logger.configure(settings.log_level)

    print("Semantic Matcher CLI v2.0")
    print("Initializing...\n")

    try:
        matcher = matcher or SemanticMatcher(settings)
        matcher.initialize()
    except Exception as e:
        print(f"\nInitialization failed: {e}")
        logger.error("CLI initialization failed", {"error": str(e)})
        return 1

    processor = CommandProcessor(matcher)
    if args.tui:
        MatcherApp(processor).run()
    else:
        run_repl(processor)
    return 0


if __name__ == "__main__":
    sys.exit(main())
