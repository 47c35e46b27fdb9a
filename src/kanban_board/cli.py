"""CLI for the kanban board."""

import shlex
from typing import Annotated, Literal

import structlog
from cyclopts import App, Parameter

from kanban_board.backends import MemoryBackend
from kanban_board.config import get_config
from kanban_board.config_commands import config_app
from kanban_board.forms import FormResult
from kanban_board.models import STATUSES
from kanban_board.store import BoardStore
from kanban_board.view import BoardView

logger = structlog.get_logger()

app = App(
    help="Kanban Board - a single-session task board",
)

app.command(config_app)

HELP_TEXT = """Commands:
  add <title> <description> [status]        Create a card (status defaults to backlog)
  edit <id> <title> <description> <status>  Replace a card's fields
  mv <id> <target>                          Drop a card on another card or on a column
  rm <id>                                   Delete a card
  show                                      Show the board
  help                                      Show this help
  exit                                      Leave the session
Ids accept unique prefixes; columns are: """ + ", ".join(STATUSES)


def configure_logging(log_level: str) -> None:
    """Configure structlog with the specified log level."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(min_level=log_level.lower()))


def build_view() -> BoardView:
    """Create an initialized board from the configured settings."""
    config = get_config()
    store = BoardStore(MemoryBackend(seed=config.get_bool("board.seed")))
    store.initialize()
    return BoardView(store, description_width=config.get_int("display.description_width", minimum=1))


def format_errors(result: FormResult) -> str:
    return "\n".join(f"{name}: {message}" for name, message in result.errors.items())


class Session:
    """Interactive command loop over one in-memory board."""

    def __init__(self, view: BoardView) -> None:
        self.view = view

    def handle(self, line: str) -> str | None:
        """Run one command line and return a message for the user, if any."""
        try:
            tokens = shlex.split(line)
        except ValueError as e:
            return f"Could not parse command: {e}"
        if not tokens:
            return None

        cmd, args = tokens[0].lower(), tokens[1:]
        if cmd == "add":
            return self._add(args)
        if cmd == "edit":
            return self._edit(args)
        if cmd == "mv":
            return self._move(args)
        if cmd == "rm":
            return self._remove(args)
        if cmd == "show":
            return self.view.render()
        if cmd == "help":
            return HELP_TEXT
        return "Unknown command. Type 'help' for instructions."

    def _add(self, args: list[str]) -> str | None:
        if len(args) not in (2, 3):
            return "Usage: add <title> <description> [status]"
        form = self.view.form
        form.open_new()
        data = {"title": args[0], "description": args[1], "status": args[2] if len(args) == 3 else "backlog"}
        result = form.submit(data)
        if not result.ok:
            form.close()
            return format_errors(result)
        return None

    def _edit(self, args: list[str]) -> str | None:
        if len(args) != 4:
            return "Usage: edit <id> <title> <description> <status>"
        card_id = self.view.resolve(args[0])
        if card_id is None or self.view.click(card_id) is None:
            return f"No card matches {args[0]!r}."
        form = self.view.form
        result = form.submit({"title": args[1], "description": args[2], "status": args[3]})
        if not result.ok:
            form.close()
            return format_errors(result)
        return None

    def _move(self, args: list[str]) -> str | None:
        if len(args) != 2:
            return "Usage: mv <id> <target>"
        card_id = self.view.resolve(args[0])
        if card_id is None:
            return f"No card matches {args[0]!r}."
        target = args[1].lower() if args[1].lower() in STATUSES else self.view.resolve(args[1])
        if target is None:
            return f"No card or column matches {args[1]!r}."
        self.view.drag_end(card_id, target)
        return None

    def _remove(self, args: list[str]) -> str | None:
        if len(args) != 1:
            return "Usage: rm <id>"
        card_id = self.view.resolve(args[0])
        if card_id is None or self.view.click(card_id) is None:
            return f"No card matches {args[0]!r}."
        result = self.view.form.delete()
        if not result.ok:
            return format_errors(result)
        return f"Deleted {result.card.title!r}."

    def run(self) -> None:
        """Read commands until exit or end of input, redrawing the board after each."""
        print(self.view.render())
        while True:
            try:
                line = input("\n: ").strip()
            except (KeyboardInterrupt, EOFError):
                print("\nGoodbye.")
                return
            if line.lower() == "exit":
                print("Goodbye.")
                return
            message = self.handle(line)
            if line.split(" ", 1)[0].lower() not in ("show", "help"):
                print(self.view.render())
            if message:
                print(message)


@app.command
def show() -> None:
    """Show a freshly initialized board."""
    print(build_view().render())


@app.command
def session() -> None:
    """Start an interactive board session."""
    Session(build_view()).run()


@app.meta.default
def main(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    log_level: Literal["debug", "info", "warning", "error", "critical"] = "critical",
) -> None:
    """Main entry point with global options."""
    configure_logging(log_level)
    app(tokens)


if __name__ == "__main__":
    app.meta()
