"""Interactive prompts rendered with rich."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

Validator = Callable[[str], "str | None"]


class PromptCancelled(Exception):
    """Raised when the user aborts a prompt."""
    pass


class ConsolePrompter:
    """Asks questions on a rich console.

    An empty answer to a required question, EOF or Ctrl-C cancels.
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def _ask(self, prompt: str) -> str:
        try:
            return Prompt.ask(prompt, console=self.console, default="", show_default=False)
        except (EOFError, KeyboardInterrupt):
            self.console.print()
            raise PromptCancelled("Input was cancelled.")

    def select(self, title: str, options: Sequence[tuple[str, str]]) -> int:
        """Show a numbered list and return the index of the chosen option.

        The user may answer with the number or the label.
        """
        table = Table(title=title, show_header=False)
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Option", style="bold")
        table.add_column("Description", style="dim")
        for number, (label, description) in enumerate(options, start=1):
            table.add_row(str(number), escape(label), escape(description))
        self.console.print(table)

        labels = [label.lower() for label, _ in options]
        while True:
            answer = self._ask(f"Select [1-{len(options)}]").strip()
            if not answer:
                raise PromptCancelled("Selection was cancelled.")
            if answer.isdigit() and 1 <= int(answer) <= len(options):
                return int(answer) - 1
            if answer.lower() in labels:
                return labels.index(answer.lower())
            self.console.print(f"[red]✗[/red] Invalid choice: {answer}")

    def text(
        self,
        prompt: str,
        placeholder: str = "",
        validate: Validator | None = None,
        required: bool = True,
    ) -> str:
        """Ask for one line of text, repeating the question until it validates."""
        question = f"{prompt} [dim]({placeholder})[/dim]" if placeholder else prompt
        while True:
            answer = self._ask(question)
            if not answer and required:
                raise PromptCancelled("Input was cancelled.")
            error = validate(answer) if validate else None
            if error is None:
                return answer
            self.console.print(f"[red]✗[/red] {error}")
