"""Console input for the interactive menu.

Each reader keeps asking until the answer is valid, so the library core
only ever receives well-typed values.
"""

import datetime
from typing import Optional

from rich.console import Console
from rich.prompt import IntPrompt, Prompt

from booklend.errors import DecodeError
from booklend.serializers import parse_date


class InputValidator:
    """Checks for raw console text."""

    @staticmethod
    def is_present(text: Optional[str]) -> bool:
        return text is not None and bool(text.strip())

    @staticmethod
    def in_range(value: int, minimum: Optional[int] = None, maximum: Optional[int] = None) -> bool:
        if minimum is not None and value < minimum:
            return False
        if maximum is not None and value > maximum:
            return False
        return True

    @staticmethod
    def parse_date(text: Optional[str]) -> Optional[datetime.date]:
        try:
            return parse_date((text or "").strip())
        except DecodeError:
            return None


class ConsolePrompts:
    """Reads validated strings, integers and dates from the console."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def read_text(self, message: str, required: bool = True) -> str:
        while True:
            if required:
                answer = Prompt.ask(message, console=self.console)
            else:
                answer = Prompt.ask(message, console=self.console, default="", show_default=False)
            answer = (answer or "").strip()
            if not required or InputValidator.is_present(answer):
                return answer
            self.console.print("[yellow]This field is required. Please enter a value.[/]")

    def read_int(self, message: str, minimum: Optional[int] = None, maximum: Optional[int] = None) -> int:
        while True:
            value = IntPrompt.ask(message, console=self.console)
            if InputValidator.in_range(value, minimum, maximum):
                return value
            low = "" if minimum is None else f" >= {minimum}"
            high = "" if maximum is None else f" <= {maximum}"
            self.console.print(f"[yellow]Please enter a number{low}{high}.[/]")

    def read_date(self, message: str) -> datetime.date:
        while True:
            answer = Prompt.ask(message, console=self.console)
            parsed = InputValidator.parse_date(answer)
            if parsed is not None:
                return parsed
            self.console.print("[yellow]Invalid date format. Use YYYY-MM-DD.[/]")
