# ui/prompts.py

from typing import Optional, Protocol


class Prompter(Protocol):
    """User interaction used by the day grid when a field is edited."""

    def prompt(self, message: str, default: Optional[str] = None) -> Optional[str]:
        """Ask for a value; None means the user cancelled."""
        ...

    def alert(self, message: str) -> None:
        ...

    def confirm(self, message: str) -> bool:
        ...


class ConsolePrompter:
    def __init__(self, input_func=input, output_func=print):
        self._input = input_func
        self._output = output_func

    def prompt(self, message: str, default: Optional[str] = None) -> Optional[str]:
        hint = f" [{default}]" if default is not None else ""
        try:
            answer = self._input(f"{message}{hint} ")
        except EOFError:
            return None
        # Enter keeps the default, "-" clears the field
        if answer == "" and default is not None:
            return default
        if answer.strip() == "-":
            return ""
        return answer

    def alert(self, message: str) -> None:
        self._output(f"⚠️ {message}")

    def confirm(self, message: str) -> bool:
        try:
            answer = self._input(f"{message} [y/N] ")
        except EOFError:
            return False
        return answer.strip().lower() in ("y", "yes")
