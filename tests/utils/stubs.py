"""Test doubles for application handlers."""

from typing import Any

from src.core.result import Result


class StubHandler:
    """Handler double that records commands and returns a fixed result."""

    def __init__(self, result: Result[Any, Any]) -> None:
        self.result = result
        self.commands: list[Any] = []

    async def handle(self, cmd: Any) -> Result[Any, Any]:
        self.commands.append(cmd)
        return self.result

    @property
    def last_command(self) -> Any:
        return self.commands[-1]
