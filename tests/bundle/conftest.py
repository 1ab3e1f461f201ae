from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LoggedCall:
    level: str
    message: str
    args: tuple

    def render(self) -> str:
        return self.message % self.args if self.args else self.message


class RecordingLogger:
    def __init__(self) -> None:
        self.calls: list[LoggedCall] = []

    def debug(self, message: str, *args, **kwargs) -> None:
        _ = kwargs
        self.calls.append(LoggedCall("debug", message, args))

    def info(self, message: str, *args, **kwargs) -> None:
        _ = kwargs
        self.calls.append(LoggedCall("info", message, args))

    def warning(self, message: str, *args, **kwargs) -> None:
        _ = kwargs
        self.calls.append(LoggedCall("warning", message, args))

    def error(self, message: str, *args, **kwargs) -> None:
        _ = kwargs
        self.calls.append(LoggedCall("error", message, args))

    def warnings(self) -> list[str]:
        return [call.render() for call in self.calls if call.level == "warning"]


@dataclass(slots=True)
class Point:
    x: int
    y: int
