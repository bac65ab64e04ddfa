from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class Atom(Protocol):
    """The action a step wraps.

    Steps only ever render an atom's label; running it belongs to the scheduler.
    """

    def __str__(self) -> str: ...


@dataclass(frozen=True, slots=True)
class Echo:
    message: str

    def __str__(self) -> str:
        return f"Echo: {self.message}"
