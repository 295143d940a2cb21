"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from enum import Enum
from typing import Self


@dataclass(frozen=True)
class UserId:
    """Unique identifier for a User."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("UserId must be an integer")
        if self.value <= 0:
            raise ValueError("UserId must be positive")

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=int(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("EventId must be an integer")
        if self.value <= 0:
            raise ValueError("EventId must be positive")

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=int(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Capacity:
    """Strictly positive number of seats an event accepts."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("Capacity must be an integer")
        if self.value <= 0:
            raise ValueError("Capacity must be positive")

    def admits(self, enrolled: int) -> bool:
        """Whether one more enrollment fits next to ``enrolled`` existing ones."""
        return enrolled < self.value


class Category(Enum):
    """Closed set of event categories; values are the display labels."""

    TECNOLOGIA = "Tecnologia e Inovação"
    CULTURA = "Arte, Cultura e Lazer"
    ESPORTES = "Esportes e Competições"
    ACADEMICO = "Acadêmico e Científico"
    OUTROS = "Outros / Diversos"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def parse(cls, token: str | None) -> "Category | None":
        """Case-insensitive lookup by name. Returns None for unknown tokens."""
        if not isinstance(token, str):
            return None
        return cls.__members__.get(token.strip().upper())
