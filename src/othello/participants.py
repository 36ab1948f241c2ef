"""Who controls a color: a human (by name), the AI, or nobody yet."""

from dataclasses import dataclass
from typing import Optional, Self

from src.core.exceptions import GameStateError
from src.core.shared_types import ParticipantKind


@dataclass(frozen=True)
class Participant:
    kind: ParticipantKind
    name: Optional[str] = None

    def __post_init__(self) -> None:
        # only humans carry a name
        if (self.kind == ParticipantKind.HUMAN) != (self.name is not None):
            raise GameStateError(
                f"Participant of kind {self.kind} cannot have name {self.name!r}."
            )

    @classmethod
    def human(cls, name: str) -> Self:
        return cls(ParticipantKind.HUMAN, name)

    @classmethod
    def ai(cls) -> Self:
        return cls(ParticipantKind.AI)

    @classmethod
    def unassigned(cls) -> Self:
        return cls(ParticipantKind.UNASSIGNED)

    @property
    def is_human(self) -> bool:
        return self.kind == ParticipantKind.HUMAN

    @property
    def is_ai(self) -> bool:
        return self.kind == ParticipantKind.AI

    @property
    def is_assigned(self) -> bool:
        return self.kind != ParticipantKind.UNASSIGNED

    @classmethod
    def from_text(cls, text: str) -> Self:
        """'human:<name>', 'ai' or 'unassigned'"""
        kind_text, _, name = text.partition(":")
        try:
            kind = ParticipantKind(kind_text)
        except ValueError as exc:
            raise GameStateError(
                f"Invalid participant: {text!r}. Use 'human:<name>', 'ai' or 'unassigned'."
            ) from exc
        match kind:
            case ParticipantKind.HUMAN:
                return cls.human(name)
            case ParticipantKind.AI:
                return cls.ai()
            case ParticipantKind.UNASSIGNED:
                return cls.unassigned()

    def to_text(self) -> str:
        if self.is_human:
            return f"{self.kind.value}:{self.name}"
        return self.kind.value

    def display_name(self, difficulty: Optional[str] = None) -> str:
        match self.kind:
            case ParticipantKind.HUMAN:
                return str(self.name)
            case ParticipantKind.AI:
                return f"AI ({difficulty})" if difficulty else "AI"
            case _:
                return "(open seat)"
