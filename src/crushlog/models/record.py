"""Domain models for crush sub-records."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class ActionEntry:
    """A good (pro) or bad (con) action logged against a crush."""

    id: str
    title: str
    description: str
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class Trait:
    """A quality or defect."""

    id: str
    text: str
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "createdAt": self.created_at}


@dataclass(frozen=True)
class DiaryEntry:
    """A journal entry attached to a crush."""

    id: str
    title: str
    description: str
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["createdAt"] = data.pop("created_at")
        return data
