from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict

DEFAULT_LABEL = "Unknown"  # genre/director when none given


@dataclass(frozen=True)
class Movie:  # movie record, replaced (never mutated) on update
    id: int
    title: str
    rating: float
    year: int | None = None
    genre: str = DEFAULT_LABEL
    director: str = DEFAULT_LABEL

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def __repr__(self):
        return f"<Movie {self.id} {self.title!r}>"
