import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

SORT_FIELDS = {"title", "rating", "year"}
FILTER_PARAMS = ("genre", "minRating", "maxRating", "year", "director")

# leading number of a query value; trailing junk is ignored ("9abc" -> 9)
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _to_float(v: Optional[str]) -> Optional[float]:
    m = _FLOAT_PREFIX.match(v or "")
    return float(m.group(1)) if m else None

def _to_int(v: Optional[str]) -> Optional[int]:
    m = _INT_PREFIX.match(v or "")
    if not m:
        return None
    try:
        return int(m.group(1))
    except ValueError:  # past the int digit limit
        return None


@dataclass(frozen=True)
class FilterCriteria:
    genre: Optional[str] = None
    min_rating: Optional[float] = None
    max_rating: Optional[float] = None
    year: Optional[int] = None
    director: Optional[str] = None

    @classmethod
    def from_args(cls, req_args) -> "FilterCriteria":
        """Build criteria from query args; numbers that don't parse are dropped."""
        return cls(
            genre=req_args.get("genre") or None,
            min_rating=_to_float(req_args.get("minRating")),
            max_rating=_to_float(req_args.get("maxRating")),
            year=_to_int(req_args.get("year")),
            director=req_args.get("director") or None,
        )

    def matches(self, m) -> bool:
        if self.genre and m.genre.lower() != self.genre.lower():
            return False
        if self.min_rating is not None and m.rating < self.min_rating:
            return False
        if self.max_rating is not None and m.rating > self.max_rating:
            return False
        if self.year is not None and m.year != self.year:
            return False
        if self.director and self.director.lower() not in m.director.lower():
            return False
        return True


def echo_filters(req_args) -> Dict[str, Any]:
    # raw values as the client sent them, omitted when absent
    return {k: req_args[k] for k in FILTER_PARAMS if k in req_args}

def parse_sort_args(req_args) -> Tuple[Optional[str], str]:
    sort_by = req_args.get("sortBy")
    if sort_by not in SORT_FIELDS:
        sort_by = None
    order = "desc" if req_args.get("order") == "desc" else "asc"
    return sort_by, order
