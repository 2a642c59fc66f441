"""In-memory movie store.

One ``MovieStore`` is created per Flask app (see ``app.create_app``) and owns
both the movie list and the id sequence. Records are frozen ``Movie``
instances: an update swaps in a new record, so readers only ever see a whole
one. Writes are serialised with a re-entrant lock.
"""

from __future__ import annotations
import threading
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional

from models import Movie, DEFAULT_LABEL
from .errors import ValidationError, NotFoundError, ConflictError, NoDataError, is_rating, is_year
from .query_utils import FilterCriteria, SORT_FIELDS

RATING_MSG = "Rating must be a number between 0 and 10"


class MovieStore:
    """Owner of the movie collection and its auto-incrementing ids."""

    def __init__(self, movies: Iterable[Movie] = ()):
        self._lock = threading.RLock()
        self._movies: List[Movie] = list(movies)
        self._next_id = max((m.id for m in self._movies), default=0) + 1

    # ───────────────────────────── readers ──────────────────────────
    def count(self) -> int:
        return len(self._movies)

    def list(self, sort_by: Optional[str] = None, order: str = "asc") -> List[Movie]:
        """Return every movie, sorted by ``title``, ``rating`` or ``year`` if asked.

        Any other ``sort_by`` keeps insertion order. Movies whose sort value
        is null always come last, whichever the direction.
        """
        with self._lock:
            result = list(self._movies)
        if sort_by not in SORT_FIELDS:
            return result
        present = [m for m in result if getattr(m, sort_by) is not None]
        missing = [m for m in result if getattr(m, sort_by) is None]
        present.sort(key=lambda m: getattr(m, sort_by), reverse=(order == "desc"))
        return present + missing

    def find_by_id(self, movie_id: int) -> Movie:
        with self._lock:
            for m in self._movies:
                if m.id == movie_id:
                    return m
        raise NotFoundError(f"Movie with ID {movie_id} not found")

    def search(self, term: Optional[str]) -> List[Movie]:
        if not term:
            raise ValidationError(
                "Query parameter 'title' is required",
                example="/movies/search?title=inc",
            )
        needle = term.lower()
        with self._lock:
            return [m for m in self._movies if needle in m.title.lower()]

    def filter(self, criteria: FilterCriteria) -> List[Movie]:
        with self._lock:
            return [m for m in self._movies if criteria.matches(m)]

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            movies = list(self._movies)
        if not movies:
            raise NoDataError("No movies available to compute statistics")

        highest = lowest = movies[0]
        genres: Dict[str, int] = {}
        directors: Dict[str, int] = {}
        for m in movies:
            # strict comparisons keep the first one seen on ties
            if m.rating > highest.rating:
                highest = m
            if m.rating < lowest.rating:
                lowest = m
            genres[m.genre] = genres.get(m.genre, 0) + 1
            directors[m.director] = directors.get(m.director, 0) + 1

        return {
            "totalMovies": len(movies),
            "averageRating": round(sum(m.rating for m in movies) / len(movies), 2),
            "highestRated": {"title": highest.title, "rating": highest.rating},
            "lowestRated": {"title": lowest.title, "rating": lowest.rating},
            "genreDistribution": genres,
            "directorDistribution": directors,
        }

    # ───────────────────────────── writers ──────────────────────────
    def insert(self, fields: Dict[str, Any]) -> Movie:
        title = fields.get("title")
        rating = fields.get("rating")
        year = fields.get("year")
        genre = fields.get("genre")
        director = fields.get("director")

        errors = []
        if not isinstance(title, str) or not title.strip():
            errors.append("Title is required and must be a non-empty string")
        if not is_rating(rating):
            errors.append("Rating is required and must be a number between 0 and 10")
        if year is not None and not is_year(year):
            errors.append("Year must be an integer")
        for name, value in (("Genre", genre), ("Director", director)):
            if value is not None and not isinstance(value, str):
                errors.append(f"{name} must be a string")
        if errors:
            raise ValidationError(errors=errors)

        title = title.strip()
        with self._lock:
            self._ensure_unique_title(title)
            movie = Movie(
                id=self._next_id,
                title=title,
                rating=rating,
                year=year,
                genre=(genre or "").strip() or DEFAULT_LABEL,
                director=(director or "").strip() or DEFAULT_LABEL,
            )
            self._next_id += 1
            self._movies.append(movie)
        return movie

    def update(self, movie_id: int, fields: Dict[str, Any]) -> Movie:
        """Merge ``fields`` into the movie with ``movie_id``.

        ``rating`` and ``year`` apply whenever present (so a rating of 0 sticks);
        ``year: null`` keeps the old year. ``title``, ``genre`` and ``director``
        only apply when they are non-empty strings.
        """
        with self._lock:
            idx = self._index_of(movie_id)
            current = self._movies[idx]

            changes: Dict[str, Any] = {}
            if "rating" in fields:
                if not is_rating(fields["rating"]):
                    raise ValidationError(RATING_MSG)
                changes["rating"] = fields["rating"]
            if fields.get("year") is not None:
                if not is_year(fields["year"]):
                    raise ValidationError("Year must be an integer")
                changes["year"] = fields["year"]
            for key in ("title", "genre", "director"):
                value = fields.get(key)
                if isinstance(value, str) and value.strip():
                    changes[key] = value.strip()

            if "title" in changes:
                self._ensure_unique_title(changes["title"], ignore_id=movie_id)

            updated = replace(current, **changes)
            self._movies[idx] = updated
        return updated

    def remove(self, movie_id: int) -> Movie:
        with self._lock:
            return self._movies.pop(self._index_of(movie_id))

    # ───────────────────────────── helpers ──────────────────────────
    def _index_of(self, movie_id: int) -> int:
        for i, m in enumerate(self._movies):
            if m.id == movie_id:
                return i
        raise NotFoundError(f"Movie with ID {movie_id} not found")

    def _ensure_unique_title(self, title: str, ignore_id: Optional[int] = None):
        key = title.lower()
        if any(m.title.lower() == key and m.id != ignore_id for m in self._movies):
            raise ConflictError("A movie with this title already exists")
