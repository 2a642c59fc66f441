from flask import Blueprint, current_app, request
from models import Movie
from .errors import expect_json, read_json, parse_movie_id
from .query_utils import FilterCriteria, echo_filters, parse_sort_args
from .store import MovieStore
from .metrics import record_write

api_bp = Blueprint("api", __name__)  # blueprint for the REST routes

API_VERSION = "1.0.0"

ENDPOINTS = {
    "GET /movies": "Get all movies (sortBy=title|rating|year, order=asc|desc)",
    "GET /movies/search?title=query": "Search movies by title",
    "GET /movies/filter?genre=&minRating=&maxRating=&year=&director=": "Filter movies",
    "GET /movies/:id": "Get movie by ID",
    "POST /movies": "Add a new movie",
    "PUT /movies/:id": "Update a movie",
    "DELETE /movies/:id": "Delete a movie",
    "GET /stats": "Get movie statistics",
}

def get_store() -> MovieStore:
    return current_app.extensions["movie_store"]

def movie_to_dict(m: Movie):
    return m.to_dict()

def _listing(movies, **extra):
    return {
        "success": True,
        "count": len(movies),
        **extra,
        "data": [movie_to_dict(m) for m in movies],
    }

@api_bp.get("/api")
def api_info():
    return {
        "message": "Welcome to Movie Search API",
        "version": API_VERSION,
        "endpoints": ENDPOINTS,
    }

@api_bp.get("/movies")
def list_movies():
    sort_by, order = parse_sort_args(request.args)
    return _listing(get_store().list(sort_by, order))

@api_bp.get("/movies/search")
def search_movies():
    title = request.args.get("title")
    found = get_store().search(title)
    if not found:
        return {
            "success": True,
            "count": 0,
            "message": f'No movies found matching "{title}"',
            "data": [],
        }
    return _listing(found, searchTerm=title)

@api_bp.get("/movies/filter")
def filter_movies():
    criteria = FilterCriteria.from_args(request.args)
    return _listing(get_store().filter(criteria), filters=echo_filters(request.args))

@api_bp.get("/movies/<movie_id>")
def get_movie(movie_id):
    m = get_store().find_by_id(parse_movie_id(movie_id))
    return {"success": True, "data": movie_to_dict(m)}

@api_bp.post("/movies")
def create_movie():
    expect_json()
    data = read_json()
    m = get_store().insert(data)
    record_write("insert")
    return {"success": True, "message": "Movie added successfully", "data": movie_to_dict(m)}, 201

@api_bp.put("/movies/<movie_id>")
def update_movie(movie_id):
    mid = parse_movie_id(movie_id)
    expect_json()
    data = read_json()
    m = get_store().update(mid, data)
    record_write("update")
    return {"success": True, "message": "Movie updated successfully", "data": movie_to_dict(m)}

@api_bp.delete("/movies/<movie_id>")
def delete_movie(movie_id):
    m = get_store().remove(parse_movie_id(movie_id))
    record_write("remove")
    return {"success": True, "message": "Movie deleted successfully", "data": movie_to_dict(m)}

@api_bp.get("/stats")
def stats():
    return {"success": True, "data": get_store().stats()}
