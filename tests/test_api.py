import os, pytest, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from app import create_app
from seed import SEED_MOVIES

@pytest.fixture()
def app():
    # fresh app, and so a freshly seeded store, per test
    return create_app({"TESTING": True})

@pytest.fixture()
def client(app):
    return app.test_client()

@pytest.fixture()
def empty_client():
    return create_app({"TESTING": True, "SEED_DATA": False}).test_client()


def test_api_info(client):
    r = client.get("/api")
    assert r.status_code == 200
    assert r.json["version"] == "1.0.0"
    assert "GET /stats" in r.json["endpoints"]

def test_list_movies(client):
    r = client.get("/movies")
    assert r.status_code == 200
    assert r.json["success"] is True
    assert r.json["count"] == 8
    assert r.json["data"][0] == {
        "id": 1, "title": "Inception", "rating": 9, "year": 2010,
        "genre": "Sci-Fi", "director": "Christopher Nolan",
    }

def test_list_sorted_by_rating_desc(client):
    r = client.get("/movies?sortBy=rating&order=desc")
    ratings = [m["rating"] for m in r.json["data"]]
    assert ratings == sorted(ratings, reverse=True)
    assert r.json["data"][0]["title"] == "The Shawshank Redemption"

def test_list_unknown_sort_field_is_ignored(client):
    r = client.get("/movies?sortBy=banana&order=desc")
    assert r.status_code == 200
    assert [m["id"] for m in r.json["data"]] == list(range(1, 9))

def test_crud_movie(client): # basic CRUD operations
    # create
    r = client.post("/movies", json={"title": "Arrival", "rating": 7.9, "year": 2016})
    assert r.status_code == 201
    assert r.json["message"] == "Movie added successfully"
    created = r.json["data"]
    mid = created["id"]
    assert created["genre"] == "Unknown"

    # read
    r = client.get(f"/movies/{mid}")
    assert r.status_code == 200
    assert r.json["data"] == created

    # update
    r = client.put(f"/movies/{mid}", json={"rating": 0, "director": "Denis Villeneuve"})
    assert r.status_code == 200
    assert r.json["data"]["rating"] == 0
    assert r.json["data"]["director"] == "Denis Villeneuve"
    assert r.json["data"]["title"] == "Arrival"

    # delete
    r = client.delete(f"/movies/{mid}")
    assert r.status_code == 200
    assert r.json["message"] == "Movie deleted successfully"
    assert r.json["data"]["id"] == mid

    # second delete
    r = client.delete(f"/movies/{mid}")
    assert r.status_code == 404
    assert r.json == {"success": False, "error": f"Movie with ID {mid} not found"}

    r = client.get("/movies")
    assert r.json["count"] == 8

def test_create_duplicate_title_conflict(client):
    r = client.post("/movies", json={"title": "the dark knight", "rating": 8})
    assert r.status_code == 409
    assert r.json["success"] is False
    assert r.json["error"] == "A movie with this title already exists"
    assert client.get("/movies").json["count"] == 8

def test_create_validation_errors_are_listed(client):
    r = client.post("/movies", json={"title": "", "rating": 10.1})
    assert r.status_code == 400
    assert r.json["success"] is False
    assert len(r.json["errors"]) == 2

@pytest.mark.parametrize("rating", [0, 10])
def test_create_accepts_rating_bounds(client, rating):
    r = client.post("/movies", json={"title": f"Bound {rating}", "rating": rating})
    assert r.status_code == 201
    assert r.json["data"]["rating"] == rating

def test_create_rejects_nan_rating(client):
    r = client.post("/movies", data='{"title": "Not A Number", "rating": NaN}',
                    content_type="application/json")
    assert r.status_code == 400

def test_huge_integer_rating_is_a_validation_error(client):
    body = '{"title": "Huge", "rating": 1' + "0" * 400 + "}"
    r = client.post("/movies", data=body, content_type="application/json")
    assert r.status_code == 400
    assert r.json["success"] is False
    r = client.put("/movies/1", data='{"rating": 1' + "0" * 400 + "}", content_type="application/json")
    assert r.status_code == 400
    assert r.json["error"] == "Rating must be a number between 0 and 10"
    assert client.get("/movies/1").json["data"]["rating"] == 9

def test_create_requires_json_content_type(client):
    r = client.post("/movies", data='{"title":"X","rating":5}')  # no content-type header
    assert r.status_code == 415
    assert r.json["success"] is False

def test_create_body_must_be_object(client):
    r = client.post("/movies", json=[1, 2, 3])
    assert r.status_code == 400
    assert r.json["error"] == "JSON body must be an object"

def test_get_movie_invalid_and_missing_id(client):
    r = client.get("/movies/abc")
    assert r.status_code == 400
    assert r.json["error"] == "Invalid movie ID. Must be a number."
    r = client.get("/movies/999")
    assert r.status_code == 404

def test_update_validation(client):
    r = client.put("/movies/1", json={"rating": -0.1})
    assert r.status_code == 400
    assert r.json["error"] == "Rating must be a number between 0 and 10"
    r = client.put("/movies/xyz", json={"rating": 5})
    assert r.status_code == 400
    r = client.put("/movies/999", json={"rating": 5})
    assert r.status_code == 404
    r = client.put("/movies/1", json={"title": "Pulp Fiction"})
    assert r.status_code == 409
    # nothing changed
    assert client.get("/movies/1").json["data"]["rating"] == 9

def test_delete_invalid_id(client):
    r = client.delete("/movies/nope")
    assert r.status_code == 400

def test_search(client):
    r = client.get("/movies/search?title=inc")
    assert r.status_code == 200
    assert r.json["count"] == 1
    assert r.json["searchTerm"] == "inc"
    assert r.json["data"][0]["title"] == "Inception"

def test_search_no_matches(client):
    r = client.get("/movies/search?title=zzz")
    assert r.status_code == 200
    assert r.json["count"] == 0
    assert r.json["data"] == []
    assert "zzz" in r.json["message"]

def test_search_requires_title(client):
    r = client.get("/movies/search")
    assert r.status_code == 400
    assert r.json["error"] == "Query parameter 'title' is required"
    assert r.json["example"] == "/movies/search?title=inc"

def test_filter_scifi_min_rating(client):
    r = client.get("/movies/filter?genre=Sci-Fi&minRating=9")
    assert r.status_code == 200
    assert r.json["count"] == 1
    assert r.json["data"][0]["title"] == "Inception"
    assert r.json["filters"] == {"genre": "Sci-Fi", "minRating": "9"}

def test_filter_bad_number_is_dropped(client):
    r = client.get("/movies/filter?minRating=high&director=nolan")
    assert r.status_code == 200
    assert r.json["count"] == 3
    assert r.json["filters"] == {"minRating": "high", "director": "nolan"}

def test_stats(client):
    r = client.get("/stats")
    assert r.status_code == 200
    data = r.json["data"]
    ratings = [m.rating for m in SEED_MOVIES]
    assert data["totalMovies"] == 8
    assert data["averageRating"] == round(sum(ratings) / len(ratings), 2)
    assert data["highestRated"] == {"title": "The Shawshank Redemption", "rating": 9.3}
    assert data["lowestRated"] == {"title": "Dangal", "rating": 8.4}
    assert data["genreDistribution"]["Drama"] == 3

def test_stats_on_empty_store(empty_client):
    r = empty_client.get("/stats")
    assert r.status_code == 404
    assert r.json["success"] is False

def test_each_app_owns_its_store():
    a = create_app({"TESTING": True}).test_client()
    b = create_app({"TESTING": True}).test_client()
    assert a.delete("/movies/1").status_code == 200
    assert b.get("/movies/1").status_code == 200

def test_unknown_route(client):
    r = client.get("/definitely/not/here")
    assert r.status_code == 404
    assert r.json["error"] == "Endpoint not found"
    assert "hint" in r.json

def test_method_not_allowed(client):
    r = client.patch("/movies/1", json={"rating": 5})
    assert r.status_code == 405
    assert r.json["success"] is False

def test_unhandled_error_is_scrubbed(app):
    def boom():
        raise RuntimeError("secret internals")
    app.add_url_rule("/boom", "boom", boom)
    r = app.test_client().get("/boom")
    assert r.status_code == 500
    assert r.json == {"success": False, "error": "Internal server error"}

def test_cors_header(client):
    r = client.get("/movies", headers={"Origin": "http://example.com"})
    # flask-cors answers "*" or echoes the origin depending on its version
    assert r.headers.get("Access-Control-Allow-Origin") in {"*", "http://example.com"}

def test_cors_origins_list_from_config():
    c = create_app({"TESTING": True, "CORS_ORIGINS": "http://a.test, http://b.test"}).test_client()
    r = c.get("/movies", headers={"Origin": "http://b.test"})
    assert r.headers.get("Access-Control-Allow-Origin") == "http://b.test"
    r = c.get("/movies", headers={"Origin": "http://evil.test"})
    assert "Access-Control-Allow-Origin" not in r.headers

def test_split_origins():
    from app import _split_origins
    assert _split_origins(None) == []
    assert _split_origins("*") == []
    assert _split_origins("a.com, b.com,") == ["a.com", "b.com"]

def test_filter_reads_leading_numbers(client):
    r = client.get("/movies/filter?genre=Sci-Fi&minRating=9abc")
    assert r.status_code == 200
    assert [m["title"] for m in r.json["data"]] == ["Inception"]
    assert r.json["filters"]["minRating"] == "9abc"
    r = client.get("/movies/filter?year=1994x")
    assert r.json["count"] == 3
