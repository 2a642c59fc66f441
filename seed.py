#movies the store starts with on every boot
from models import Movie

SEED_MOVIES = (
    Movie(id=1, title="Inception", rating=9, year=2010, genre="Sci-Fi", director="Christopher Nolan"),
    Movie(id=2, title="Interstellar", rating=8.5, year=2014, genre="Sci-Fi", director="Christopher Nolan"),
    Movie(id=3, title="Dangal", rating=8.4, year=2016, genre="Drama", director="Nitesh Tiwari"),
    Movie(id=4, title="The Dark Knight", rating=9.2, year=2008, genre="Action", director="Christopher Nolan"),
    Movie(id=5, title="Pulp Fiction", rating=8.9, year=1994, genre="Crime", director="Quentin Tarantino"),
    Movie(id=6, title="The Shawshank Redemption", rating=9.3, year=1994, genre="Drama", director="Frank Darabont"),
    Movie(id=7, title="Forrest Gump", rating=8.8, year=1994, genre="Drama", director="Robert Zemeckis"),
    Movie(id=8, title="The Matrix", rating=8.7, year=1999, genre="Sci-Fi", director="The Wachowskis"),
)


def seed_movies():
    return list(SEED_MOVIES)


if __name__ == "__main__":
    from movie_core.store import MovieStore
    store = MovieStore(seed_movies())
    print("Seeded:", store.count())
