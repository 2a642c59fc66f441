import os
import logging

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from seed import seed_movies
from movie_core.errors import install_json_error_handlers
from movie_core.store import MovieStore
from movie_core.api import api_bp
from movie_core.metrics import metrics_bp
from movie_core.web import web_bp

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logging.getLogger("werkzeug").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def _env_flag(name, default):
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _split_origins(raw):
    """Comma-separated CORS_ORIGINS to a list; empty or "*" means any origin."""
    if isinstance(raw, (list, tuple)):
        return list(raw)
    origins = [o.strip() for o in (raw or "").split(",") if o.strip()]
    return [] if origins == ["*"] else origins


def create_app(config=None):
    app = Flask(__name__, static_folder="static")

    # Load env config, then explicit overrides (tests pass these)
    app.config["SEED_DATA"] = _env_flag("SEED_DATA", True)
    app.config["CORS_ORIGINS"] = os.getenv("CORS_ORIGINS")
    if config:
        app.config.update(config)

    origins = _split_origins(app.config["CORS_ORIGINS"])
    if origins:
        CORS(app, origins=origins)
    else:
        CORS(app)  # allow any origin
    install_json_error_handlers(app)

    # One store per app; handlers reach it through current_app
    store = MovieStore(seed_movies() if app.config["SEED_DATA"] else ())
    app.extensions["movie_store"] = store
    logger.info("Movie store ready with %d movies", store.count())

    # HEALTH CHECK ENDPOINT
    @app.route("/health")
    def health():
        """Liveness probe; also reports how many movies the store holds."""
        return {"status": "ok", "movies": store.count()}

    # Register blueprints
    app.register_blueprint(metrics_bp)
    app.register_blueprint(api_bp)
    app.register_blueprint(web_bp)

    return app


app = create_app()

# Development only
if __name__ == "__main__":
    port = int(os.getenv("PORT", 3000))
    logger.info("Movie Search API running: web UI http://localhost:%d, API info http://localhost:%d/api", port, port)
    app.run(host="0.0.0.0", port=port, debug=True)
