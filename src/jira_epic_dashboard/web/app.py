"""Flask application factory for the Jira epic dashboard API."""

from flask import Flask
from flask_cors import CORS

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


def create_app(cors_origins: list[str] | None = None) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)

    app.config["SECRET_KEY"] = "jira-epic-dashboard-local-dev"
    app.json.sort_keys = False

    CORS(app, resources={
        r"/api/*": {
            "origins": cors_origins or DEFAULT_CORS_ORIGINS,
            "methods": ["GET", "POST", "OPTIONS"],
            "allow_headers": ["Content-Type"],
        }
    })

    from jira_epic_dashboard.web.routes import bp
    app.register_blueprint(bp)

    return app
