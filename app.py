import logging
import os
import sys
from datetime import date
from logging.handlers import RotatingFileHandler

sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from flask import Flask, g, jsonify, redirect, render_template, request, session
from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect

from config import Config
from models.database import init_app as init_db_app
from models.user import User
from rich_text import render_markdown
from translations import (DEFAULT_LOCALE, LOCALES, get_translator, resolve_locale,
                          swap_locale, text_direction)

LOCALE_PREFIX = "/<any(en, ar):locale>"


def configure_logging(app):
    app.logger.setLevel(app.config["LOG_LEVEL"])
    log_dir = app.config.get("LOG_DIR")
    if not log_dir:
        return
    os.makedirs(log_dir, exist_ok=True)
    handler = RotatingFileHandler(os.path.join(log_dir, "portfolio.log"),
                                  maxBytes=10 * 1024 * 1024, backupCount=5)
    handler.setFormatter(logging.Formatter(
        "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"))
    handler.setLevel(app.config["LOG_LEVEL"])
    # Attach to the root logger so module loggers (actions, uploads) are captured
    logging.getLogger().addHandler(handler)
    logging.getLogger().setLevel(app.config["LOG_LEVEL"])


def preferred_locale():
    return resolve_locale(session.get("lang")
                          or request.accept_languages.best_match(LOCALES)
                          or DEFAULT_LOCALE)


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    os.makedirs(app.config["UPLOAD_FOLDER"], exist_ok=True)
    configure_logging(app)

    # Extensions
    CSRFProtect(app)
    login_manager = LoginManager(app)
    login_manager.login_view = "auth.sign_in"
    login_manager.login_message_category = "warning"

    def localize(message):
        return get_translator(g.get("locale", DEFAULT_LOCALE))("login_required")

    login_manager.localize_callback = localize

    @login_manager.user_loader
    def load_user(user_id):
        return User.get_by_id(int(user_id))

    # Database teardown
    init_db_app(app)

    @app.cli.command("init-db")
    def init_db_command():
        """Create the tables and seed the owner account."""
        from init_db import init_db
        init_db(database=app.config["DATABASE"], upload_folder=app.config["UPLOAD_FOLDER"],
                admin_email=app.config["ADMIN_EMAIL"],
                admin_password=app.config["ADMIN_PASSWORD"])
        print("Initialized the database.")

    # Locale handling
    @app.url_value_preprocessor
    def pull_locale(endpoint, values):
        locale = values.pop("locale", None) if values else None
        g.locale = locale or preferred_locale()

    @app.url_defaults
    def add_locale(endpoint, values):
        if "locale" in values or not g.get("locale"):
            return
        if app.url_map.is_endpoint_expecting(endpoint, "locale"):
            values["locale"] = g.locale

    @app.context_processor
    def inject_globals():
        locale = g.get("locale", DEFAULT_LOCALE)
        return {
            "t": get_translator(locale),
            "locale": locale,
            "locales": LOCALES,
            "dir": text_direction(locale),
            "render_markdown": render_markdown,
            "current_year": date.today().year,
        }

    @app.route("/")
    def index():
        return redirect(f"/{preferred_locale()}/")

    @app.route("/set-language/<lang>")
    def set_language(lang):
        lang = resolve_locale(lang)
        session["lang"] = lang
        target = request.referrer or "/"
        if request.referrer and request.host_url and target.startswith(request.host_url):
            target = "/" + target[len(request.host_url):]
        if not target.startswith("/") or target.startswith("//"):
            target = "/"
        return redirect(swap_locale(target, lang))

    # Blueprints
    from routes.admin import admin_bp
    from routes.api import api_bp
    from routes.auth import auth_bp
    from routes.public import public_bp
    from routes.uploads import uploads_bp

    app.register_blueprint(public_bp, url_prefix=LOCALE_PREFIX)
    app.register_blueprint(auth_bp, url_prefix=f"{LOCALE_PREFIX}/auth")
    app.register_blueprint(admin_bp, url_prefix=f"{LOCALE_PREFIX}/admin")
    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_blueprint(uploads_bp)

    # Error handlers
    def error_response(status):
        if request.path.startswith("/api/"):
            return jsonify({"success": False, "error": f"error_{status}",
                            "status": status}), status
        return render_template("errors/error.html", status=status), status

    @app.errorhandler(403)
    def forbidden(e):
        return error_response(403)

    @app.errorhandler(404)
    def not_found(e):
        return error_response(404)

    @app.errorhandler(413)
    def too_large(e):
        return error_response(413)

    @app.errorhandler(500)
    def server_error(e):
        app.logger.error("Unhandled error on %s: %s", request.path, e)
        return error_response(500)

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=True, use_reloader=False)
