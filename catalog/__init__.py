from flask import Flask, jsonify

from catalog.app_logger import setup_logging
from catalog.config import Config
from catalog.extensions import db, migrate


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    setup_logging(app.config.get("LOG_LEVEL", "INFO"))

    db.init_app(app)
    migrate.init_app(app, db)

    # Registers every model on db.metadata
    from catalog import models  # noqa

    from catalog.routes.department_routes import departments_bp
    from catalog.routes.subject_routes import subjects_bp
    from catalog.routes.class_routes import classes_bp
    from catalog.routes.user_routes import users_bp

    app.register_blueprint(departments_bp, url_prefix="/departments")
    app.register_blueprint(subjects_bp, url_prefix="/subjects")
    app.register_blueprint(classes_bp, url_prefix="/classes")
    app.register_blueprint(users_bp, url_prefix="/users")

    @app.route("/health")
    def health():
        return jsonify({"status": "ok"})

    return app
