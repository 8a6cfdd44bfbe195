import logging

from flask import Flask
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def create_app(config_class=None):
    """Application factory: database, savings advisor and API blueprint."""
    from config import DevelopmentConfig

    app = Flask(__name__)
    app.config.from_object(config_class or DevelopmentConfig)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    db.init_app(app)

    from energywise.routes import bp
    from energywise.utils.recommendations import SavingsAdvisor
    from energywise.utils.text_generation import build_generator

    app.extensions["savings_advisor"] = SavingsAdvisor(build_generator(app.config))
    app.register_blueprint(bp)

    with app.app_context():
        from energywise import models  # noqa: F401  (registers tables)

        db.create_all()

    return app
