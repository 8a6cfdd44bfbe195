import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "super-secret-dev-key")
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///energywise.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Tariff used when no household has been saved yet (R$ per kWh)
    DEFAULT_COST_PER_KWH = float(os.environ.get("DEFAULT_COST_PER_KWH", "0.75"))

    # Savings suggestion text generator: "gemini" or "template"
    SUGGESTION_BACKEND = os.environ.get("SUGGESTION_BACKEND", "gemini")
    SUGGESTION_API_URL = os.environ.get(
        "SUGGESTION_API_URL", "https://generativelanguage.googleapis.com/v1beta"
    )
    SUGGESTION_API_KEY = os.environ.get("SUGGESTION_API_KEY")
    SUGGESTION_MODEL = os.environ.get("SUGGESTION_MODEL", "gemini-2.0-flash")
    SUGGESTION_TIMEOUT = float(os.environ.get("SUGGESTION_TIMEOUT", "30"))


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SUGGESTION_BACKEND = "template"


class ProductionConfig(Config):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", "mysql+pymysql://root@localhost/energywise"
    )
