import os


class Config:
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///catalog.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Replace connections the server dropped instead of failing the request
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    LOG_LEVEL = os.environ.get("CATALOG_LOG_LEVEL", "INFO").upper()

    PAGINATION_DEFAULT_LIMIT = int(os.environ.get("PAGINATION_DEFAULT_LIMIT", 10))
    PAGINATION_MAX_LIMIT = int(os.environ.get("PAGINATION_MAX_LIMIT", 100))


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
