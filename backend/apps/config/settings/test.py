# Import all base settings first
from .base import *  # noqa: F403, F401
from .base import INSTALLED_APPS, LOGGING, env  # noqa: F401

# Database configuration - use DATABASE_URL if provided (for CI), otherwise SQLite

if env("DATABASE_URL", default=""):  # noqa: F405

    # CI environment - use the configured database and run migrations

    DATABASES = {"default": env.db("DATABASE_URL")}  # noqa: F405, F811

else:

    # Local test environment - use fast SQLite in-memory

    DATABASES = {  # noqa: F811
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": ":memory:",
        }
    }

    # Disable migrations for local tests only

    class DisableMigrations:

        def __contains__(self, item):

            return True

        def __getitem__(self, item):

            return None

    MIGRATION_MODULES = DisableMigrations()


# Host models used by the test suite

INSTALLED_APPS = INSTALLED_APPS + ["tests.testapp"]  # noqa: F811


# Password hashers for faster tests

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]


CATEGORIES_CONNECTOR = "apps.categories.connectors.StandardConnector"

CATEGORIES_DEFAULT_SEPARATOR = "##"


# Quieter logs while testing

LOGGING["loggers"]["apps.categories"]["level"] = "WARNING"
