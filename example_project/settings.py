"""Minimal settings used by the test-suite and the example schema."""

from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent

SECRET_KEY = "django-gqlgraph-example"
DEBUG = True
USE_TZ = True

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django_gqlgraph",
    "example_project.kitchen_sink",
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

GQLGRAPH = {
    "types": ["example_project.kitchen_sink.schema.types"],
    "types_file": BASE_DIR / "kitchen_sink" / "types.yaml",
    "nullability": {"output": True, "input": False},
    "artifact_writer": "django_gqlgraph.artifacts.MemoryArtifactWriter",
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"console": {"class": "logging.StreamHandler"}},
    "loggers": {"django_gqlgraph": {"handlers": ["console"], "level": "WARNING"}},
}
