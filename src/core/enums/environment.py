"""Deployment environment, read from the ENVIRONMENT variable."""

from enum import Enum


class Environment(str, Enum):
    """Selects log rendering and whether /config is exposed.

    development: console logs, /config enabled.
    testing: pytest runs against SQLite.
    ci/production: JSON logs.
    """

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
