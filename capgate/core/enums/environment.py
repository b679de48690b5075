"""Deployment environment.

Only DEVELOPMENT changes behavior: the container selects the colored
console renderer there and JSON everywhere else.
"""

from enum import Enum


class Environment(str, Enum):
    """Where capgate is running (``CAPGATE_ENVIRONMENT``)."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
