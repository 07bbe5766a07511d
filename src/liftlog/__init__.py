"""liftlog: workout and body-weight tracking with one-time local data migration."""

__version__ = "0.1.0"
