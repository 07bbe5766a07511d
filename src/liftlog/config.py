"""Environment-driven settings for liftlog."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from .errors import ConfigurationError

# Default data directory (per user)
DATA_DIR = Path.home() / ".liftlog"

ENVIRONMENTS = ("development", "staging", "production")


@dataclass
class Settings:
    """Runtime settings.

    Debug output is on everywhere except production unless
    LIFTLOG_DEBUG says otherwise.
    """

    supabase_url: str = ""
    supabase_key: str = ""
    environment: str = "development"
    debug: bool = True
    data_dir: Path = field(default_factory=lambda: DATA_DIR)

    def validate(self) -> list[str]:
        """Return a list of configuration problems (empty when valid)."""
        errors = []

        if not self.supabase_url:
            errors.append("SUPABASE_URL is required")
        elif not self.supabase_url.startswith("https://"):
            errors.append("SUPABASE_URL must be a valid HTTPS URL")

        if not self.supabase_key:
            errors.append("SUPABASE_ANON_KEY is required")
        elif not self.supabase_key.startswith("eyJ"):
            # Supabase keys are JWTs
            errors.append('SUPABASE_ANON_KEY appears to be invalid (JWT tokens start with "eyJ")')

        return errors

    def require_valid(self) -> None:
        """Raises ConfigurationError if any setting is missing or malformed."""
        errors = self.validate()
        if errors:
            raise ConfigurationError("Supabase configuration errors: " + ", ".join(errors))


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings() -> Settings:
    """Load settings from the environment (and a .env file if present)."""
    load_dotenv()

    environment = os.getenv("LIFTLOG_ENV", "development").lower()
    if environment not in ENVIRONMENTS:
        environment = "development"

    data_dir = os.getenv("LIFTLOG_DATA_DIR")

    return Settings(
        supabase_url=os.getenv("SUPABASE_URL", ""),
        supabase_key=os.getenv("SUPABASE_ANON_KEY", ""),
        environment=environment,
        debug=_env_flag("LIFTLOG_DEBUG", environment != "production"),
        data_dir=Path(data_dir) if data_dir else DATA_DIR,
    )


def configure_logging(verbose: bool = False, debug: bool = False) -> None:
    """Set up root logging for command-line use.

    DEBUG with --verbose, INFO when settings enable debug output,
    WARNING otherwise.
    """
    if verbose:
        level = logging.DEBUG
    elif debug:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
