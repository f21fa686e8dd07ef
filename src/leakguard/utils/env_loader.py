"""Auto-load environment variables from .env file."""

from pathlib import Path
from dotenv import load_dotenv


def load_env() -> bool:
    """Load .env file from the working directory if it exists."""
    env_file = Path.cwd() / ".env"
    if env_file.exists():
        load_dotenv(env_file)
        return True
    return False
