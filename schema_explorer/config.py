"""
Configuration module for the SQLite Schema Explorer.

This module handles:
- Database location (SQLite file path)
- Driver lock timeout
- SQLAlchemy echo for debugging
"""

import os
from dataclasses import dataclass, field
from typing import Optional, List

# Load .env file BEFORE any os.getenv calls
from dotenv import load_dotenv, find_dotenv
load_dotenv(find_dotenv(usecwd=True))


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> Optional[float]:
    """Read a float setting; None when the value is set but not a number."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return None


@dataclass
class DatabaseConfig:
    """
    SQLite database configuration.
    
    All values are loaded from environment variables unless passed explicitly.
    """
    # Path to the SQLite database file
    sqlite_path: Optional[str] = field(
        default_factory=lambda: os.getenv("DATABASE_PATH", os.getenv("SQLITE_PATH", None))
    )
    
    # Seconds the driver waits on a locked database before giving up (None if unparseable)
    busy_timeout: Optional[float] = field(
        default_factory=lambda: _env_float("SQLITE_BUSY_TIMEOUT", 5.0)
    )
    
    echo: bool = field(default_factory=lambda: _env_flag("DB_ECHO"))
    
    @property
    def connection_string(self) -> str:
        """Generate SQLAlchemy connection string for the SQLite file."""
        return f"sqlite:///{self.sqlite_path}"
    
    def is_configured(self) -> bool:
        """Check if a database path has been provided."""
        return bool(self.sqlite_path and self.sqlite_path.strip())


class AppConfig:
    """
    Main application configuration aggregator.
    """
    
    def __init__(self, database: Optional[DatabaseConfig] = None):
        self.database = database or DatabaseConfig()
    
    def validate(self) -> tuple[bool, List[str]]:
        """
        Validate all configuration settings.
        
        Returns:
            tuple: (is_valid, list of error messages)
        """
        errors = []
        
        if not self.database.is_configured():
            errors.append("Database path not configured. Set the DATABASE_PATH environment variable.")
        
        if self.database.busy_timeout is None:
            errors.append(
                f"SQLITE_BUSY_TIMEOUT must be a number, got {os.getenv('SQLITE_BUSY_TIMEOUT')!r}."
            )
        elif self.database.busy_timeout < 0:
            errors.append(f"SQLITE_BUSY_TIMEOUT must be non-negative, got {self.database.busy_timeout}.")
        
        return len(errors) == 0, errors
    
    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create configuration from environment variables."""
        return cls()


# Global configuration instance
config = AppConfig.from_env()
