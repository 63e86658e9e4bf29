"""Configuration management for channel-screen.

Loads settings from environment variables and .env file.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
PROJECT_ROOT = Path(__file__).parent.parent
ENV_FILE = PROJECT_ROOT / ".env"

if ENV_FILE.exists():
    load_dotenv(ENV_FILE)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)
DEFAULT_ACCEPT_LANGUAGE = "de,de-DE;q=1.0,en;q=0.5"


class Config:
    """Application configuration."""

    # Fetcher pacing (milliseconds)
    FETCH_MIN_INTERVAL_MS: float = float(os.getenv("FETCH_MIN_INTERVAL_MS", "1500"))
    FETCH_JITTER_MS: float = float(os.getenv("FETCH_JITTER_MS", "500"))

    # Fetcher retries and timeouts
    FETCH_MAX_RETRIES: int = int(os.getenv("FETCH_MAX_RETRIES", "3"))
    FETCH_TIMEOUT_MS: float = float(os.getenv("FETCH_TIMEOUT_MS", "25000"))
    FETCH_BACKOFF_BASE_MS: float = float(os.getenv("FETCH_BACKOFF_BASE_MS", "500"))
    FETCH_BACKOFF_CAP_MS: float = float(os.getenv("FETCH_BACKOFF_CAP_MS", "30000"))

    # Content guard: how much of a response body is scanned for block markers
    FETCH_GUARD_SCAN_CHARS: int = int(os.getenv("FETCH_GUARD_SCAN_CHARS", "200000"))

    # Request headers
    FETCH_USER_AGENT: str = os.getenv("FETCH_USER_AGENT", DEFAULT_USER_AGENT)
    FETCH_ACCEPT_LANGUAGE: str = os.getenv("FETCH_ACCEPT_LANGUAGE", DEFAULT_ACCEPT_LANGUAGE)

    # Check thresholds
    HARD_PHRASE_THRESHOLD: int = int(os.getenv("HARD_PHRASE_THRESHOLD", "2"))
    MAX_FLAGGED_CHARS_PER_FIELD: int = int(os.getenv("MAX_FLAGGED_CHARS_PER_FIELD", "3"))
    MIN_GERMAN_WORDS_DISTINCT: int = int(os.getenv("MIN_GERMAN_WORDS_DISTINCT", "5"))
    TOPIC_THRESHOLD: int = int(os.getenv("TOPIC_THRESHOLD", "3"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of warnings/errors
        """
        warnings = []

        if cls.FETCH_MIN_INTERVAL_MS < 1000:
            warnings.append(
                f"FETCH_MIN_INTERVAL_MS={cls.FETCH_MIN_INTERVAL_MS:g} is below 1s - "
                "YouTube is likely to answer with captcha pages."
            )

        if cls.FETCH_JITTER_MS < 0:
            warnings.append("FETCH_JITTER_MS is negative - jitter will be disabled.")

        if cls.FETCH_MAX_RETRIES < 0:
            warnings.append("FETCH_MAX_RETRIES is negative - treated as 0 (single attempt).")

        if cls.FETCH_TIMEOUT_MS <= 0:
            warnings.append("FETCH_TIMEOUT_MS must be positive.")

        if cls.FETCH_BACKOFF_CAP_MS < cls.FETCH_BACKOFF_BASE_MS:
            warnings.append("FETCH_BACKOFF_CAP_MS is smaller than FETCH_BACKOFF_BASE_MS.")

        return warnings

    @classmethod
    def print_status(cls):
        """Print configuration status."""
        from rich.console import Console
        from rich.table import Table

        console = Console()

        table = Table(title="Channel Screen Configuration")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="yellow")

        # Fetcher
        table.add_row("Min Interval", f"{cls.FETCH_MIN_INTERVAL_MS:g} ms")
        table.add_row("Jitter", f"{cls.FETCH_JITTER_MS:g} ms")
        table.add_row("Max Retries", str(cls.FETCH_MAX_RETRIES))
        table.add_row("Timeout", f"{cls.FETCH_TIMEOUT_MS:g} ms")
        table.add_row(
            "Backoff",
            f"{cls.FETCH_BACKOFF_BASE_MS:g} ms x 2^n (cap {cls.FETCH_BACKOFF_CAP_MS:g} ms)",
        )
        table.add_row("Guard Scan", f"{cls.FETCH_GUARD_SCAN_CHARS} chars")

        # Checks
        table.add_row("Hard Phrase Threshold", str(cls.HARD_PHRASE_THRESHOLD))
        table.add_row("Max Flagged Chars / Field", str(cls.MAX_FLAGGED_CHARS_PER_FIELD))
        table.add_row("Min German Words", str(cls.MIN_GERMAN_WORDS_DISTINCT))
        table.add_row("Topic Threshold", str(cls.TOPIC_THRESHOLD))

        console.print(table)

        # Print warnings
        warnings = cls.validate()
        if warnings:
            console.print("\n[yellow]Warnings:[/yellow]")
            for warning in warnings:
                console.print(f"  ⚠️  {warning}")


# Singleton instance
config = Config()
