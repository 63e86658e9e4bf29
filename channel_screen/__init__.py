"""Rule-based screening of YouTube channels and a resilient fetcher for their pages."""

__version__ = "0.1.0"
