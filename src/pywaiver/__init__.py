"""Rank the best unrostered fantasy players using scraped value tables."""

__version__ = "0.1.0"
