"""castbot -- podcast follow/search bot for Bot Framework channels."""

__version__ = "1.0.0"
