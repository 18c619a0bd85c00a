"""Podcast domain -- models, directory search, and command collaborators."""
