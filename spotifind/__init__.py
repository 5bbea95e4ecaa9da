"""Browse a song dataset by genre, artist and tempo, and build playlists."""

__version__ = "1.0.0"
__all__ = ["__version__"]