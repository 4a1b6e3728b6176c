"""HTTP server remembering the world-best score for about a week."""

__version__ = "1.0.0"
