"""Gallery Feed - shuffled JSON listing of gallery images."""

__version__ = "1.0.0"
