"""Product and user record services with a small API gateway."""

__version__ = "1.0.0"
