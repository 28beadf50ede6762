"""CloudAuth - member signup, login and refresh-token rotation service."""

__version__ = "0.1.0"

__all__ = ["__version__"]
