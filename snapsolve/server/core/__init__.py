"""Server configuration and constants."""
