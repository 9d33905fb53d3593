"""Sample client for the iTwin Platform Projects API."""

__version__ = "0.1.0"
