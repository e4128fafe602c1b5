"""Text and document to speech conversion backend."""

__version__ = "0.1.0"
