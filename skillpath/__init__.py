"""skillpath - reliable LLM-generated learning content."""

__version__ = "1.0.0"
