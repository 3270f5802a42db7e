"""slashterm - a terminal front end for a locally served LLM."""

__version__ = "0.1.0"
