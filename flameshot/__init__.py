"""Screenshot tool core: command-line parsing, capture requests, screens, shortcuts and settings."""

__version__ = "0.1.0"