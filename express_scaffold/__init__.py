"""express-scaffold: bootstrap Express services with an optional data-access layer."""

__version__ = "0.1.0"
