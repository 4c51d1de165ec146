"""Link-preview front for archive works."""

__version__ = "0.1.0"
