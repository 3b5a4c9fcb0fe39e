"""snipvault — personal snippet vault with manual ordering."""

__version__ = "0.4.0"
