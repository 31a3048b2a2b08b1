"""Trade Journal - personal trading journal with portfolio analytics."""

__version__ = "0.1.0"
