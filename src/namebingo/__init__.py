"""namebingo — randomized name bingo cards rendered as HTML."""

__version__ = "0.3.0"
