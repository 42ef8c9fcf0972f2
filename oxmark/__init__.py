"""oxmark: bookmark filesystem paths and jump back to them from a terminal browser."""

__version__ = "0.1.0"
