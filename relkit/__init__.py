"""relkit - clean, cross-compile and publish Go command releases."""

__version__ = "0.3.0"
