# adocfinder/__init__.py
"""adocfinder: locate AsciiDoc source documents for documentation builds."""

__version__ = "0.3.0"
