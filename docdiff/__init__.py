"""Document Comparison Explorer core: alignment index, outline aggregation, paragraph matching."""

__version__ = "0.1.0"
