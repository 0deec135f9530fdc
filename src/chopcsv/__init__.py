"""Split dated CSV files into bzip2-compressed year/month/day partitions."""

__version__ = "0.1.0"

__all__ = ["__version__"]
