"""structscan — heuristic structural inventory of Python source files."""

__version__ = "0.1.0"
