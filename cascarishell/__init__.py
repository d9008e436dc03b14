"""Line parsing, expansion, command grouping and built-in commands for a small shell."""

__version__ = "0.1.0"