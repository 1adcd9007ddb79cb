"""Output and error reporting for the rover command line client."""

__version__ = "0.1.0"
