"""LINE to OpenAI chat relay shared library."""

__version__ = "0.1.0"
