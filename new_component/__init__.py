"""new-component -- scaffold React components from the command line."""

__version__ = "0.1.0"
