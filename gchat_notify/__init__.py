"""Google Chat notifications for GitHub workflow validation results."""

__version__ = "0.1.0"
