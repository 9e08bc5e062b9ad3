"""Exceptions raised by the notifier."""


class NotifierError(Exception):
    """Base class for notifier errors."""


class MissingConfigurationError(NotifierError):
    """A required input or piece of run context was not supplied."""
