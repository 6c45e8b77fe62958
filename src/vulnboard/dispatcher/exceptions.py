"""Exceptions for the Command Dispatcher."""


class DispatchError(Exception):
    """Base exception for dispatcher errors."""

    pass


class UnknownCommandError(DispatchError):
    """No handler is registered for the given command model."""

    pass
