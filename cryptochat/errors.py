"""
Error taxonomy for the chat service.

Every failure a caller can see derives from ``ChatError`` and carries the HTTP
status it maps to. An insufficient balance on ``remove_holding`` is not an
error: the portfolio store answers it with a plain message.
"""

from typing import Optional


class ChatError(Exception):
    """Base class for failures that are reported to the caller."""

    status_code: int = 500
    default_message: str = "An internal server error occurred."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(ChatError):
    """Required request input is missing."""

    status_code = 400
    default_message = "Message is required."


class UnsupportedCoinError(ChatError):
    """The coin symbol has no provider identifier."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Cryptocurrency '{symbol}' not supported.")


class UpstreamError(ChatError):
    """The market data provider failed or returned a malformed payload."""


class ToolNotImplementedError(ChatError):
    """The model requested a function that is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Function '{name}' is not implemented.")


class MissingArgumentError(ChatError):
    """A required tool argument was not supplied by the model."""

    def __init__(self, argument: str, function_name: str):
        self.argument = argument
        self.function_name = function_name
        super().__init__(
            f"Missing required '{argument}' argument for function '{function_name}'"
        )


class InvalidArgumentError(ChatError):
    """A tool argument has the wrong type for its declared parameter."""

    def __init__(self, argument: str, function_name: str, expected: str):
        self.argument = argument
        self.function_name = function_name
        super().__init__(
            f"Invalid '{argument}' argument for function '{function_name}': expected {expected}"
        )


class InvalidAmountError(ChatError):
    """A holding amount is not a finite positive number."""

    def __init__(self, amount: object):
        self.amount = amount
        super().__init__(f"Invalid amount '{amount}': amount must be a positive number.")


class InternalError(ChatError):
    """Anything unexpected, reported with a generic message."""
