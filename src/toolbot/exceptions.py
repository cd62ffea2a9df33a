"""Toolbot exception hierarchy.

All toolbot-specific exceptions inherit from ToolbotError.
"""


class ToolbotError(Exception):
    """Base exception for all toolbot errors."""


class ConfigError(ToolbotError):
    """Raised when configuration cannot be loaded or validated."""


class CapabilityConflictError(ToolbotError):
    """Raised when a capability name is already registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Capability already registered: {name}. "
            f"Pass replace=True to overwrite it."
        )


class CapabilityError(ToolbotError):
    """Domain failure raised by a capability handler.

    The message is reported to the model verbatim as the ``Err`` value.
    """


class DispatchError(ToolbotError):
    """Base for failures that happen while dispatching a tool call.

    Never escapes the dispatcher; rendered as ``{"Err": message}``.
    """


class ToolNotFoundError(DispatchError):
    """Raised when a tool call names an unregistered capability."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool not found: {name}")


class ToolDecodeError(DispatchError):
    """Raised when tool arguments do not satisfy the input contract."""


class ToolHandlerError(DispatchError):
    """Raised when a capability handler fails."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ProtocolError(ToolbotError):
    """Raised when a model response violates the tool-calling protocol.

    Examples: no choices at all, or no ``tool_calls`` field while tool
    invocation was required.
    """


class TerminationSignalError(ToolbotError):
    """Raised when a termination signal is written more than once."""


class OrchestratorError(ToolbotError):
    """Raised when the driver encounters an unrecoverable error."""
