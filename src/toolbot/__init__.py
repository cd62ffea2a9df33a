"""toolbot: an autonomous agent driven through typed tool calls.

Capabilities are registered with typed inputs and outputs, exposed to an
OpenAI-compatible model as strict function-calling tools, and dispatched
with failures reported back to the model as data.
"""

__version__ = "0.1.0"

from toolbot.agent import run_agent
from toolbot.config import BotConfig, load_config
from toolbot.exceptions import (
    CapabilityConflictError,
    CapabilityError,
    ConfigError,
    DispatchError,
    OrchestratorError,
    ProtocolError,
    TerminationSignalError,
    ToolbotError,
    ToolDecodeError,
    ToolHandlerError,
    ToolNotFoundError,
)
from toolbot.memory import WorkingMemory
from toolbot.orchestrator import AgentStepper, Driver, StepResult, TerminationSignal
from toolbot.protocols import ChatResponse, Message, ResponseMessage, ToolCall
from toolbot.toolkit import (
    Capability,
    CapabilityRegistry,
    Dispatcher,
    ToolDefinition,
    sanitize_schema,
)

__all__ = [
    "__version__",
    "run_agent",
    # Config
    "BotConfig",
    "load_config",
    # Toolkit
    "Capability",
    "CapabilityRegistry",
    "Dispatcher",
    "ToolDefinition",
    "sanitize_schema",
    # Conversation
    "ChatResponse",
    "Message",
    "ResponseMessage",
    "ToolCall",
    "WorkingMemory",
    # Orchestration
    "AgentStepper",
    "Driver",
    "StepResult",
    "TerminationSignal",
    # Errors
    "ToolbotError",
    "ConfigError",
    "CapabilityConflictError",
    "CapabilityError",
    "DispatchError",
    "ToolNotFoundError",
    "ToolDecodeError",
    "ToolHandlerError",
    "ProtocolError",
    "TerminationSignalError",
    "OrchestratorError",
]
