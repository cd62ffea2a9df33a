"""Agent Toolkit: typed capabilities exposed to the model as tools.

Provides capability registration, backend-safe JSON schemas, and a
dispatcher that turns tool calls into ``{"Ok": ...}`` / ``{"Err": ...}``
results.
"""

from toolbot.toolkit.dispatcher import Dispatcher
from toolbot.toolkit.models import Capability, RegisteredCapability, ToolDefinition
from toolbot.toolkit.registry import CapabilityRegistry
from toolbot.toolkit.schema import (
    DEFAULT_PASSES,
    forbid_additional_properties,
    remove_format,
    sanitize_schema,
)

__all__ = [
    "Capability",
    "CapabilityRegistry",
    "Dispatcher",
    "RegisteredCapability",
    "ToolDefinition",
    "DEFAULT_PASSES",
    "forbid_additional_properties",
    "remove_format",
    "sanitize_schema",
]
