"""Process configuration for toolbot.

BotConfig is read from a TOML file and then overridden from the
environment:

- ``TOOLBOT_CONFIG``: path of the config file.  Defaults to
  ``$XDG_CONFIG_HOME/toolbot/config.toml`` (``~/.config/...``).
- ``OPENAI_API_KEY``, ``OPENAI_MODEL``, ``OPENAI_BASE_URL``: override the
  matching ``openai_*`` keys.
- ``OPENAI_PARALLEL_TOOL_CALLS``: any non-empty value enables parallel tool
  calls, an empty value disables them.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ValidationError

from toolbot.exceptions import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from toolbot.llm.client import OpenAIClient

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TOOLBOT_CONFIG"
APP_NAME = "toolbot"


class BotConfig(BaseModel):
    """Credential, model and tool-calling settings."""

    openai_api_key: str
    openai_model: str = "o1"
    openai_base_url: Optional[str] = None
    parallel_tool_calls: Optional[bool] = None

    def openai_client(self) -> OpenAIClient:
        from toolbot.llm.client import OpenAIClient

        return OpenAIClient(
            api_key=self.openai_api_key,
            base_url=self.openai_base_url,
            default_model=self.openai_model,
        )


def config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Resolve the config file location."""
    env = os.environ if environ is None else environ
    explicit = env.get(CONFIG_ENV_VAR)
    if explicit:
        return Path(explicit)
    base = env.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / APP_NAME / "config.toml"


def load_config(environ: Mapping[str, str] | None = None) -> BotConfig:
    """Load BotConfig from the config file and environment.

    Args:
        environ: Environment mapping; defaults to ``os.environ``.

    Raises:
        ConfigError: If the file is not valid TOML or the merged settings
            fail validation (e.g. no API key anywhere).
    """
    env = os.environ if environ is None else environ
    path = config_path(env)

    logger.info("checking for config at %s", path)
    data: dict = {}
    if path.exists():
        logger.info("loading config from %s", path)
        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"Cannot read config {path}: {exc}") from exc

    if "OPENAI_API_KEY" in env:
        data["openai_api_key"] = env["OPENAI_API_KEY"]
    if "OPENAI_MODEL" in env:
        data["openai_model"] = env["OPENAI_MODEL"]
    if "OPENAI_BASE_URL" in env:
        data["openai_base_url"] = env["OPENAI_BASE_URL"]
    if "OPENAI_PARALLEL_TOOL_CALLS" in env:
        data["parallel_tool_calls"] = bool(env["OPENAI_PARALLEL_TOOL_CALLS"])

    try:
        return BotConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
