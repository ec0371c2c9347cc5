"""
Process configuration.

Settings come from the environment, with a ``.env`` file filling in values
that are not set there. The agent cannot start without the agent key and
the three Google OAuth values.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import dotenv_values, find_dotenv

from .exceptions.base import ConfigError

REQUIRED_ENV_VARS = (
    "DAEMO_AGENT_API_KEY",
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
    "GOOGLE_REFRESH_TOKEN",
)

DEFAULT_GATEWAY_URL = "https://engine.daemo.ai:50052/"
DEFAULT_SERVICE_NAME = "GoogleDriveKnowledgeAgent"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class AgentSettings:
    agent_api_key: str
    google_client_id: str
    google_client_secret: str
    google_refresh_token: str
    gateway_url: str = DEFAULT_GATEWAY_URL
    service_name: str = DEFAULT_SERVICE_NAME
    log_level: str = DEFAULT_LOG_LEVEL

    def redacted(self) -> dict:
        """Settings safe to print: secrets reduced to whether they are set."""
        return {
            "agent_api_key": "set",
            "google_client_id": self.google_client_id,
            "google_client_secret": "set",
            "google_refresh_token": "set",
            "gateway_url": self.gateway_url,
            "service_name": self.service_name,
            "log_level": self.log_level,
        }


def load_settings(
        *,
        environ: Optional[Mapping[str, str]] = None,
        env_file: Optional[Union[str, Path]] = None
) -> AgentSettings:
    """
    Load settings from a .env file and the environment.

    Args:
        environ: Mapping to read instead of os.environ. When given, no .env
            file is read unless ``env_file`` is passed too.
        env_file: Explicit .env path. Defaults to the nearest .env found
            from the working directory.

    Returns:
        AgentSettings

    Raises:
        ConfigError: If any required value is missing or blank.
    """
    values = {}
    if env_file is not None or environ is None:
        dotenv_path = str(env_file) if env_file is not None else find_dotenv(usecwd=True)
        if dotenv_path:
            values.update({k: v for k, v in dotenv_values(dotenv_path).items() if v is not None})
    values.update(environ if environ is not None else os.environ)

    missing = [name for name in REQUIRED_ENV_VARS if not (values.get(name) or "").strip()]
    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    return AgentSettings(
        agent_api_key=values["DAEMO_AGENT_API_KEY"],
        google_client_id=values["GOOGLE_CLIENT_ID"],
        google_client_secret=values["GOOGLE_CLIENT_SECRET"],
        google_refresh_token=values["GOOGLE_REFRESH_TOKEN"],
        gateway_url=values.get("DAEMO_GATEWAY_URL") or DEFAULT_GATEWAY_URL,
        service_name=values.get("DRIVE_AGENT_SERVICE_NAME") or DEFAULT_SERVICE_NAME,
        log_level=(values.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
    )
