#!/usr/bin/env python3
"""
Configuration module for the OpenAI chat relay.
Loads settings from a YAML file and initializes logging with Pydantic validation.
"""

import os
import sys
import logging
from typing import Dict, Any, Optional

import yaml
from pydantic import BaseModel, ValidationError

from src.shared.constants import (
    DEFAULT_MAX_COMPLETION_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    OPENAI_BASE_URL,
)

CONFIG_FILE = os.environ.get("RELAY_CONFIG_FILE", "config.yml")


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 5555
    log_level: str = "INFO"
    http_log_level: str = "INFO"


class OpenAIConfig(BaseModel):
    base_url: str = OPENAI_BASE_URL
    api_key_env: str = "OPENAI_API_KEY"
    default_model: str = DEFAULT_MODEL
    default_temperature: float = DEFAULT_TEMPERATURE
    default_max_completion_tokens: int = DEFAULT_MAX_COMPLETION_TOKENS
    timeout: float = 600.0


class RequestProxyConfig(BaseModel):
    enabled: bool = False
    url: Optional[str] = None


def load_config(config_file: str = CONFIG_FILE) -> Dict[str, Any]:
    """Load and validate configuration with Pydantic models."""
    try:
        with open(config_file, encoding="utf-8") as file:
            config_data = yaml.safe_load(file) or {}
    except FileNotFoundError:
        print(f"Configuration file {config_file} not found, using defaults. "
              "See config.yml.example for the available settings.")
        config_data = {}
    except yaml.YAMLError as e:
        print(f"Error in configuration: {e}")
        sys.exit(1)

    # Environment variable override for the upstream base URL
    if "OPENAI_BASE_URL" in os.environ:
        config_data.setdefault("openai", {})["base_url"] = os.environ["OPENAI_BASE_URL"]

    try:
        config_data["server"] = ServerConfig(**(config_data.get("server") or {})).model_dump()
        config_data["openai"] = OpenAIConfig(**(config_data.get("openai") or {})).model_dump()
        config_data["requestProxy"] = RequestProxyConfig(
            **(config_data.get("requestProxy") or {})
        ).model_dump()
    except ValidationError as e:
        print(f"Error in configuration: {e}")
        sys.exit(1)

    return config_data


def setup_logging(config_: Dict[str, Any]) -> logging.Logger:
    """Configure logging based on validated configuration."""
    log_level = config_["server"]["log_level"]
    log_level_int = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level_int,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger_ = logging.getLogger("openai-relay")
    logger_.info("Logging level set to %s", log_level)
    return logger_


# Load and validate configuration once at startup
config = load_config()
logger = setup_logging(config)
