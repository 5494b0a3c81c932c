"""Configuration management for the streaming chat client."""

import codecs
import os
from typing import Any

import yaml
from dotenv import load_dotenv

BASE_URL_ENV = "CHAT_CLIENT_BASE_URL"


class Configuration:
    """Manages configuration and environment variables for the chat client."""

    def __init__(self, config_path: str | None = None) -> None:
        """Initialize configuration from YAML and environment variables."""
        self.load_env()  # Load .env for endpoint overrides
        self.config_path = config_path or os.path.join(
            os.path.dirname(__file__), "config.yaml"
        )
        self._config = self._load_yaml_config()

    @staticmethod
    def load_env() -> None:
        """Load environment variables from .env file."""
        load_dotenv()

    def _load_yaml_config(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        with open(self.config_path) as file:
            config = yaml.safe_load(file)
            if not isinstance(config, dict):
                raise ValueError(
                    f"Config file must be YAML dict, got {type(config)}"
                )
            return config

    def get_client_config(self) -> dict[str, Any]:
        """Get chat client configuration from YAML.

        The base URL may be overridden by the CHAT_CLIENT_BASE_URL
        environment variable.

        Returns:
            Client configuration dictionary with validated values.

        Raises:
            ValueError: If required client parameters are missing or invalid.
        """
        client_config = self._config.get("client", {})

        required_keys = ["base_url", "endpoint", "default_agent", "error_message"]
        for key in required_keys:
            if key not in client_config:
                raise ValueError(
                    f"client.{key} must be explicitly configured in config.yaml"
                )

        # Create new dictionary without mutating the original
        result_config = {
            "agents": {},
            "greeting": None,
            "fallback_agent_label": "Azure",
            **client_config,
        }

        base_url = os.getenv(BASE_URL_ENV) or result_config["base_url"]
        if not isinstance(base_url, str) or not base_url.startswith(
            ("http://", "https://")
        ):
            raise ValueError(
                f"client.base_url must be an http(s) URL, got {base_url!r}"
            )
        result_config["base_url"] = base_url

        if not str(result_config["endpoint"]).startswith("/"):
            raise ValueError("client.endpoint must start with '/'")

        if not result_config["default_agent"]:
            raise ValueError("client.default_agent must be a non-empty string")

        if not isinstance(result_config["agents"], dict):
            raise ValueError("client.agents must be a mapping of agent to label")

        return result_config

    def get_http_client_config(self) -> dict[str, Any]:
        """Get HTTP client timeout configuration from YAML.

        Returns:
            HTTP client configuration dictionary with validated values.

        Raises:
            ValueError: If required HTTP client parameters are missing or invalid.
        """
        http_config = self._config.get("http_client", {})

        required_keys = [
            "connect_timeout", "read_timeout", "write_timeout", "pool_timeout"
        ]
        for key in required_keys:
            if key not in http_config:
                raise ValueError(
                    f"http_client.{key} must be explicitly configured "
                    "in config.yaml"
                )
            value = http_config[key]
            if not isinstance(value, int | float) or value <= 0:
                raise ValueError(f"http_client.{key} must be positive")

        return {key: float(http_config[key]) for key in required_keys}

    def get_streaming_config(self) -> dict[str, Any]:
        """Get streaming configuration from YAML.

        Returns:
            Streaming configuration dictionary.

        Raises:
            ValueError: If the configured encoding is unknown.
        """
        streaming_config = {"encoding": "utf-8", **self._config.get("streaming", {})}

        try:
            codecs.getincrementaldecoder(streaming_config["encoding"])
        except LookupError as e:
            raise ValueError(
                f"streaming.encoding '{streaming_config['encoding']}' is not "
                "a known text encoding"
            ) from e

        return streaming_config

    def get_logging_config(self) -> dict[str, Any]:
        """Get logging configuration from YAML.

        Returns:
            Logging configuration dictionary.
        """
        return {"level": "INFO", **self._config.get("logging", {})}
