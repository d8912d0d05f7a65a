from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from heartless_chat.chat_config import (
    DEFAULT_ENDPOINT,
    DEFAULT_GREETING,
    DEFAULT_MODEL,
    ChatConfig,
)

API_KEY_ENV_VAR = "OPENROUTER_API_KEY"


@dataclass
class RuntimeEnv:
    api_key: str
    api_key_env_var: str


@dataclass
class AppConfig:
    endpoint: str
    model: str
    referer: str
    title: str
    request_timeout_seconds: float
    copy_acknowledgment_seconds: float
    greeting: str
    console_log_level: str | None
    log_file: str | None
    file_log_level: str

    def to_chat_config(self, env: RuntimeEnv) -> ChatConfig:
        return ChatConfig(
            api_key=env.api_key,
            endpoint=self.endpoint,
            model=self.model,
            referer=self.referer,
            title=self.title,
            request_timeout_seconds=self.request_timeout_seconds,
            greeting=self.greeting,
            copy_acknowledgment_seconds=self.copy_acknowledgment_seconds,
        )


def load_json_config() -> dict:
    config_path = Path.cwd() / "config.json"
    if config_path.exists():
        with open(config_path) as f:
            return json.load(f)
    return {}


def _positive_float(value: object, name: str) -> float:
    number = float(value)
    if number <= 0:
        raise ValueError(f"{name} must be positive, got {value!r}")
    return number


def _optional_str(value: object) -> str | None:
    # null or "" in config.json switches the sink off.
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_app_config(config: dict) -> AppConfig:
    return AppConfig(
        endpoint=str(config.get("Endpoint", DEFAULT_ENDPOINT)).strip(),
        model=str(config.get("Model", DEFAULT_MODEL)).strip(),
        referer=str(config.get("Referer", "http://localhost")).strip(),
        title=str(config.get("Title", "Heart Less Chatbot")),
        request_timeout_seconds=_positive_float(
            config.get("RequestTimeoutSeconds", 60), "RequestTimeoutSeconds"
        ),
        copy_acknowledgment_seconds=_positive_float(
            config.get("CopyAcknowledgmentSeconds", 2), "CopyAcknowledgmentSeconds"
        ),
        greeting=str(config.get("Greeting", DEFAULT_GREETING)),
        console_log_level=_optional_str(config.get("ConsoleLogLevel", "WARNING")),
        log_file=_optional_str(config.get("LogFile", "chat.log")),
        file_log_level=str(config.get("LogLevel", "INFO")),
    )


def resolve_runtime_env() -> RuntimeEnv:
    return RuntimeEnv(
        api_key=os.environ.get(API_KEY_ENV_VAR, "").strip(),
        api_key_env_var=API_KEY_ENV_VAR,
    )
