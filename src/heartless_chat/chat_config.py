from dataclasses import dataclass

DEFAULT_ENDPOINT = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_MODEL = "deepseek/deepseek-r1-0528:free"
DEFAULT_GREETING = "Hello! I'm your Heart Less AI. How can I help you today?"


@dataclass
class ChatConfig:
    api_key: str = ""
    endpoint: str = DEFAULT_ENDPOINT
    model: str = DEFAULT_MODEL
    referer: str = "http://localhost"
    title: str = "Heart Less Chatbot"
    request_timeout_seconds: float = 60.0
    greeting: str = DEFAULT_GREETING
    copy_acknowledgment_seconds: float = 2.0
