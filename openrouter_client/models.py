"""
Model names accepted by create_chat_completion.

Callers may pass either a full OpenRouter model id ("openai/gpt-4o") or one
of the short aliases below.
"""

from typing import Dict

MODEL_ALIASES: Dict[str, str] = {
    "gpt-4o": "openai/gpt-4o",
    "gpt-4o-mini": "openai/gpt-4o-mini",
    "gpt-4.1": "openai/gpt-4.1",
    "gpt-4.1-mini": "openai/gpt-4.1-mini",
    "o3-mini": "openai/o3-mini",
    "claude-3.5-sonnet": "anthropic/claude-3.5-sonnet",
    "claude-3.7-sonnet": "anthropic/claude-3.7-sonnet",
    "claude-sonnet-4": "anthropic/claude-sonnet-4",
    "claude-3.5-haiku": "anthropic/claude-3.5-haiku",
    "gemini-2.0-flash": "google/gemini-2.0-flash-001",
    "gemini-2.5-pro": "google/gemini-2.5-pro",
    "gemini-2.5-flash": "google/gemini-2.5-flash",
    "llama-3.1-70b": "meta-llama/llama-3.1-70b-instruct",
    "llama-3.3-70b": "meta-llama/llama-3.3-70b-instruct",
    "mistral-large": "mistralai/mistral-large",
    "deepseek-chat": "deepseek/deepseek-chat",
    "deepseek-r1": "deepseek/deepseek-r1",
    "grok-3": "x-ai/grok-3",
    "qwen-2.5-72b": "qwen/qwen-2.5-72b-instruct",
}

SUPPORTED_MODELS = frozenset(MODEL_ALIASES.values())


def resolve_model(name: str) -> str:
    return MODEL_ALIASES.get(name, name)


def supports_model(name: str) -> bool:
    return resolve_model(name) in SUPPORTED_MODELS
