import logging
import os
from dataclasses import dataclass
from typing import Iterator, Optional

import openai

from barsh.errors import ConfigError
from barsh.hooks import overridable

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Endpoint:
    name: str
    base_url: str
    default_model: str
    env_key: Optional[str] = None  # None: no key needed


ENDPOINTS = {
    "groq": Endpoint("groq", "https://api.groq.com/openai/v1", "llama-3.1-8b-instant", "GROQ_API_KEY"),
    "openai": Endpoint("openai", "https://api.openai.com/v1", "gpt-4o-mini", "OPENAI_API_KEY"),
    "anthropic": Endpoint("anthropic", "https://api.anthropic.com/v1/", "claude-3-5-haiku-latest", "ANTHROPIC_API_KEY"),
    "local": Endpoint("local", "http://localhost:11434/v1", "llama3.2"),
}
ALIASES = {"g": "groq", "o": "openai", "a": "anthropic", "l": "local"}
DEFAULT_ENDPOINT = "groq"


def resolve_endpoint(name: str) -> Endpoint:
    key = ALIASES.get(name.lower(), name.lower())
    if key not in ENDPOINTS:
        choices = ", ".join(f"{n} ({n[0]})" for n in ENDPOINTS)
        raise ConfigError(f"unknown endpoint '{name}', pick one of: {choices}")
    return ENDPOINTS[key]


def api_key_for(endpoint: Endpoint, environ=None) -> str:
    environ = os.environ if environ is None else environ
    if endpoint.env_key is None:
        return "not-needed"  # local servers ignore it, the sdk just wants something
    key = environ.get(endpoint.env_key)
    if not key:
        raise ConfigError(f"No {endpoint.env_key} env variable set")
    return key


def make_client(endpoint: Endpoint, environ=None) -> openai.OpenAI:
    return openai.OpenAI(base_url=endpoint.base_url, api_key=api_key_for(endpoint, environ))


@overridable
def invoke_llm(settings, messages) -> Iterator[str]:
    '''
    Streams the completion for `messages` as text chunks.
    Override this (see `barsh.hooks`) to plug in a different source.
    '''
    endpoint = resolve_endpoint(settings.endpoint)
    client = make_client(endpoint)
    model = settings.model or endpoint.default_model
    log.info("requesting %s from %s", model, endpoint.base_url)

    stream = client.chat.completions.create(
        model=model,
        messages=messages,
        stream=True,
    )

    try:
        for chunk in stream:
            delta = chunk.choices[0].delta if chunk.choices else None
            if delta and delta.content:
                yield delta.content
    finally:
        # also runs when the consumer closes us early
        stream.close()
