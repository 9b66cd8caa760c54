from types import SimpleNamespace

import pytest

from barsh import llm
from barsh.hooks import override
from barsh.config import Settings
from barsh.errors import ConfigError


def delta_chunk(content):
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=content))])


class FakeStream:
    def __init__(self, chunks):
        self.chunks = iter(chunks)
        self.closed = False

    def __iter__(self):
        return self.chunks

    def close(self):
        self.closed = True


class FakeOpenAI:
    instances = []

    def __init__(self, base_url, api_key):
        self.base_url, self.api_key = base_url, api_key
        self.requests = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self.create))
        FakeOpenAI.instances.append(self)

    def create(self, **kwargs):
        self.requests.append(kwargs)
        self.stream = FakeStream([delta_chunk("ls\n"), SimpleNamespace(choices=[]), delta_chunk(None), delta_chunk("pwd")])
        return self.stream


@pytest.fixture
def fake_openai(monkeypatch):
    FakeOpenAI.instances = []
    monkeypatch.setattr(llm.openai, "OpenAI", FakeOpenAI)
    return FakeOpenAI


@pytest.mark.parametrize("name, expected", [
    ("g", "groq"), ("groq", "groq"), ("O", "openai"),
    ("a", "anthropic"), ("l", "local"), ("local", "local"),
])
def test_resolve_endpoint(name, expected):
    assert llm.resolve_endpoint(name).name == expected


def test_unknown_endpoint():
    with pytest.raises(ConfigError, match="unknown endpoint 'x'"):
        llm.resolve_endpoint("x")


def test_missing_api_key():
    with pytest.raises(ConfigError, match="No GROQ_API_KEY env variable set"):
        llm.api_key_for(llm.ENDPOINTS["groq"], environ={})


def test_local_needs_no_key():
    assert llm.api_key_for(llm.ENDPOINTS["local"], environ={})


def test_invoke_llm_streams_text_deltas(fake_openai, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    settings = Settings(query="list files", endpoint="openai")
    messages = [{"role": "user", "content": "list files"}]

    chunks = list(llm.invoke_llm(settings, messages))

    assert chunks == ["ls\n", "pwd"]
    client = fake_openai.instances[0]
    assert client.base_url == "https://api.openai.com/v1"
    assert client.api_key == "sk-test"
    assert client.requests == [{"model": "gpt-4o-mini", "messages": messages, "stream": True}]


def test_invoke_llm_uses_model_override(fake_openai):
    settings = Settings(query="q", endpoint="local", model="qwen2.5")
    list(llm.invoke_llm(settings, []))
    assert fake_openai.instances[0].requests[0]["model"] == "qwen2.5"


def test_invoke_llm_is_overridable():
    @override
    def invoke_llm(settings, messages):
        yield "echo plugin\n"

    assert list(llm.invoke_llm(Settings(query="q"), [])) == ["echo plugin\n"]


def test_closing_the_generator_closes_the_http_stream(fake_openai):
    gen = llm.invoke_llm(Settings(query="q", endpoint="local"), [])
    assert next(gen) == "ls\n"
    gen.close()
    assert fake_openai.instances[0].stream.closed


def test_finished_stream_is_closed(fake_openai):
    list(llm.invoke_llm(Settings(query="q", endpoint="local"), []))
    assert fake_openai.instances[0].stream.closed
