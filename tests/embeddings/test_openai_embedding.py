"""Tests for the OpenAI-compatible embedding gateway."""

import logging
from unittest.mock import Mock

import pytest

pytest.importorskip("openai")

from chauffeur_memory.embeddings import OpenAIEmbedding, openai_embedding


@pytest.fixture
def no_xai_key(monkeypatch):
    monkeypatch.delenv("XAI_API_KEY", raising=False)
    monkeypatch.setattr(openai_embedding, "_disabled_logged", False)


@pytest.fixture
def embedder():
    """Gateway with a key and a mocked SDK client."""
    gateway = OpenAIEmbedding(model="v1", api_key="xai-test-key")
    gateway._client = Mock()
    gateway._client.embeddings.create.return_value = Mock(data=[Mock(embedding=[0.1, 0.2, 0.3])])
    return gateway


def test_defaults_to_xai_endpoint(no_xai_key):
    embedder = OpenAIEmbedding(api_key="xai-test-key")

    assert embedder.model_name == "v1"
    assert embedder.available
    assert str(embedder._client.base_url).startswith("https://api.x.ai/v1")


def test_api_key_from_environment(monkeypatch):
    monkeypatch.setenv("XAI_API_KEY", "xai-from-env")

    embedder = OpenAIEmbedding()

    assert embedder.available


@pytest.mark.asyncio
async def test_without_key_returns_none_and_logs_once(no_xai_key, caplog):
    embedder = OpenAIEmbedding()
    assert not embedder.available

    with caplog.at_level(logging.INFO, logger="chauffeur_memory.embeddings.openai_embedding"):
        assert await embedder.embed_document("Client Ana: hello") is None
        assert await embedder.embed_query("hello") is None

    disabled = [r for r in caplog.records if "Embeddings disabled" in r.getMessage()]
    assert len(disabled) == 1
    assert disabled[0].levelno == logging.INFO


@pytest.mark.asyncio
async def test_disabled_notice_logged_once_per_process(no_xai_key, caplog):
    with caplog.at_level(logging.INFO, logger="chauffeur_memory.embeddings.openai_embedding"):
        assert await OpenAIEmbedding().embed("first gateway") is None
        assert await OpenAIEmbedding().embed("second gateway") is None

    disabled = [r for r in caplog.records if "Embeddings disabled" in r.getMessage()]
    assert len(disabled) == 1


@pytest.mark.asyncio
async def test_embed_returns_vector(embedder):
    vector = await embedder.embed("Client Ana preference: still water")

    assert vector == [0.1, 0.2, 0.3]
    embedder._client.embeddings.create.assert_called_once_with(
        model="v1", input="Client Ana preference: still water"
    )


@pytest.mark.asyncio
async def test_dimensions_are_passed_through():
    embedder = OpenAIEmbedding(model="text-embedding-3-small", api_key="sk-test", dimensions=256)
    embedder._client = Mock()
    embedder._client.embeddings.create.return_value = Mock(data=[Mock(embedding=[0.0] * 256)])

    await embedder.embed_query("airport pickup")

    kwargs = embedder._client.embeddings.create.call_args.kwargs
    assert kwargs["dimensions"] == 256


@pytest.mark.asyncio
async def test_empty_text_is_not_sent(embedder):
    assert await embedder.embed("   ") is None
    embedder._client.embeddings.create.assert_not_called()


@pytest.mark.asyncio
async def test_provider_error_returns_none(embedder):
    embedder._client.embeddings.create.side_effect = RuntimeError("503 Service Unavailable")

    assert await embedder.embed_document("Trip for Ana") is None
