"""Tests for translation history, the translator session and the OpenRouter client."""

import json

import httpx
import pytest

from sangam.shared.core.configuration import TranslationConfig
from sangam.shared.domain.models import TranslationHistoryItem
from sangam.shared.domain.translation import (
    INPUT_ERROR_KEY,
    TRANSLATION_ERROR_KEY,
    TranslationHistory,
    TranslatorSession,
)
from sangam.shared.infrastructure.llm import OpenRouterTranslator, ProviderFactory, TranslationError
from sangam.shared.infrastructure.persistence import KEY_TRANSLATION_HISTORY

from tests.conftest import put_raw
from tests.fakes import FakeTranslator, failing_translator


def item(n: int) -> TranslationHistoryItem:
    return TranslationHistoryItem(input=f"in {n}", output=f"out {n}", source="en", target="hi")


# --- History -----------------------------------------------------------------

def test_history_keeps_three_most_recent_first(local_store):
    history = TranslationHistory(local_store)
    for n in range(1, 5):
        history.add(item(n))

    assert [entry.input for entry in history.items] == ["in 4", "in 3", "in 2"]
    stored = local_store.read(KEY_TRANSLATION_HISTORY)
    assert [entry["input"] for entry in stored] == ["in 4", "in 3", "in 2"]
    assert stored[0] == {"input": "in 4", "output": "out 4", "source": "en", "target": "hi"}


def test_history_load_skips_bad_entries(local_store):
    local_store.write(
        KEY_TRANSLATION_HISTORY,
        [item(1).to_document(), {"input": "only input"}, item(2).to_document()],
    )
    history = TranslationHistory(local_store)
    assert [entry.input for entry in history.load()] == ["in 1", "in 2"]


def test_history_load_tolerates_corrupt_json(local_store):
    put_raw(local_store, KEY_TRANSLATION_HISTORY, "not json")
    assert TranslationHistory(local_store).load() == []


def test_history_clear_removes_key(local_store):
    history = TranslationHistory(local_store)
    history.add(item(1))
    history.clear()
    assert len(history) == 0
    assert local_store.read(KEY_TRANSLATION_HISTORY) is None


# --- Session -----------------------------------------------------------------

@pytest.mark.asyncio
async def test_translate_success_records_history(local_store):
    translator = FakeTranslator(result="नमस्ते")
    session = TranslatorSession(translator, TranslationHistory(local_store))
    session.input = "Hello"

    assert await session.translate()

    assert session.output == "नमस्ते"
    assert session.error is None
    assert not session.is_translating
    assert translator.calls == [("Hello", "en", "hi")]
    assert session.history.items[0] == TranslationHistoryItem(
        input="Hello", output="नमस्ते", source="en", target="hi"
    )


@pytest.mark.asyncio
async def test_blank_input_is_rejected_without_calling_provider(local_store):
    translator = FakeTranslator()
    session = TranslatorSession(translator, TranslationHistory(local_store))
    session.input = "   "

    assert not await session.translate()
    assert session.error == INPUT_ERROR_KEY
    assert translator.calls == []


@pytest.mark.asyncio
async def test_failure_keeps_input_for_retry(local_store):
    session = TranslatorSession(failing_translator(), TranslationHistory(local_store))
    session.input = "Good morning"

    assert not await session.translate()

    assert session.error == TRANSLATION_ERROR_KEY
    assert session.input == "Good morning"
    assert session.output == ""
    assert len(session.history) == 0


@pytest.mark.asyncio
async def test_missing_provider_reports_translation_error(local_store):
    session = TranslatorSession(None, TranslationHistory(local_store))
    session.input = "Hello"
    assert not await session.translate()
    assert session.error == TRANSLATION_ERROR_KEY


def test_swap_refused_for_auto_detect(local_store):
    session = TranslatorSession(None, TranslationHistory(local_store), source_lang="auto", target_lang="ta")
    assert not session.swap()
    assert (session.source_lang, session.target_lang) == ("auto", "ta")

    session.source_lang = "mr"
    assert session.swap()
    assert (session.source_lang, session.target_lang) == ("ta", "mr")


def test_clear_and_restore(local_store):
    session = TranslatorSession(None, TranslationHistory(local_store))
    session.restore(TranslationHistoryItem(input="a", output="b", source="gu", target="bn"))
    assert (session.input, session.output, session.source_lang, session.target_lang) == ("a", "b", "gu", "bn")

    session.error = TRANSLATION_ERROR_KEY
    session.clear()
    assert (session.input, session.output, session.error) == ("", "", None)


# --- OpenRouter client -------------------------------------------------------

def _translator(handler) -> OpenRouterTranslator:
    client = httpx.AsyncClient(
        base_url="https://openrouter.test/api/v1",
        transport=httpx.MockTransport(handler),
    )
    return OpenRouterTranslator(api_key="sk-test", model="test/model", client=client)


@pytest.mark.asyncio
async def test_openrouter_builds_prompt_and_parses_reply():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers.get("Authorization")
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": "  ನಮಸ್ಕಾರ \n"}}]})

    translator = _translator(handler)
    result = await translator.translate("Hello", "en", "kn")

    assert result == "ನಮಸ್ಕಾರ"
    assert captured["url"].endswith("/chat/completions")
    assert captured["auth"] == "Bearer sk-test"
    body = captured["body"]
    assert body["model"] == "test/model"
    assert "from English to Kannada" in body["messages"][0]["content"]
    assert body["messages"][1] == {"role": "user", "content": 'Translate: "Hello"'}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "boom"}),
        httpx.Response(200, json={"choices": []}),
        httpx.Response(200, json={"choices": [{"message": {"content": "   "}}]}),
        httpx.Response(200, text="not json"),
    ],
)
async def test_openrouter_failures_raise_translation_error(response):
    translator = _translator(lambda request: response)
    with pytest.raises(TranslationError):
        await translator.translate("Hello", "en", "hi")


def test_factory_disables_openrouter_without_key():
    assert ProviderFactory.create_from_config(TranslationConfig(api_key=None)) is None
    assert ProviderFactory.create_from_config(TranslationConfig(provider="nope", api_key="k")) is None


def test_factory_local_provider_needs_no_key():
    translator = ProviderFactory.create_from_config(TranslationConfig(provider="lm-studio"))
    assert isinstance(translator, OpenRouterTranslator)
    assert translator.base_url == "http://localhost:1234/v1"
