"""Test the OpenRouter responder and its failover to the fallback composer."""

import json
from unittest.mock import MagicMock, patch

import pytest

from chatbot.config import LLM_MAX_TOKENS, LLM_TEMPERATURE, LLM_TOP_P
from chatbot.fallback import compose_fallback_reply
from chatbot.logging_utils import get_log_file
from chatbot.responder import FALLBACK, REMOTE, RemoteResponder


class TestRemoteSuccess:
    """Successful completions are returned as-is."""

    def test_returns_model_text(self, mock_openai_client, product):
        responder = RemoteResponder(api_key="sk-test", model="test/model", client=mock_openai_client)
        reply = responder.generate("Qual o preço?", product)

        assert reply.text == "Resposta do modelo."
        assert reply.source == REMOTE
        assert reply.model == "test/model"
        assert not reply.degraded

    def test_request_parameters(self, mock_openai_client, product):
        responder = RemoteResponder(api_key="sk-test", model="test/model", client=mock_openai_client)
        responder.generate("Como funciona?", product)

        mock_openai_client.chat.completions.create.assert_called_once()
        kwargs = mock_openai_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "test/model"
        assert kwargs["temperature"] == LLM_TEMPERATURE
        assert kwargs["top_p"] == LLM_TOP_P
        assert kwargs["max_tokens"] == LLM_MAX_TOKENS
        assert kwargs["messages"][0]["role"] == "system"
        assert "Curso Vendas Pro" in kwargs["messages"][0]["content"]
        assert kwargs["messages"][1] == {"role": "user", "content": "Como funciona?"}
        assert "X-Title" in kwargs["extra_headers"]

    def test_respond_returns_text_only(self, mock_openai_client, product):
        responder = RemoteResponder(api_key="sk-test", client=mock_openai_client)
        assert responder.respond("oi", product) == "Resposta do modelo."

    def test_strips_whitespace(self, mock_openai_client, make_completion, product):
        mock_openai_client.chat.completions.create.return_value = make_completion("  Olá!  \n")
        responder = RemoteResponder(api_key="sk-test", client=mock_openai_client)
        assert responder.respond("oi", product) == "Olá!"


class TestFailover:
    """Every remote failure turns into the fallback composer's reply."""

    def test_failover_equals_fallback(self, failing_openai_client, product):
        responder = RemoteResponder(api_key="sk-test", client=failing_openai_client)
        reply = responder.generate("Qual o preço?", product)

        assert reply.source == FALLBACK
        assert reply.degraded
        assert "503" in reply.error
        assert reply.text == compose_fallback_reply("Qual o preço?", product)
        assert reply.text.startswith('O investimento para adquirir "Curso Vendas Pro"')

    def test_exactly_one_attempt(self, failing_openai_client, product):
        responder = RemoteResponder(api_key="sk-test", client=failing_openai_client)
        responder.generate("oi", product)
        assert failing_openai_client.chat.completions.create.call_count == 1

    @pytest.mark.parametrize(
        "build",
        [
            lambda make: make(None),
            lambda make: make("   "),
            lambda make: MagicMock(choices=[]),
            lambda make: object(),
        ],
        ids=["null_content", "blank_content", "no_choices", "not_a_completion"],
    )
    def test_malformed_body(self, mock_openai_client, make_completion, product, build):
        mock_openai_client.chat.completions.create.return_value = build(make_completion)
        responder = RemoteResponder(api_key="sk-test", client=mock_openai_client)
        reply = responder.generate("Tem garantia?", product)

        assert reply.source == FALLBACK
        assert reply.text == compose_fallback_reply("Tem garantia?", product)

    def test_missing_api_key_skips_remote(self, product):
        responder = RemoteResponder(api_key="")
        with patch("chatbot.responder.OpenAI") as mock_openai:
            reply = responder.generate("Como funciona?", product)

        mock_openai.assert_not_called()
        assert reply.source == FALLBACK
        assert reply.text == compose_fallback_reply("Como funciona?", product)

    def test_client_built_without_retries(self, make_completion, product):
        responder = RemoteResponder(api_key="sk-test", base_url="https://llm.example/v1", timeout=7)
        with patch("chatbot.responder.OpenAI") as mock_openai:
            mock_openai.return_value.chat.completions.create.return_value = make_completion("ok")
            assert responder.respond("oi", product) == "ok"

        mock_openai.assert_called_once_with(
            api_key="sk-test",
            base_url="https://llm.example/v1",
            timeout=7,
            max_retries=0,
        )

    def test_end_to_end_default_record(self, failing_openai_client):
        from salespage.fields import extract_fields

        record = extract_fields(
            '<title>SuperCurso</title><meta name="description" content="Aprenda rápido">',
            "https://exemplo.com/supercurso",
        )
        reply = RemoteResponder(api_key="sk-test", client=failing_openai_client).respond(
            "Tem garantia?", record
        )

        assert "SuperCurso" in reply
        assert "Produto excelente, recomendo! - Cliente Satisfeito" in reply
        assert "Compre Agora" in reply


class TestInteractionLog:
    def test_failover_is_logged(self, failing_openai_client, product):
        RemoteResponder(api_key="sk-test", client=failing_openai_client).generate("preço", product)

        events = [json.loads(line) for line in get_log_file().read_text(encoding="utf-8").splitlines()]
        types = [e["event_type"] for e in events]
        assert types == ["llm_call", "llm_error", "fallback_reply"]
        assert events[-1]["topic"] == "price"
