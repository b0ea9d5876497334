"""Shared test fixtures and utilities for the chatbot test suite."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from salespage.models import ProductRecord


@pytest.fixture(autouse=True)
def interaction_log_dir(tmp_path):
    """Keep interaction logs out of the repo during tests."""
    from chatbot import logging_utils

    original = logging_utils._log_dir
    log_dir = tmp_path / "logs"
    logging_utils.set_log_dir(log_dir)
    yield log_dir
    logging_utils.set_log_dir(original)


@pytest.fixture
def product():
    """A fully extracted product record."""
    return ProductRecord(
        title="Curso Vendas Pro",
        description="Aprenda a vender todos os dias pela internet.",
        price="R$ 297,00",
        benefits=(
            "Mais de 80 aulas práticas",
            "Suporte direto com o professor",
            "Certificado de conclusão",
            "Comunidade exclusiva",
        ),
        testimonials=(
            "Fiz minha primeira venda em uma semana!",
            "Conteúdo muito bem explicado e direto ao ponto.",
        ),
        cta="Quero me inscrever",
        url="https://exemplo.com/vendas-pro",
    )


@pytest.fixture
def default_product():
    return ProductRecord.default("https://exemplo.com/sem-dados")


@pytest.fixture
def make_completion():
    """Factory for objects shaped like an OpenAI chat completion."""

    def _make(content):
        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    return _make


@pytest.fixture
def mock_openai_client(make_completion):
    """Mock OpenAI client whose completion returns a fixed reply."""
    client = MagicMock()
    client.chat.completions.create.return_value = make_completion("Resposta do modelo.")
    return client


@pytest.fixture
def failing_openai_client():
    """Mock OpenAI client that fails on every call."""
    client = MagicMock()
    client.chat.completions.create.side_effect = RuntimeError("503 Service Unavailable")
    return client
