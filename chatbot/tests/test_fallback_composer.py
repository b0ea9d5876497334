"""Test keyword routing and templates of the fallback composer."""

import pytest

from chatbot.fallback import TOPICS, compose_fallback_reply, route_topic


class TestRouting:
    """Topic routing is case-insensitive and priority-ordered."""

    @pytest.mark.parametrize(
        "message,topic",
        [
            ("Qual o preço?", "price"),
            ("Quanto CUSTA isso?", "price"),
            ("Qual o valor?", "price"),
            ("Quais os benefícios?", "benefits"),
            ("Tem alguma vantagem?", "benefits"),
            ("O que é isso?", "benefits"),
            ("Funciona mesmo?", "how_it_works"),
            ("Como eu acesso?", "how_it_works"),
            ("Tem garantia?", "guarantee"),
            ("É seguro comprar?", "guarantee"),
            ("Olá!", "general"),
            ("", "general"),
        ],
    )
    def test_routes(self, message, topic):
        assert route_topic(message) == topic

    def test_price_beats_benefits(self):
        assert route_topic("qual o preço e quais os benefícios") == "price"

    def test_benefits_beat_how_it_works(self):
        # "o que" (benefits) and "funciona" both present
        assert route_topic("o que é e como funciona?") == "benefits"

    def test_how_it_works_beats_guarantee(self):
        assert route_topic("como funciona a garantia?") == "how_it_works"

    def test_topic_order(self):
        assert [t.name for t in TOPICS] == ["price", "benefits", "how_it_works", "guarantee"]


class TestTemplates:
    """Each topic interpolates the record into a fixed template."""

    def test_price_reply(self, product):
        reply = compose_fallback_reply("Qual é o PREÇO?", product)
        assert reply == (
            'O investimento para adquirir "Curso Vendas Pro" é R$ 297,00. '
            "É um valor muito justo considerando todos os benefícios que você vai receber: "
            "Mais de 80 aulas práticas e Suporte direto com o professor. Quero me inscrever!"
        )

    def test_benefits_reply_lists_all(self, product):
        reply = compose_fallback_reply("Qual a vantagem?", product)
        for benefit in product.benefits:
            assert benefit in reply
        assert product.description in reply
        assert reply.endswith("Não perca essa oportunidade!")

    def test_how_it_works_uses_first_three_benefits(self, product):
        reply = compose_fallback_reply("Como funciona?", product)
        assert "Mais de 80 aulas práticas, Suporte direto com o professor, Certificado de conclusão." in reply
        assert "Comunidade exclusiva" not in reply
        assert "Quero me inscrever e comece a ver resultados!" in reply

    def test_guarantee_reply(self, product):
        reply = compose_fallback_reply("Tem garantia?", product)
        assert reply == (
            'Sim! "Curso Vendas Pro" oferece total garantia de satisfação. '
            "Fiz minha primeira venda em uma semana! "
            "Você pode adquirir com total segurança. Quero me inscrever!"
        )

    def test_general_reply(self, product):
        reply = compose_fallback_reply("Olá, tudo bem?", product)
        assert reply.startswith('"Curso Vendas Pro" é realmente incrível!')
        assert "Mais de 80 aulas práticas e Suporte direto com o professor" in reply
        assert "Fiz minha primeira venda em uma semana!" in reply
        assert "Certificado de conclusão" not in reply

    def test_deterministic(self, product):
        assert compose_fallback_reply("oi", product) == compose_fallback_reply("oi", product)

    def test_default_record_guarantee(self, default_product):
        reply = compose_fallback_reply("Tem garantia?", default_product)
        assert "Produto excelente, recomendo! - Cliente Satisfeito" in reply
        assert "Compre Agora" in reply

    def test_single_benefit_record(self, product):
        from dataclasses import replace

        one = replace(product, benefits=("Apenas um benefício aqui",))
        reply = compose_fallback_reply("preço", one)
        assert "receber: Apenas um benefício aqui. " in reply
