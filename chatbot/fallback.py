"""Template replies that need nothing but the product record.

Used whenever the LLM is unavailable, so it must always produce a sensible
answer. The message is routed to the first topic whose keywords appear in
it (case-insensitive); each topic fills a fixed Portuguese template.
"""

from dataclasses import dataclass
from typing import Callable, Tuple

from salespage.models import ProductRecord

__all__ = ["Topic", "TOPICS", "GENERAL_TOPIC", "route_topic", "compose_fallback_reply"]


@dataclass(frozen=True)
class Topic:
    name: str
    keywords: Tuple[str, ...]
    template: Callable[[ProductRecord], str]

    def matches(self, lowered_message: str) -> bool:
        return any(keyword in lowered_message for keyword in self.keywords)


def _price_reply(p: ProductRecord) -> str:
    return (
        f'O investimento para adquirir "{p.title}" é {p.price}. '
        f"É um valor muito justo considerando todos os benefícios que você vai receber: "
        f"{' e '.join(p.benefits[:2])}. {p.cta}!"
    )


def _benefits_reply(p: ProductRecord) -> str:
    return (
        f'Os principais benefícios de "{p.title}" são: {", ".join(p.benefits)}. '
        f"{p.description} Não perca essa oportunidade!"
    )


def _how_it_works_reply(p: ProductRecord) -> str:
    return (
        f'"{p.title}" funciona de forma simples e eficaz. {p.description} '
        f"Você terá acesso a: {', '.join(p.benefits[:3])}. "
        f"{p.cta} e comece a ver resultados!"
    )


def _guarantee_reply(p: ProductRecord) -> str:
    return (
        f'Sim! "{p.title}" oferece total garantia de satisfação. {p.testimonials[0]} '
        f"Você pode adquirir com total segurança. {p.cta}!"
    )


def _general_reply(p: ProductRecord) -> str:
    return (
        f'"{p.title}" é realmente incrível! {p.description} '
        f"Os principais benefícios incluem: {' e '.join(p.benefits[:2])}. "
        f"{p.testimonials[0]} {p.cta} e transforme seus resultados!"
    )


# Priority order: the first topic with a keyword in the message wins.
TOPICS: Tuple[Topic, ...] = (
    Topic("price", ("preço", "valor", "custa"), _price_reply),
    Topic("benefits", ("benefício", "vantagem", "o que"), _benefits_reply),
    Topic("how_it_works", ("funciona", "como"), _how_it_works_reply),
    Topic("guarantee", ("garantia", "seguro"), _guarantee_reply),
)

GENERAL_TOPIC = Topic("general", (), _general_reply)


def _select_topic(message: str) -> Topic:
    lowered = message.lower()
    for topic in TOPICS:
        if topic.matches(lowered):
            return topic
    return GENERAL_TOPIC


def route_topic(message: str) -> str:
    """Name of the topic ``message`` is routed to."""
    return _select_topic(message).name


def compose_fallback_reply(message: str, record: ProductRecord) -> str:
    """Deterministic reply to ``message`` built only from ``record``."""
    return _select_topic(message).template(record)
