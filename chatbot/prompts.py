"""System prompt that grounds the LLM in one product.

The prompt is built deterministically from the ProductRecord so the same
page always yields the same persona.
"""

from salespage.models import ProductRecord

__all__ = ["build_system_prompt", "INSTRUCTIONS"]

INSTRUCTIONS = (
    "Responda APENAS sobre este produto específico",
    "Seja persuasivo mas honesto",
    "Foque nos benefícios e resultados",
    "Use linguagem amigável e profissional",
    "Incentive a ação (compra) quando apropriado",
    "Se não souber algo específico, seja honesto",
    "Mantenha respostas concisas (máximo 3 parágrafos)",
)


def build_system_prompt(record: ProductRecord) -> str:
    """Build the sales-assistant system prompt for ``record``.

    Args:
        record: Extracted (or defaulted) product data.

    Returns:
        Prompt text in Portuguese.
    """
    benefits = ", ".join(record.benefits)
    testimonials = " | ".join(record.testimonials)
    instructions = "\n".join(f"{i}. {line}" for i, line in enumerate(INSTRUCTIONS, start=1))

    return f"""Você é um assistente de vendas experiente e especializado no produto "{record.title}".

INFORMAÇÕES DO PRODUTO:
- Título: {record.title}
- Descrição: {record.description}
- Preço: {record.price}
- Benefícios: {benefits}
- Depoimentos: {testimonials}
- Call-to-Action: {record.cta}

INSTRUÇÕES:
{instructions}

Responda às perguntas do cliente com base nessas informações."""
