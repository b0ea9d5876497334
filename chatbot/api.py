"""API endpoints for the sales chatbot.

Flow for a chat message:
1. Resolve the product record for ``productUrl`` (cache, else extract the page)
2. Ask the responder (LLM first, template fallback on any failure)
3. Return the reply text with a timestamp

Only missing or malformed request parameters produce an error response;
upstream failures are absorbed by the extractor and the responder.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple, Union

from flask import Blueprint, Response, current_app, jsonify, request

from salespage.models import ProductRecord

from .logging_utils import log_interaction
from .timing import get_timings, timer

__all__ = ["api", "resolve_product", "get_services", "utc_timestamp"]

logger = logging.getLogger(__name__)

# Create blueprint for API
api = Blueprint("api", __name__, url_prefix="/api")

CHAT_PARAMS_ERROR = "Mensagem e URL do produto são obrigatórias"
URL_PARAM_ERROR = "URL da página de vendas é obrigatória"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def get_services() -> Dict[str, Any]:
    """Cache, responder and extractor registered by create_app()."""
    return current_app.extensions["chatbot"]


def resolve_product(url: str) -> ProductRecord:
    """Cached record for ``url``, extracting the page on a miss."""
    services = get_services()
    cache = services["cache"]
    extract_page_data = services["extractor"]

    def _load(page_url: str) -> ProductRecord:
        with timer("page_fetch"):
            result = extract_page_data(page_url)
        log_interaction(
            "extraction",
            {
                "product_url": page_url,
                "source": result.source,
                "error": result.error,
                "title": result.record.title,
            },
        )
        return result.record

    record = cache.get(url)
    if record is not None:
        log_interaction("cache_hit", {"product_url": url})
        return record
    return cache.get_or_load(url, _load)


def _required_string(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


@api.route("/chat", methods=["POST"])
def chat() -> Union[Tuple[Response, int], Response]:
    """Answer a user message about a product page.

    Request JSON:
        {"message": "Qual é o preço?", "productUrl": "https://..."}

    Response JSON:
        {"response": "...", "timestamp": "2024-01-01T12:00:00+00:00"}
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": CHAT_PARAMS_ERROR}), 400

    product_url = _required_string(data, "productUrl")
    if not _required_string(data, "message") or not product_url:
        return jsonify({"error": CHAT_PARAMS_ERROR}), 400

    # The message is forwarded as typed; only the URL is normalized
    message = data["message"]

    record = resolve_product(product_url)
    reply = get_services()["responder"].generate(message, record)

    log_interaction(
        "chat_request",
        {
            "product_url": product_url,
            "user_message": message,
            "reply_source": reply.source,
            "timings": get_timings(),
        },
    )

    return jsonify({"response": reply.text, "timestamp": utc_timestamp()})


@api.route("/product", methods=["GET"])
def product() -> Union[Tuple[Response, int], Response]:
    """Extracted product record for ``?url=``, as JSON."""
    url = (request.args.get("url") or "").strip()
    if not url:
        return jsonify({"error": URL_PARAM_ERROR}), 400

    return jsonify(resolve_product(url).to_dict())
