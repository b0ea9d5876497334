"""Flask web app serving a product-grounded sales chatbot.

Given a sales page URL, extracts its copy and serves a chat widget whose
assistant answers questions about that product.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

from dotenv import load_dotenv
from flask import Flask, Response, jsonify, render_template, request
from flask_cors import CORS

# Load environment variables from .env before reading config
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

from salespage.extractor import extract_page_data  # noqa: E402
from salespage.models import ExtractionResult  # noqa: E402

from .api import URL_PARAM_ERROR, api, resolve_product, utc_timestamp  # noqa: E402
from .cache import ProductCache  # noqa: E402
from .config import APP_VERSION, FLASK_DEBUG, FLASK_HOST, FLASK_PORT  # noqa: E402
from .responder import RemoteResponder  # noqa: E402

__all__ = ["create_app", "app"]

logger = logging.getLogger(__name__)


def create_app(
    cache: Optional[ProductCache] = None,
    responder: Optional[RemoteResponder] = None,
    extractor: Optional[Callable[[str], ExtractionResult]] = None,
) -> Flask:
    """Build the app; collaborators can be swapped out for tests."""
    app = Flask(__name__)
    CORS(app)

    app.extensions["chatbot"] = {
        "cache": cache if cache is not None else ProductCache(),
        "responder": responder if responder is not None else RemoteResponder(),
        "extractor": extractor or extract_page_data,
    }
    app.register_blueprint(api)

    # ---------- FLASK ROUTES ----------

    @app.route("/", methods=["GET"])
    def index() -> Response:
        return jsonify({
            "service": "Automaclick Chatbot",
            "version": APP_VERSION,
            "usage": "/chatbot?url=https://exemplo.com",
        })

    @app.route("/chatbot", methods=["GET"])
    def chatbot() -> Union[Tuple[Response, int], str]:
        """Render the chat widget for the sales page in ``?url=``."""
        url = (request.args.get("url") or "").strip()
        if not url:
            return jsonify({"error": URL_PARAM_ERROR}), 400

        record = resolve_product(url)
        return render_template("chat.html", product=record.to_dict())

    @app.route("/status", methods=["GET"])
    def status() -> Response:
        return jsonify({
            "status": "online",
            "version": APP_VERSION,
            "timestamp": utc_timestamp(),
            "cacheSize": len(app.extensions["chatbot"]["cache"]),
        })

    @app.errorhandler(500)
    def internal_error(error: Exception) -> Tuple[Response, int]:
        logger.error(f"Unhandled error on {request.path}: {error}")
        return jsonify({"error": "Erro interno do servidor"}), 500

    return app


app = create_app()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    logger.info(f"Automaclick Chatbot Server v{APP_VERSION} on port {FLASK_PORT}")
    logger.info(f"Open: http://localhost:{FLASK_PORT}/chatbot?url=https://exemplo.com")
    app.run(host=FLASK_HOST, port=FLASK_PORT, debug=FLASK_DEBUG)
