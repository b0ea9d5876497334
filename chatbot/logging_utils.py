"""Logging utilities for the chatbot.

Provides structured JSONL logging for chat requests and LLM interactions.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from .config import LOG_DIR

__all__ = ["log_interaction", "get_log_file", "set_log_dir"]

logger = logging.getLogger(__name__)

_log_dir: Path = LOG_DIR


def set_log_dir(path: Path) -> None:
    """Point interaction logs somewhere else (tests use a tmp dir)."""
    global _log_dir
    _log_dir = Path(path)


def get_log_file(day: Optional[datetime] = None) -> Path:
    """Daily JSONL file for interaction events."""
    day = day or datetime.now()
    return _log_dir / f"chat_interactions_{day.strftime('%Y%m%d')}.jsonl"


def log_interaction(event_type: str, data: Dict[str, Any]) -> None:
    """Append a chat/LLM event to the daily JSONL log.

    Args:
        event_type: Type of event (chat_request, llm_call, llm_response, llm_error, fallback_reply, etc.)
        data: Event-specific data to log
    """
    log_entry = {"timestamp": datetime.now().isoformat(), "event_type": event_type, **data}
    try:
        _log_dir.mkdir(parents=True, exist_ok=True)
        with open(get_log_file(), "a", encoding="utf-8") as f:
            f.write(json.dumps(log_entry, ensure_ascii=False, default=str) + "\n")
    except OSError as e:
        logger.warning(f"Could not write interaction log: {e}")
