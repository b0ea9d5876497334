"""Command-line interface for the extractor."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from salespage.extractor import PageResponse, extract_page_data
from salespage.logging_config import setup_logging
from salespage.models import ExtractionResult

__all__ = ["main", "parse_args", "format_result"]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract product copy from a sales page",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Fetch and extract a live page
  python -m salespage.cli https://exemplo.com/oferta

  # Extract from a saved HTML file (URL is only echoed into the record)
  python -m salespage.cli https://exemplo.com/oferta --html-file pagina.html

  # Machine-readable output
  python -m salespage.cli https://exemplo.com/oferta --json
        """,
    )
    parser.add_argument("url", help="Sales page URL")
    parser.add_argument(
        "--html-file",
        type=Path,
        help="Read HTML from this file instead of fetching the URL",
    )
    parser.add_argument("--json", action="store_true", help="Print the record as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def format_result(result: ExtractionResult) -> str:
    """Human-readable summary of an extraction."""
    record = result.record
    lines = [
        f"Source:       {result.source}" + (f" ({result.error})" if result.error else ""),
        f"URL:          {record.url}",
        f"Title:        {record.title}",
        f"Description:  {record.description}",
        f"Price:        {record.price}",
        f"CTA:          {record.cta}",
        "Benefits:",
    ]
    lines.extend(f"  - {b}" for b in record.benefits)
    lines.append("Testimonials:")
    lines.extend(f"  - {t}" for t in record.testimonials)
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING, stream=sys.stderr)

    fetch = None
    if args.html_file:
        html = args.html_file.read_text(encoding="utf-8", errors="replace")
        fetch = lambda _url: PageResponse(status_code=200, text=html)  # noqa: E731

    result = extract_page_data(args.url, fetch=fetch)

    if args.json:
        payload = {"source": result.source, "error": result.error, **result.record.to_dict()}
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print(format_result(result))

    return 1 if result.degraded else 0


if __name__ == "__main__":
    sys.exit(main())
