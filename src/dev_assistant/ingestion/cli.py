"""Command-line entry point that runs one ingestion over the documents directory."""

from __future__ import annotations

import argparse
import json
import sys

from dev_assistant.bootstrap import build_components, configure_logging
from dev_assistant.config import settings


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dev-assistant-ingest",
        description="Ingest a documents directory into the configured vector store",
    )
    parser.add_argument(
        "--documents-dir",
        default=settings.documents_dir,
        help="Flat directory containing .pdf/.docx/.html documents",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the ingestion report as JSON",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(settings)

    try:
        components = build_components(settings)
    except Exception as exc:
        print(f"[dev-assistant-ingest] failed: {exc}", file=sys.stderr, flush=True)
        raise SystemExit(1) from exc

    report = components.pipeline.run(args.documents_dir)

    if args.json:
        print(json.dumps(report.model_dump(mode="json")), flush=True)
    else:
        print(f"[dev-assistant-ingest] completed {report.summary()}", flush=True)


if __name__ == "__main__":
    main()
