#!/usr/bin/env python3
"""
CLI entrypoint: render a saved survey submission into a client brief.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from config import BriefConfig
from docx_converter import markdown_to_docx
from errors import BriefError
from intake import IntakeHandler
from logging_utils import log_exception, setup_service_logging
from renderers import available_renderers, get_renderer
from schema_registry import default_registry


def enable_debug_logging() -> None:
    logging.getLogger().setLevel(logging.DEBUG)
    for handler in logging.getLogger().handlers:
        handler.setLevel(logging.DEBUG)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a survey submission into a client brief.")
    parser.add_argument("survey", type=str, help="Path to the survey submission JSON.")
    parser.add_argument("-o", "--output", type=str, help="Write Markdown here instead of stdout.")
    parser.add_argument("--docx", type=str, help="Also convert the brief to DOCX at this path.")
    parser.add_argument("--send", action="store_true", help="Run the full pipeline and email the brief.")
    parser.add_argument(
        "--renderer",
        choices=available_renderers(),
        default="deterministic",
        help="Brief renderer (default: deterministic).",
    )
    parser.add_argument("--schema-file", type=str, help="JSON file replacing the built-in vertical catalog.")
    parser.add_argument("--debug", action="store_true", help="Enable verbose logging.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    run_logger, _ = setup_service_logging(BriefConfig.LOG_DIR or None, BriefConfig.LOG_LEVEL)
    if args.debug:
        enable_debug_logging()
        run_logger.debug("Debug logging enabled.")

    try:
        payload = json.loads(Path(args.survey).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        log_exception(run_logger, exc, context="read_survey", path=args.survey)
        print(f"❌ Could not read survey file {args.survey}", file=sys.stderr)
        return 1

    try:
        handler = IntakeHandler(
            registry=default_registry(args.schema_file),
            renderer=get_renderer(args.renderer),
        )
        if args.send:
            result = handler.handle(payload)
            print(f"✅ Sent {result.attachment_name} for {result.company}", file=sys.stderr)
            markdown = result.markdown
        else:
            schema, record, _ = handler.prepare(payload)
            markdown = handler.renderer.render(record, schema).text
            if args.docx:
                Path(args.docx).write_bytes(markdown_to_docx(markdown, stem=f"{schema.safe_type}_Brief"))
                print(f"📄 DOCX written to {args.docx}", file=sys.stderr)
    except BriefError as exc:
        log_exception(run_logger, exc, context="render_brief", path=args.survey)
        print(f"❌ {exc}", file=sys.stderr)
        return 1

    if args.output:
        Path(args.output).write_text(markdown, encoding="utf-8")
    else:
        sys.stdout.write(markdown)
    return 0


if __name__ == "__main__":
    sys.exit(main())
