#!/usr/bin/env python3
"""Render (and optionally send) a questionnaire report from a YAML answers file.

Loads the schemas from ``v1/``, validates the answers, prints any errors
as a table, then prints the report exactly as the clinic would receive it.
With ``--send`` the report is delivered through the Telegram Bot API using
``TELEGRAM_BOT_TOKEN`` / ``TELEGRAM_CHAT_ID`` from the environment.

Answers file layout (same shape as the HTTP ``FormState`` body)::

    form_data:
      name: Анна
      operations: "yes"
      injuries: [no_issues]
    additional_data:
      operations_additional: Аппендэктомия, 2015
    contact_data:
      method: telegram
      username: "@anna"

Usage::

    python scripts/render_report.py woman scripts/sample_answers.yaml
    python scripts/render_report.py woman answers.yaml -l en
    python scripts/render_report.py woman answers.yaml --send
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

_SCRIPT_DIR = Path(__file__).resolve().parent
_REPO_ROOT = _SCRIPT_DIR.parent
sys.path.insert(0, str(_REPO_ROOT / "src"))

from rich.console import Console  # noqa: E402
from rich.table import Table  # noqa: E402

from questionnaire_forms.constants import QUESTIONNAIRE_TYPES  # noqa: E402
from questionnaire_forms.models.form import FormState  # noqa: E402
from questionnaire_forms.renderer import ReportRenderer  # noqa: E402
from questionnaire_forms.schema_store import SchemaStore, load_yaml  # noqa: E402
from questionnaire_forms.submitter import TelegramSubmitter  # noqa: E402
from questionnaire_forms.validator import validate_form  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Render a health questionnaire report from an answers file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("questionnaire_type", choices=QUESTIONNAIRE_TYPES)
    parser.add_argument("answers", type=Path, help="YAML file with the form state")
    parser.add_argument(
        "-l", "--lang",
        default="ru",
        help="Language of labels and messages (default: ru)",
    )
    parser.add_argument(
        "--data-dir",
        type=Path, default=None,
        help="Questionnaire data directory (default: v1/ in the repo root)",
    )
    parser.add_argument(
        "--send",
        action="store_true",
        help="Deliver the report via Telegram after rendering",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Render even when validation fails",
    )
    return parser.parse_args()


def print_errors(console: Console, errors: dict[str, str]) -> None:
    table = Table(title="Validation errors", show_lines=False)
    table.add_column("Field", style="bold")
    table.add_column("Message")
    for key, message in errors.items():
        table.add_row(key, message)
    console.print(table)


async def main() -> int:
    args = parse_args()
    console = Console()
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s [%(name)s] %(message)s")

    store = SchemaStore(args.data_dir)
    store.load()
    state = FormState(**(load_yaml(args.answers) or {}))

    errors = validate_form(
        store.get_sections(args.questionnaire_type),
        state.form_data,
        state.contact_data,
        args.lang,
        additional_data=state.additional_data,
        rules=store.get_rules(args.questionnaire_type),
        messages=store.messages,
    )
    if errors:
        print_errors(console, errors)
        if not args.force:
            return 1

    report = ReportRenderer(messages=store.messages).render(
        args.questionnaire_type,
        store.get_sections(args.questionnaire_type),
        state.form_data,
        state.additional_data,
        state.contact_data,
        args.lang,
    )
    console.rule(f"[bold]{args.questionnaire_type} / {args.lang}")
    # markup/highlight off: the report is plain text with literal ** markers
    console.print(report, markup=False, highlight=False)

    if not args.send:
        return 0
    if errors:
        console.print("[red]Refusing to send an invalid questionnaire.[/]")
        return 1

    result = await TelegramSubmitter().send(report)
    if result.success:
        console.print("[green]Report delivered[/]")
        return 0
    console.print(f"[red]Delivery failed[/] ({result.error_kind}): {result.error}")
    return 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
