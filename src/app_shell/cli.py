import argparse
import logging
import sys
from pathlib import Path

from src.components.sanitizer import create_sanitizer
from src.components.translator import create_translator
from src.domain.markup import flatten_text, parse_markup, serialize_markup
from src.rules.loader import load_rules, load_rules_or_default
from src.rules.models import EditorRules

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")

RULES_PATH = "rules.yaml"


def get_rules(path: str | None) -> EditorRules:
    if path is None:
        return load_rules_or_default(Path(RULES_PATH))

    rules_path = Path(path)
    if not rules_path.exists():
        logger.error(f"Rules file {rules_path} not found.")
        sys.exit(1)
    return load_rules(rules_path)


def read_input(args: argparse.Namespace) -> str:
    if args.file in (None, "-"):
        return sys.stdin.read()
    path = Path(args.file)
    if not path.exists():
        logger.error(f"File {path} not found.")
        sys.exit(1)
    return path.read_text(encoding="utf-8")


def handle_sanitize(rules: EditorRules, args: argparse.Namespace) -> str:
    sanitizer = create_sanitizer(rules.sanitizer)
    tree, removals = sanitizer.sanitize_with_report(parse_markup(read_input(args)))
    for removal in removals:
        logger.info(f"{removal.code}: {removal.message}")
    return serialize_markup(tree)


def handle_to_bbcode(rules: EditorRules, args: argparse.Namespace) -> str:
    markup = read_input(args)
    if not args.no_sanitize:
        markup = create_sanitizer(rules.sanitizer).sanitize_html(markup)
    return create_translator(rules.translator).html_to_dialect(markup)


def handle_to_html(rules: EditorRules, args: argparse.Namespace) -> str:
    markup, warnings = create_translator(rules.translator).to_html_with_warnings(read_input(args))
    for warning in warnings:
        logger.warning(warning.message)
    if not args.no_sanitize:
        markup = create_sanitizer(rules.sanitizer).sanitize_html(markup)
    return markup


def handle_text(rules: EditorRules, args: argparse.Namespace) -> str:
    return flatten_text(parse_markup(read_input(args)))


HANDLERS = {
    "sanitize": handle_sanitize,
    "to-bbcode": handle_to_bbcode,
    "to-html": handle_to_html,
    "text": handle_text,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tri-view editor markup tools")
    parser.add_argument("--rules", help=f"Rules file (default: {RULES_PATH})")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # sanitize
    sanitize_parser = subparsers.add_parser("sanitize", help="Filter HTML through the allow-list")
    sanitize_parser.add_argument("file", nargs="?", help="Input file (default: stdin)")

    # to-bbcode
    bbcode_parser = subparsers.add_parser("to-bbcode", help="Convert HTML to BBCode")
    bbcode_parser.add_argument("file", nargs="?", help="Input file (default: stdin)")
    bbcode_parser.add_argument(
        "--no-sanitize", action="store_true", help="Skip sanitizing the input HTML"
    )

    # to-html
    html_parser = subparsers.add_parser("to-html", help="Convert BBCode to HTML")
    html_parser.add_argument("file", nargs="?", help="Input file (default: stdin)")
    html_parser.add_argument(
        "--no-sanitize", action="store_true", help="Skip sanitizing the output HTML"
    )

    # text
    text_parser = subparsers.add_parser("text", help="Extract plain text from HTML")
    text_parser.add_argument("file", nargs="?", help="Input file (default: stdin)")

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    rules = get_rules(args.rules)
    print(HANDLERS[args.command](rules, args))


if __name__ == "__main__":
    main()
