import argparse
import json
import logging
import sys
from typing import List, Optional

from howto_selectors import config
from howto_selectors.parser import StepFileError, process_file
from howto_selectors.selector_transform import SelectorParseError, transform_selector

logger = logging.getLogger(__name__)


def transform_command(selectors: List[str], strict: bool) -> int:
    for selector in selectors:
        try:
            print(transform_selector(selector, strict=strict))
        except SelectorParseError as e:
            logger.error(f"Invalid selector: {e}")
            return 1
    return 0


def steps_command(file_path: str, output: Optional[str], strict: bool) -> int:
    try:
        _, rewritten = process_file(file_path, strict=strict)
    except (StepFileError, SelectorParseError) as e:
        logger.error(f"Error processing {file_path}: {e}")
        return 1

    content = json.dumps(rewritten, indent=4)
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(content + "\n")
        logger.info(f"Rewritten steps saved to: {output}")
    else:
        print(content)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rewrite :contains() selectors into Playwright selectors")
    parser.add_argument(
        "--strict",
        action="store_true",
        default=config.SELECTOR_STRICT,
        help="Fail on malformed :contains() clauses instead of leaving them unchanged",
    )
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="Logging level (default: %(default)s)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    transform_parser = subparsers.add_parser("transform", help="Transform selectors given on the command line")
    transform_parser.add_argument("selectors", nargs="+", help="Selector expressions")

    steps_parser = subparsers.add_parser("steps", help="Transform the selectors of a JSON step file")
    steps_parser.add_argument("file", help="Path to the step file")
    steps_parser.add_argument("--output", "-o", help="Write the result here instead of stdout")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=config.get_log_level(args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command == "transform":
        return transform_command(args.selectors, args.strict)
    return steps_command(args.file, args.output, args.strict)


if __name__ == "__main__":
    sys.exit(main())
