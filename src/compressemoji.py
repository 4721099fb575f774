#!/usr/bin/env python3
"""
Emoji Compressor

Builds the emoji data module used by the client from the gemoji emoji list
and the EmojiOne category data.

Usage:
    python src/compressemoji.py > emoji.js
    python src/compressemoji.py --emoji-json emoji.json --emoji-one-json emoji-one.json -o emoji.js
    python src/compressemoji.py --format json -o emoji-data.json

Sources can be local paths or http(s) URLs. Duplicate aliases and codepoints
are reported on stderr but don't stop the build.
"""

import os
import sys
import argparse

from emojidata import load_emoji_records, load_category_records
from emojimerge import Context, merge_emojis
from emojimodule import FORMATS, render, write_output

EMOJI_JSON_KEY = "EMOJI_JSON"
EMOJI_JSON_DEFAULT = "emoji.json"

EMOJI_ONE_JSON_KEY = "EMOJI_ONE_JSON"
EMOJI_ONE_JSON_DEFAULT = "emoji-one.json"


class MergeConfig:
    def __init__(self, emoji_json, emoji_one_json, format_="js", output="-", header=None):
        self.emoji_json = emoji_json
        self.emoji_one_json = emoji_one_json
        self.format = format_
        self.output = output
        self.header = header

    @classmethod
    def from_env(cls):
        emoji_json = os.environ.get(EMOJI_JSON_KEY, EMOJI_JSON_DEFAULT)
        emoji_one_json = os.environ.get(EMOJI_ONE_JSON_KEY, EMOJI_ONE_JSON_DEFAULT)

        return cls(emoji_json, emoji_one_json)

    @classmethod
    def from_cli_args(cls, args):
        return cls(
            args.emoji_json, args.emoji_one_json, args.format, args.output, args.header
        )

    def show(self):
        print("Emoji Compressor Configuration:", file=sys.stderr)
        print(f"Emoji list: {self.emoji_json}", file=sys.stderr)
        print(f"Categories: {self.emoji_one_json}", file=sys.stderr)
        print(f"Format: {self.format}", file=sys.stderr)
        print(f"Output: {self.output}", file=sys.stderr)


def run(config: MergeConfig, ctx: Context | None = None) -> str:
    """Load both sources, merge them and write the rendered module.

    Everything is rendered before the output is touched so a failure never
    leaves a half written file behind. Returns the rendered text.
    """
    ctx = ctx or Context()

    records = load_emoji_records(config.emoji_json)
    category_records = load_category_records(config.emoji_one_json)

    result = merge_emojis(records, category_records, ctx=ctx)
    text = render(result, config.format, config.header)

    write_output(text, config.output)
    return text


def create_parser() -> argparse.ArgumentParser:
    defaults = MergeConfig.from_env()

    parser = argparse.ArgumentParser(
        description="Generate the client emoji data module",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Environment:
  {EMOJI_JSON_KEY}      default for --emoji-json
  {EMOJI_ONE_JSON_KEY}  default for --emoji-one-json
        """,
    )
    parser.add_argument(
        "--emoji-json",
        default=defaults.emoji_json,
        help=f"gemoji emoji list, path or URL (default: {defaults.emoji_json})",
    )
    parser.add_argument(
        "--emoji-one-json",
        default=defaults.emoji_one_json,
        help=f"EmojiOne category data, path or URL (default: {defaults.emoji_one_json})",
    )
    parser.add_argument(
        "--format",
        default="js",
        choices=FORMATS,
        help="Output format (default: js)",
    )
    parser.add_argument(
        "--output",
        "-o",
        default="-",
        help="Output file path, - for stdout (default: -)",
    )
    parser.add_argument(
        "--header",
        default=None,
        help="Text added as a comment at the top of the js module",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Show the configuration"
    )

    return parser


def main(argv=None) -> None:
    parser = create_parser()
    args = parser.parse_args(argv)
    config = MergeConfig.from_cli_args(args)

    if args.verbose:
        config.show()

    ctx = Context()
    try:
        run(config, ctx)
    except KeyboardInterrupt:
        print("\n✗ Operation cancelled by user", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        ctx.print_messages()
        print(f"✗ Error: {e}", file=sys.stderr)
        sys.exit(1)

    ctx.print_messages()
    if config.output != "-":
        print(f"✓ Emoji data saved to {config.output}", file=sys.stderr)


if __name__ == "__main__":
    main()
