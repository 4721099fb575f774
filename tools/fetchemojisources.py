import json
import argparse

from pathlib import Path

from emojidata import fetch_json

EMOJI_JSON_URL = "https://raw.githubusercontent.com/github/gemoji/master/db/emoji.json"
EMOJI_ONE_JSON_URL = (
    "https://raw.githubusercontent.com/emojione/emojione/2.2.7/emoji.json"
)


def fetch_source(url, path):
    data = fetch_json(url)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    return data


def fetch_sources(output_dir, emoji_url=EMOJI_JSON_URL, emoji_one_url=EMOJI_ONE_JSON_URL):
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    paths = []
    for url, name in ((emoji_url, "emoji.json"), (emoji_one_url, "emoji-one.json")):
        path = output_dir.joinpath(name)
        data = fetch_source(url, path)
        print(f"✓ Saved {len(data)} entries from {url} to {path}")
        paths.append(path)

    return paths


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Download the emoji source data.")
    parser.add_argument(
        "--output-dir", "-o", default=".", help="Directory to save the files in"
    )
    parser.add_argument("--emoji-url", default=EMOJI_JSON_URL, help="gemoji emoji.json")
    parser.add_argument(
        "--emoji-one-url", default=EMOJI_ONE_JSON_URL, help="EmojiOne emoji.json"
    )

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    fetch_sources(args.output_dir, args.emoji_url, args.emoji_one_url)


if __name__ == "__main__":
    main()
