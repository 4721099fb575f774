"""tests/test_compressemoji.py.

Tests the emoji compressor command line
"""
import json

import pytest

import compressemoji
from compressemoji import MergeConfig, create_parser, main, run
from emojimerge import Context

EMOJIS = [
    {"emoji": "😀", "description": "grinning face", "aliases": ["grinning"], "tags": ["smile"]},
    {"emoji": "📧", "description": "e-mail", "aliases": ["e-mail"], "tags": []},
    {"aliases": ["octocat"], "tags": []},
    {"emoji": "😃", "description": "smiley", "aliases": ["smiley", "grinning"], "tags": []},
]

EMOJI_ONE = {
    "1f600": {"unicode": "1f600", "shortname": ":grinning:", "category": "people", "aliases": []},
    "1f4e7": {"unicode": "1f4e7", "shortname": ":e-mail:", "category": "symbols", "aliases": [":email:"]},
}


@pytest.fixture
def sources(tmp_path):
    emoji_json = tmp_path / "emoji.json"
    emoji_one_json = tmp_path / "emoji-one.json"
    emoji_json.write_text(json.dumps(EMOJIS), encoding="utf-8")
    emoji_one_json.write_text(json.dumps(EMOJI_ONE), encoding="utf-8")
    return str(emoji_json), str(emoji_one_json)


def test_config_from_env(monkeypatch):
    """Ensure the source paths default from the environment"""
    monkeypatch.delenv(compressemoji.EMOJI_JSON_KEY, raising=False)
    monkeypatch.setenv(compressemoji.EMOJI_ONE_JSON_KEY, "/data/emoji-one.json")

    config = MergeConfig.from_env()
    assert config.emoji_json == "emoji.json"
    assert config.emoji_one_json == "/data/emoji-one.json"

    args = create_parser().parse_args(["--format", "json"])
    assert args.emoji_one_json == "/data/emoji-one.json"
    assert args.format == "json"
    assert args.output == "-"


def test_run(sources, tmp_path):
    """Ensure run merges both sources and writes the output file"""
    output = tmp_path / "emoji.json.out"
    ctx = Context()
    config = MergeConfig(*sources, format_="json", output=str(output))

    text = run(config, ctx)
    data = json.loads(output.read_text(encoding="utf-8"))

    assert json.loads(text) == data
    assert data["emojis"][2] == {"aliases": ["octocat"], "filename": ""}
    assert data["emojiIndicesByAlias"] == [
        ["e-mail", 1],
        ["grinning", 3],
        ["octocat", 2],
        ["smiley", 3],
    ]
    assert data["emojiIndicesByUnicode"] == [["1f600", 0], ["1f4e7", 1], ["1f603", 3]]
    assert data["categoryNames"] == ["people", "objects", "custom"]
    assert data["emojiIndicesByCategory"] == [
        ["people", [0, 3]],
        ["objects", [1]],
        ["custom", [2]],
    ]
    assert [m["type"] for m in ctx.msgs] == ["duplicate-alias"]


def test_main_writes_js_to_stdout(sources, capsys):
    """Ensure the js module goes to stdout and duplicates to stderr"""
    main(["--emoji-json", sources[0], "--emoji-one-json", sources[1]])

    captured = capsys.readouterr()
    assert "export const EmojiIndicesByAlias = new Map(" in captured.out
    assert 'export const CategoryNames = ["people","objects","custom"];' in captured.out
    assert "warn duplicate-alias" in captured.err
    assert "'key': 'grinning'" in captured.err


def test_main_writes_file(sources, tmp_path, capsys):
    """Ensure an output path is reported once written"""
    output = tmp_path / "emoji.js"
    main(["--emoji-json", sources[0], "--emoji-one-json", sources[1], "-o", str(output), "-v"])

    captured = capsys.readouterr()
    assert captured.out == ""
    assert output.read_text(encoding="utf-8").startswith("// This file is automatically generated.")
    assert f"✓ Emoji data saved to {output}" in captured.err
    assert "Emoji Compressor Configuration:" in captured.err


def test_main_missing_source(sources, tmp_path, capsys):
    """Ensure a missing source stops the run without output"""
    output = tmp_path / "emoji.js"
    missing = str(tmp_path / "nope.json")

    with pytest.raises(SystemExit) as exit_info:
        main(["--emoji-json", missing, "--emoji-one-json", sources[1], "-o", str(output)])

    assert exit_info.value.code == 1
    assert not output.exists()
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "✗ Error:" in captured.err
    assert "nope.json" in captured.err


def test_main_malformed_source(sources, tmp_path, capsys):
    """Ensure a source with the wrong shape stops the run"""
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps([{"emoji": "😀", "aliases": []}]), encoding="utf-8")

    with pytest.raises(SystemExit) as exit_info:
        main(["--emoji-json", str(bad), "--emoji-one-json", sources[1]])

    assert exit_info.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "no aliases" in captured.err
