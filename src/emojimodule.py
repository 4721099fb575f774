import sys
import json

from emojimerge import MergeResult


class OutputSerializationFailure(Exception):
    pass


JS_MODULE_TEMPLATE = """\
// This file is automatically generated. Make changes to it at your own risk.

/* eslint-disable */

export const Emojis = {emojis};

export const EmojiIndicesByAlias = new Map({alias_index});

export const EmojiIndicesByUnicode = new Map({codepoint_index});

export const CategoryNames = {category_names};

export const EmojiIndicesByCategory = new Map({category_index});

/* eslint-enable */
"""


def to_json_str(value) -> str:
    try:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as err:
        raise OutputSerializationFailure(f"failed to serialize output: {err}") from err


def result_to_data(result: MergeResult) -> dict:
    return dict(
        emojis=[emoji.to_data() for emoji in result.emojis],
        emojiIndicesByAlias=[list(pair) for pair in result.alias_index],
        emojiIndicesByUnicode=[list(pair) for pair in result.codepoint_index],
        categoryNames=list(result.category_names),
        emojiIndicesByCategory=[
            [name, list(indices)] for name, indices in result.category_index
        ],
    )


def to_js_module(result: MergeResult, header=None) -> str:
    data = result_to_data(result)
    body = JS_MODULE_TEMPLATE.format(
        emojis=to_json_str(data["emojis"]),
        alias_index=to_json_str(data["emojiIndicesByAlias"]),
        codepoint_index=to_json_str(data["emojiIndicesByUnicode"]),
        category_names=to_json_str(data["categoryNames"]),
        category_index=to_json_str(data["emojiIndicesByCategory"]),
    )

    if header:
        lines = [f"// {line}".rstrip() for line in header.splitlines()]
        return "\n".join(lines) + "\n\n" + body

    return body


def to_json_document(result: MergeResult) -> str:
    try:
        return json.dumps(result_to_data(result), indent=2, ensure_ascii=False) + "\n"
    except (TypeError, ValueError) as err:
        raise OutputSerializationFailure(f"failed to serialize output: {err}") from err


FORMATS = ["js", "json"]


def render(result: MergeResult, format_="js", header=None) -> str:
    match format_:
        case "js":
            return to_js_module(result, header)
        case "json":
            return to_json_document(result)
        case _:
            raise OutputSerializationFailure(f"unknown output format {format_!r}")


def write_output(text: str, output_path="-"):
    try:
        if output_path == "-":
            sys.stdout.write(text)
            return

        with open(output_path, "w", encoding="utf-8") as f:
            f.write(text)
    except (OSError, UnicodeEncodeError) as err:
        raise OutputSerializationFailure(
            f"failed to write {output_path}: {err}"
        ) from err
