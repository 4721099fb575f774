import json

from typing import Self
from pathlib import Path
from dataclasses import dataclass, field

import requests


FETCH_TIMEOUT = 30


class EmojiSourceError(Exception):
    def __init__(self, source, message):
        super().__init__(f"{source}: {message}")
        self.source = source


class SourceUnavailable(EmojiSourceError):
    """The source could not be opened, read or downloaded."""


class SourceMalformed(EmojiSourceError):
    """The source was read but its content has the wrong shape."""


def is_url(source) -> bool:
    return str(source).startswith(("http://", "https://"))


def fetch_json(url, timeout=FETCH_TIMEOUT):
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()  # Raise an error if the request failed
    except requests.RequestException as err:
        raise SourceUnavailable(url, f"download failed: {err}") from err

    try:
        return response.json()
    except ValueError as err:
        raise SourceMalformed(url, f"invalid JSON: {err}") from err


def read_json(path):
    try:
        with open(path, "r", encoding="utf-8") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError) as err:
        raise SourceUnavailable(path, f"read failed: {err}") from err

    try:
        return json.loads(text)
    except json.JSONDecodeError as err:
        raise SourceMalformed(path, f"invalid JSON: {err}") from err


def load_json(source):
    if is_url(source):
        return fetch_json(source)

    return read_json(Path(source))


def ensure_str_list(value, source, what) -> list[str]:
    if value is None:
        return []

    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise SourceMalformed(source, f"{what} must be a list of strings, got {value!r}")

    return list(value)


@dataclass
class EmojiRecord:
    aliases: list[str]
    emoji: str = ""
    description: str = ""
    tags: list[str] = field(default_factory=list)

    @property
    def primary_alias(self) -> str:
        return self.aliases[0]

    @classmethod
    def from_data(cls, d, source="<emoji>") -> Self:
        if not isinstance(d, dict):
            raise SourceMalformed(source, f"emoji entry must be an object, got {d!r}")

        aliases = ensure_str_list(d.get("aliases"), source, "aliases")
        if not aliases:
            raise SourceMalformed(source, f"emoji entry has no aliases: {d!r}")

        emoji = d.get("emoji") or ""
        description = d.get("description") or ""
        if not isinstance(emoji, str) or not isinstance(description, str):
            raise SourceMalformed(source, f"emoji and description must be strings: {d!r}")

        tags = ensure_str_list(d.get("tags"), source, "tags")

        return cls(aliases, emoji, description, tags)


@dataclass
class CategoryRecord:
    key: str
    unicode: str = ""
    shortname: str = ""
    category: str = ""
    aliases: list[str] = field(default_factory=list)

    def matches_alias(self, alias: str) -> bool:
        wrapped = f":{alias}:"
        return self.shortname == wrapped or wrapped in self.aliases

    @classmethod
    def from_data(cls, key, d, source="<emoji-one>") -> Self:
        if not isinstance(d, dict):
            raise SourceMalformed(source, f"entry {key!r} must be an object, got {d!r}")

        fields = {}
        for name in ("unicode", "shortname", "category"):
            value = d.get(name) or ""
            if not isinstance(value, str):
                raise SourceMalformed(source, f"entry {key!r} field {name} must be a string")
            fields[name] = value

        aliases = ensure_str_list(d.get("aliases"), source, f"entry {key!r} aliases")

        return cls(str(key), aliases=aliases, **fields)


def parse_emoji_records(data, source="<emoji>") -> list[EmojiRecord]:
    if not isinstance(data, list):
        raise SourceMalformed(source, "expected a list of emoji objects")

    return [EmojiRecord.from_data(d, source) for d in data]


def parse_category_records(data, source="<emoji-one>") -> list[CategoryRecord]:
    match data:
        case dict():
            items = data.items()
        case list():
            items = enumerate(data)
        case _:
            raise SourceMalformed(source, "expected an object or a list of entries")

    return [CategoryRecord.from_data(key, d, source) for key, d in items]


def load_emoji_records(source) -> list[EmojiRecord]:
    return parse_emoji_records(load_json(source), str(source))


def load_category_records(source) -> list[CategoryRecord]:
    return parse_category_records(load_json(source), str(source))
