"""
Emoji merger

Merges the canonical emoji list with the EmojiOne categorization data into
the lookup tables used by the client: the emoji list itself, emoji indices by
alias, by unicode codepoint and by category.

Every index refers to emojis by their position in the input list, so the
output list is never reordered.
"""

import sys

from types import MappingProxyType
from typing import Iterable
from dataclasses import dataclass, field

from emojidata import EmojiRecord, CategoryRecord


VARIATION_SELECTORS = range(0xFE00, 0xFE0F + 1)


class Context:
    def __init__(self):
        self.msgs = []

    def warn(self, type_, data):
        self.msgs.append(dict(level="warn", type=type_, data=data))

    def error(self, type_, data):
        self.msgs.append(dict(level="error", type=type_, data=data))

    def messages_of_type(self, type_):
        return [msg for msg in self.msgs if msg["type"] == type_]

    def print_messages(self, file=None):
        file = file or sys.stderr
        for msg in self.msgs:
            print(msg["level"], msg["type"], msg["data"], file=file)


def codepoint_for_glyph(glyph: str | None) -> str:
    """Returns the hyphen joined lowercase hex codepoints of glyph.

    Variation selectors are dropped since they only change how the emoji is
    rendered, "☺️" (U+263A U+FE0F) gives "263a".
    """
    if not glyph:
        return ""

    return "-".join(
        f"{ord(char):04x}" for char in glyph if ord(char) not in VARIATION_SELECTORS
    )


@dataclass(frozen=True)
class CategoryConfig:
    default: str = "custom"
    # keyed by the primary alias
    overrides: MappingProxyType = field(
        default_factory=lambda: MappingProxyType(
            {"e-mail": "objects", "city_sunset": "travel"}
        )
    )
    # EmojiOne treats these as aliases of other emojis while we use
    # different images for them
    ignored: frozenset = frozenset({"e-mail", "email", "city_sunset", "city-sunset"})


DEFAULT_CATEGORY_CONFIG = CategoryConfig()


def static_category(
    record: EmojiRecord, config: CategoryConfig = DEFAULT_CATEGORY_CONFIG
) -> str | None:
    return config.overrides.get(record.primary_alias)


def find_category_record(
    record: EmojiRecord,
    category_records: Iterable[CategoryRecord],
    config: CategoryConfig = DEFAULT_CATEGORY_CONFIG,
) -> CategoryRecord | None:
    category_records = list(category_records)

    for alias in record.aliases:
        if alias in config.ignored:
            continue

        for category_record in category_records:
            if category_record.matches_alias(alias):
                return category_record

    return None


def resolve_category(
    record: EmojiRecord,
    category_records: Iterable[CategoryRecord],
    config: CategoryConfig = DEFAULT_CATEGORY_CONFIG,
) -> str:
    category = static_category(record, config)
    if category is not None:
        return category

    category_record = find_category_record(record, category_records, config)
    if category_record is not None and category_record.category:
        return category_record.category

    return config.default


@dataclass
class OutputEmoji:
    aliases: list[str]
    filename: str = ""

    def to_data(self):
        return dict(aliases=self.aliases, filename=self.filename)


@dataclass
class MergeResult:
    emojis: list[OutputEmoji]
    alias_index: list[tuple[str, int]]
    codepoint_index: list[tuple[str, int]]
    category_names: list[str]
    category_index: list[tuple[str, list[int]]]

    def aliases(self) -> dict[str, int]:
        return dict(self.alias_index)

    def codepoints(self) -> dict[str, int]:
        return dict(self.codepoint_index)

    def categories(self) -> dict[str, list[int]]:
        return dict(self.category_index)


class EmojiIndexBuilder:
    def __init__(self, category_records, config=DEFAULT_CATEGORY_CONFIG, ctx=None):
        self.category_records = list(category_records)
        self.config = config
        self.ctx = ctx or Context()

        self.emojis = []
        self.index_by_alias = {}
        # dicts keep insertion order, that's the order codepoints are output in
        self.index_by_codepoint = {}
        self.index_by_category = {}

    def register(self, table, key, i, type_):
        other_i = table.get(key)
        if other_i is not None and other_i != i:
            self.ctx.warn(
                type_,
                dict(
                    key=key,
                    index=i,
                    emoji=self.emojis[i].to_data(),
                    other_index=other_i,
                    other=self.emojis[other_i].to_data(),
                ),
            )

        table[key] = i

    def add(self, record: EmojiRecord):
        i = len(self.emojis)
        emoji = OutputEmoji(list(record.aliases))
        self.emojis.append(emoji)

        codepoint = codepoint_for_glyph(record.emoji)
        if codepoint:
            self.register(self.index_by_codepoint, codepoint, i, "duplicate-codepoint")
            # emojis with a unicode equivalent use the codepoint as their filename
            emoji.filename = codepoint

        for alias in record.aliases:
            self.register(self.index_by_alias, alias, i, "duplicate-alias")

        category = resolve_category(record, self.category_records, self.config)
        if category:
            self.index_by_category.setdefault(category, []).append(i)

        return emoji

    def to_result(self) -> MergeResult:
        return MergeResult(
            emojis=self.emojis,
            alias_index=sorted(self.index_by_alias.items()),
            codepoint_index=list(self.index_by_codepoint.items()),
            category_names=list(self.index_by_category),
            category_index=[
                (name, indices) for name, indices in self.index_by_category.items()
            ],
        )


def merge_emojis(
    records: Iterable[EmojiRecord],
    category_records: Iterable[CategoryRecord],
    config: CategoryConfig = DEFAULT_CATEGORY_CONFIG,
    ctx: Context | None = None,
) -> MergeResult:
    builder = EmojiIndexBuilder(category_records, config, ctx)

    for record in records:
        builder.add(record)

    return builder.to_result()
