"""Strip markdown and escape artifacts from analysis-generated text."""

import dataclasses
import re

_PAIRED_MARKERS = [
    re.compile(r"\*\*(.+?)\*\*", re.DOTALL),
    re.compile(r"__(.+?)__", re.DOTALL),
    re.compile(r"~~(.+?)~~", re.DOTALL),
    re.compile(r"\*(.+?)\*", re.DOTALL),
    re.compile(r"_(.+?)_", re.DOTALL),
    re.compile(r"`(.+?)`", re.DOTALL),
]
_STRAY_MARKERS = re.compile(r"[*`_~]")
_ESCAPED_CHAR = re.compile(r"\\(.)")
_EXTRA_NEWLINES = re.compile(r"\n{3,}")
_EXTRA_SPACES = re.compile(r" {2,}")


def clean_ai_text(text: str | None) -> str:
    """Turn model output into plain display text.

    Literal ``\\n``/``\\t`` sequences become real whitespace, emphasis and
    code markers are dropped (keeping their content), escapes are undone
    and runs of blank lines/spaces are collapsed.
    """
    if not text:
        return ""
    text = text.replace("\\n", "\n").replace("\\t", "    ")
    for pattern in _PAIRED_MARKERS:
        text = pattern.sub(r"\1", text)
    text = _STRAY_MARKERS.sub("", text)
    text = _ESCAPED_CHAR.sub(r"\1", text)
    text = _EXTRA_NEWLINES.sub("\n\n", text)
    text = _EXTRA_SPACES.sub(" ", text)
    return text.strip()


def clean_list(items: list[str]) -> list[str]:
    cleaned = (clean_ai_text(item) for item in items)
    return [item for item in cleaned if item]


def sanitize_fields(obj, skip: frozenset[str] = frozenset()):
    """Return a copy of a dataclass with every str / list[str] field cleaned.

    Nested dataclasses are handled recursively; fields named in `skip` are
    left untouched.
    """
    changes = {}
    for f in dataclasses.fields(obj):
        if f.name in skip:
            continue
        value = getattr(obj, f.name)
        if dataclasses.is_dataclass(value):
            changes[f.name] = sanitize_fields(value, skip)
        elif isinstance(value, str) and not _is_enum(value):
            changes[f.name] = clean_ai_text(value)
        elif isinstance(value, list) and all(isinstance(v, str) for v in value):
            changes[f.name] = clean_list(value)
    return dataclasses.replace(obj, **changes)


def _is_enum(value) -> bool:
    return type(value) is not str
