"""
Parser for the Prometheus text exposition format.

Inverse of the formatter: turns exposition text back into (name, labels,
value) samples grouped by family. Useful for verifying rendered output and
for consumers that scrape another process.

Usage:
    for family in parse_text(body):
        for sample in family.samples:
            print(sample.name, sample.label_dict(), sample.value)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from metrics_core.core.constants import HISTOGRAM_SUFFIXES
from metrics_core.core.exceptions import InvalidValue
from metrics_core.metrics.snapshot import Sample

_SPECIAL_VALUES = {"+Inf": float("inf"), "Inf": float("inf"), "-Inf": float("-inf"), "NaN": float("nan")}
_UNESCAPE = {"\\": "\\", "n": "\n", '"': '"'}


@dataclass
class ParsedFamily:
    """One family block: metadata from HELP/TYPE plus its samples."""

    name: str
    help: str = ""
    type: str = "untyped"
    samples: list[Sample] = field(default_factory=list)


def parse_value(text: str) -> float:
    if text in _SPECIAL_VALUES:
        return _SPECIAL_VALUES[text]
    try:
        return float(text)
    except ValueError:
        raise InvalidValue(f"Unparseable sample value {text!r}", value=text) from None


def _unescape(text: str) -> str:
    out = []
    chars = iter(text)
    for char in chars:
        if char == "\\":
            nxt = next(chars, "")
            out.append(_UNESCAPE.get(nxt, "\\" + nxt))
        else:
            out.append(char)
    return "".join(out)


def _parse_labels(text: str, line: str) -> tuple[tuple[str, str], ...]:
    """Parse the inside of a ``{...}`` block."""
    pairs = []
    pos = 0
    length = len(text)
    while pos < length:
        eq = text.find("=", pos)
        if eq == -1:
            raise InvalidValue("Malformed label block", value=line)
        name = text[pos:eq].strip()
        if eq + 1 >= length or text[eq + 1] != '"':
            raise InvalidValue("Label value must be quoted", value=line)

        # Scan to the closing quote, skipping escaped characters
        cursor = eq + 2
        value_chars = []
        while cursor < length and text[cursor] != '"':
            if text[cursor] == "\\" and cursor + 1 < length:
                value_chars.append(text[cursor:cursor + 2])
                cursor += 2
            else:
                value_chars.append(text[cursor])
                cursor += 1
        if cursor >= length:
            raise InvalidValue("Unterminated label value", value=line)

        pairs.append((name, _unescape("".join(value_chars))))
        pos = cursor + 1
        while pos < length and text[pos] in ", ":
            pos += 1
    return tuple(pairs)


def parse_sample(line: str) -> Sample:
    """Parse one series line; a trailing timestamp is ignored."""
    brace = line.find("{")
    if brace != -1:
        # Find the closing brace outside quoted label values
        in_quotes = False
        escaped = False
        close = -1
        for index in range(brace + 1, len(line)):
            char = line[index]
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_quotes = not in_quotes
            elif char == "}" and not in_quotes:
                close = index
                break
        if close == -1:
            raise InvalidValue("Unterminated label block", value=line)
        name = line[:brace].strip()
        labels = _parse_labels(line[brace + 1:close], line)
        rest = line[close + 1:].split()
    else:
        parts = line.split()
        name, labels, rest = parts[0], (), parts[1:]

    if not rest:
        raise InvalidValue("Sample line has no value", value=line)
    return Sample(name, labels, parse_value(rest[0]))


def _family_name(sample_name: str, families: dict[str, ParsedFamily]) -> str:
    if sample_name in families:
        return sample_name
    for suffix in HISTOGRAM_SUFFIXES:
        if sample_name.endswith(suffix):
            base = sample_name[: -len(suffix)]
            if base in families:
                return base
    return sample_name


def parse_text(text: str) -> Iterator[ParsedFamily]:
    """Parse exposition text into families in document order."""
    families: dict[str, ParsedFamily] = {}

    for raw in text.split("\n"):
        line = raw.strip()
        if not line:
            continue

        if line.startswith("#"):
            # Split the unstripped line: HELP text keeps its own whitespace
            parts = raw.lstrip().split(" ", 3)
            if len(parts) >= 3 and parts[1] in ("HELP", "TYPE"):
                family = families.setdefault(parts[2], ParsedFamily(parts[2]))
                detail = parts[3] if len(parts) == 4 else ""
                if parts[1] == "HELP":
                    family.help = _unescape(detail)
                else:
                    family.type = detail.strip()
            continue

        sample = parse_sample(line)
        name = _family_name(sample.name, families)
        families.setdefault(name, ParsedFamily(name)).samples.append(sample)

    yield from families.values()
