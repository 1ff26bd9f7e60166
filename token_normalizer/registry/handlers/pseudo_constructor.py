"""Tokenizer for the Figma compact export's Font(...) and Effect(...) strings.

The grammar is fixed by the exporter: a constructor name, then `key: value`
pairs where a value is either double-quoted or runs to the next comma or
closing parenthesis. Unknown keys are kept; callers pick what they need.
"""

import re

PAIR_PATTERN = re.compile(r'(\w+):\s*(?:"([^"]+)"|([^,)]+))')
LEADING_NUMBER = re.compile(r"^-?(?:\d+(?:\.\d+)?|\.\d+)")


def constructor_body(raw: str, name: str) -> str | None:
    """Return the text between `Name(` and the final `)`, or None."""
    raw = raw.strip()
    prefix = f"{name}("
    if not raw.startswith(prefix) or not raw.endswith(")"):
        return None
    return raw[len(prefix) : -1]


def parse_pairs(body: str) -> dict[str, str | float]:
    """Tokenize `key: value` pairs; numeric values become floats.

    Args:
        body: Constructor body without the name and outer parentheses.

    Returns:
        Mapping of key to a float when the value starts with a number,
        otherwise the stripped string.
    """
    pairs: dict[str, str | float] = {}
    for match in PAIR_PATTERN.finditer(body):
        key = match.group(1)
        value = match.group(2) if match.group(2) is not None else match.group(3).strip()
        number = LEADING_NUMBER.match(value)
        pairs[key] = float(number.group(0)) if number else value
    return pairs


def split_constructors(raw: str, name: str) -> list[str]:
    """Split "Name(...), Name(...)" into the individual constructor strings."""
    parts: list[str] = []
    depth = 0
    start = 0
    for index, char in enumerate(raw):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append(raw[start:index].strip())
            start = index + 1
    parts.append(raw[start:].strip())
    return [part for part in parts if part.startswith(f"{name}(")]
