"""Kubernetes Secret manifest rendering.

The manifest is written by hand rather than dumped with ``yaml.safe_dump``
so that secret values are emitted as literal blocks, which keeps
multi-line values such as certificates or config files readable and
byte-exact. Values a literal block cannot carry fall back to an escaped
double-quoted scalar.
"""

import re
from collections.abc import Mapping

import yaml

_VALUE_INDENT = "    "

# Anything outside YAML's printable set, plus the line breaks other than \n
# (\r, NEL, LS, PS) and the byte order mark
_BLOCK_UNSAFE_PATTERN = re.compile(
    r"[^\x09\x0a\x20-\x7e\xa0-\u2027\u202a-\ud7ff\ue000-\ufefe\uff00-\ufffd\U00010000-\U0010ffff]"
)


def _scalar(value: str) -> str:
    """Render a plain YAML scalar, quoting it if YAML would not read it back as the same string.

    Args:
        value: The string to render.

    Returns:
        The value itself, or the value in single quotes.

    """
    try:
        if yaml.safe_load(value) == value:
            return value
    except yaml.YAMLError:
        pass
    escaped = value.replace("'", "''")
    return f"'{escaped}'"


def _literal_block(value: str) -> list[str]:
    """Render a value as a literal block scalar.

    Args:
        value: The secret value, possibly spanning several lines.

    Returns:
        The block header followed by the indented content lines.

    """
    chomping = "-"
    body = value
    if value.endswith("\n"):
        # Keep chomping preserves the trailing line breaks
        chomping = "+"
        body = value[:-1]

    lines = body.split("\n") if body or chomping == "+" else []

    indicator = ""
    first = next((line for line in lines if line), "")
    if first.startswith(" "):
        indicator = "2"

    header = f"|{indicator}{chomping}"
    content = [f"{_VALUE_INDENT}{line}" if line else "" for line in lines]
    return [header, *content]


def _double_quoted(value: str) -> str:
    """Render a value as an escaped double-quoted scalar on a single line."""
    dumped = yaml.safe_dump(value, default_style='"', width=float("inf"))
    return dumped.removesuffix("\n...\n").rstrip("\n")


def build_secret_manifest(name: str, namespace: str, data: Mapping[str, str]) -> str:
    """Build an Opaque Secret manifest with literal ``stringData`` values.

    The function is pure: equal inputs always render byte-identical text,
    regardless of the insertion order of ``data``.

    Args:
        name: The name of the secret.
        namespace: The Kubernetes namespace for the secret.
        data: Plaintext secret contents.

    Returns:
        The manifest as YAML text, terminated by a newline.

    """
    lines: list[str] = [
        "apiVersion: v1",
        "kind: Secret",
        "metadata:",
        f"  name: {_scalar(name)}",
        f"  namespace: {_scalar(namespace)}",
        "type: Opaque",
    ]

    if data:
        lines.append("stringData:")
        for key in sorted(data):
            value = data[key]
            if _BLOCK_UNSAFE_PATTERN.search(value):
                lines.append(f"  {_scalar(key)}: {_double_quoted(value)}")
                continue
            header, *content = _literal_block(value)
            lines.append(f"  {_scalar(key)}: {header}")
            lines.extend(content)

    return "\n".join(lines) + "\n"
