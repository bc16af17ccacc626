"""Build and render reports of processor features.

A report is a tree of plain Python values: dicts (ordered maps), lists,
ints and strings. It renders either as JSON or as aligned text.
"""

from __future__ import annotations

from typing import Any

from cpufeat.aarch64 import Aarch64Info
from cpufeat.cache_info import CacheInfo
from cpufeat.introspection import FeatureSet, feature_enum_name
from cpufeat.s390x import S390XInfo, S390XPlatformStrings

_JSON_ESCAPED = frozenset('"\\/\b\f\n\r\t')
_KEY_WIDTH = 15


def flag_names(features: FeatureSet) -> list[str]:
    """Return the names of the enabled features, sorted."""
    return sorted(feature_enum_name(type(member), member) for member in features.enabled())


def cache_info_entries(cache_info: CacheInfo) -> list[dict[str, Any]]:
    """Describe every cache level as a map."""
    return [
        {
            "level": level.level,
            "cache_type": level.cache_type.label,
            "cache_size": level.cache_size,
            "ways": level.ways,
            "line_size": level.line_size,
            "tlb_entries": level.tlb_entries,
            "partitioning": level.partitioning,
        }
        for level in cache_info
    ]


def aarch64_report(info: Aarch64Info) -> dict[str, Any]:
    """Build the report tree for an AArch64 processor."""
    return {
        "arch": "aarch64",
        "implementer": info.implementer,
        "variant": info.variant,
        "part": info.part,
        "revision": info.revision,
        "flags": flag_names(info.features),
    }


def s390x_report(info: S390XInfo, strings: S390XPlatformStrings) -> dict[str, Any]:
    """Build the report tree for an s390x processor."""
    return {
        "arch": "s390x",
        "platform": "zSeries",
        "model": strings.platform,
        "# processors": strings.num_processors,
        "flags": flag_names(info.features),
    }


def _as_signed(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def _as_unsigned(value: int) -> int:
    return value & 0xFFFFFFFF


def _json_string(text: str) -> str:
    escaped = "".join("\\" + ch if ch in _JSON_ESCAPED else ch for ch in text)
    return f'"{escaped}"'


def _is_int(node: Any) -> bool:
    return isinstance(node, int) and not isinstance(node, bool)


def _json_entries(mapping: dict) -> str:
    return ",".join(f'"{key}":{render_json(value)}' for key, value in mapping.items())


def render_json(tree: Any) -> str:
    """Render a report tree as compact JSON.

    Quotes, backslashes, slashes and control characters in strings are
    preceded by a backslash; map keys are written as they are.
    """
    if isinstance(tree, dict):
        return "{" + _json_entries(tree) + "}"
    if isinstance(tree, list):
        return "[" + ",".join(render_json(item) for item in tree) + "]"
    if isinstance(tree, str):
        return _json_string(tree)
    if _is_int(tree):
        return str(_as_signed(tree))
    raise TypeError(f"cannot render {type(tree).__name__} in a report")


def _text_field(node: Any) -> str:
    if isinstance(node, dict):
        return "{" + _json_entries(node) + "}" if node else ""
    if isinstance(node, list):
        return ",".join(_text_field(item) for item in node)
    if isinstance(node, str):
        return node
    if _is_int(node):
        return f"{_as_signed(node):3d} (0x{_as_unsigned(node):02X})"
    raise TypeError(f"cannot render {type(node).__name__} in a report")


def render_text(tree: dict[str, Any]) -> str:
    """Render a report map as one ``key : value`` line per entry."""
    if not isinstance(tree, dict):
        raise TypeError("the root of a report must be a map")
    return "\n".join(
        f"{key:<{_KEY_WIDTH}} : {_text_field(value)}" for key, value in tree.items()
    )


def usage(name: str) -> str:
    """Return the help message of the feature-listing command."""
    return (
        "\n"
        f"Usage: {name} [options]\n"
        "      Options:\n"
        "      -h | --help     Show help message.\n"
        "      -j | --json     Format output as json instead of plain text.\n"
        "\n"
    )