"""CPU feature tables, cpuinfo text parsing, cache descriptions and reports."""

__version__ = "0.1.0"

__all__ = [
    "aarch64",
    "cache_info",
    "introspection",
    "line_reader",
    "report",
    "s390x",
    "string_view",
    "x86_os",
]