"""Detection of SSE-family x86 features through operating-system facilities.

Each platform exposes these features differently: Linux and Android list
them in ``/proc/cpuinfo``, FreeBSD in ``/var/run/dmesg.boot``, Darwin
through ``sysctlbyname`` and Windows through ``IsProcessorFeaturePresent``.
The functions here take the data source as an argument so that callers
supply the real one or a stand-in.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import IO, Callable

from cpufeat.line_reader import StackLineReader
from cpufeat.string_view import (
    get_attribute_key_value,
    has_word,
    index_of_char,
    starts_with,
)

LINUX_CPUINFO_PATH = "/proc/cpuinfo"
FREEBSD_DMESG_PATH = "/var/run/dmesg.boot"

_LINUX_FLAGS = {
    "sse": "sse",
    "sse2": "sse2",
    "sse3": "pni",
    "ssse3": "ssse3",
    "sse4_1": "sse4_1",
    "sse4_2": "sse4_2",
}

_FREEBSD_FLAGS = {
    "sse": "SSE",
    "sse2": "SSE2",
    "sse3": "SSE3",
    "ssse3": "SSSE3",
    "sse4_1": "SSE4.1",
    "sse4_2": "SSE4.2",
}

_DARWIN_SYSCTLS = {
    "sse": "hw.optional.sse",
    "sse2": "hw.optional.sse2",
    "sse3": "hw.optional.sse3",
    "ssse3": "hw.optional.supplementalsse3",
    "sse4_1": "hw.optional.sse4_1",
    "sse4_2": "hw.optional.sse4_2",
}

_DARWIN_AVX512F = "hw.optional.avx512f"


class ProcessorFeature(IntEnum):
    """Windows ``IsProcessorFeaturePresent`` identifiers used here."""

    XMMI_INSTRUCTIONS_AVAILABLE = 6
    XMMI64_INSTRUCTIONS_AVAILABLE = 10
    SSE3_INSTRUCTIONS_AVAILABLE = 13
    SSSE3_INSTRUCTIONS_AVAILABLE = 36
    SSE4_1_INSTRUCTIONS_AVAILABLE = 37
    SSE4_2_INSTRUCTIONS_AVAILABLE = 38


_WINDOWS_FEATURES = {
    "sse": ProcessorFeature.XMMI_INSTRUCTIONS_AVAILABLE,
    "sse2": ProcessorFeature.XMMI64_INSTRUCTIONS_AVAILABLE,
    "sse3": ProcessorFeature.SSE3_INSTRUCTIONS_AVAILABLE,
    "ssse3": ProcessorFeature.SSSE3_INSTRUCTIONS_AVAILABLE,
    "sse4_1": ProcessorFeature.SSE4_1_INSTRUCTIONS_AVAILABLE,
    "sse4_2": ProcessorFeature.SSE4_2_INSTRUCTIONS_AVAILABLE,
}


@dataclass
class X86OsFeatures:
    """SSE-family features as reported by the operating system."""

    sse: bool = False
    sse2: bool = False
    sse3: bool = False
    ssse3: bool = False
    sse4_1: bool = False
    sse4_2: bool = False


def detect_features_from_linux_cpuinfo(stream: IO | None) -> X86OsFeatures:
    """Read the first ``flags`` line of a ``/proc/cpuinfo`` stream.

    A missing stream or one without a ``flags`` line yields no features.
    """
    features = X86OsFeatures()
    if stream is None:
        return features
    for result in StackLineReader(stream):
        pair = get_attribute_key_value(result.line)
        if pair is None:
            continue
        key, value = pair
        if key != "flags":
            continue
        for attribute, word in _LINUX_FLAGS.items():
            setattr(features, attribute, has_word(value, word, " "))
        break
    return features


def _angle_bracket_contents(line: str) -> str:
    index = index_of_char(line, "<")
    if index >= 0:
        line = line[index + 1:]
    if line.endswith(">"):
        line = line[:-1]
    return line


def detect_features_from_freebsd_dmesg(stream: IO | None) -> X86OsFeatures:
    """Scan the ``  Features`` lines of a FreeBSD ``dmesg.boot`` stream.

    Features are accumulated over every such line.
    """
    features = X86OsFeatures()
    if stream is None:
        return features
    for result in StackLineReader(stream):
        if not starts_with(result.line, "  Features"):
            continue
        csv = _angle_bracket_contents(result.line)
        for attribute, word in _FREEBSD_FLAGS.items():
            if has_word(csv, word, ","):
                setattr(features, attribute, True)
    return features


def detect_features_from_darwin(sysctl: Callable[[str], bool]) -> X86OsFeatures:
    """Query ``hw.optional.*`` names through the ``sysctl`` callable."""
    return X86OsFeatures(
        **{attribute: bool(sysctl(name)) for attribute, name in _DARWIN_SYSCTLS.items()}
    )


def detect_features_from_windows(
    is_feature_present: Callable[[ProcessorFeature], bool],
) -> X86OsFeatures:
    """Query processor features through the ``is_feature_present`` callable."""
    return X86OsFeatures(
        **{
            attribute: bool(is_feature_present(feature))
            for attribute, feature in _WINDOWS_FEATURES.items()
        }
    )


def darwin_avx512_registers(sysctl: Callable[[str], bool]) -> bool:
    """Return whether Darwin preserves AVX-512 registers.

    On Darwin AVX-512 support is enabled on demand, so the OS is asked
    instead of inspecting the saved register state.
    """
    return bool(sysctl(_DARWIN_AVX512F))