# cpufeat

Building blocks for describing what a CPU can do. The package parses the
text that operating systems publish about the processor, keeps
per-architecture feature flags that can be queried by name or by enum
member, describes cache levels, and renders a report as aligned text or
compact JSON.

It has no runtime dependencies and supports Python 3.10 and later.

## Modules

- `cpufeat.string_view` – text helpers for cpuinfo-style input:
  `index_of_char`, `index_of`, `starts_with`, `trim_whitespace`,
  `parse_positive_number` (decimal or `0x` hexadecimal; `-1` when the text
  is empty or not a number), `copy_string` (truncates to fit a buffer of a
  given size, terminator included), `has_word` (whole-word search with a
  chosen separator) and `get_attribute_key_value` (splits a `"key : value"`
  line into a trimmed pair, or returns `None`). Searches stop at the first
  NUL character.
- `cpufeat.line_reader` – `StackLineReader` reads a text or binary stream
  line by line through a bounded buffer (`buffer_size`, 1024 by default)
  and returns `LineResult` records with `line`, `eof` and `full_line`.
  Lines longer than the buffer come back truncated (`full_line` is False)
  and the rest of them is skipped. Iterating the reader yields results up
  to and including the end-of-file one.
- `cpufeat.cache_info` – `CacheType` (with a lower-case `label`),
  `CacheLevelInfo`, and `CacheInfo`, an ordered collection of at most
  `CacheInfo.MAX_LEVELS` (10) levels; `add` raises `OverflowError` past
  that.
- `cpufeat.introspection` – `FeatureSet`, the base of every
  architecture's feature flags, readable by attribute name or by enum
  member, with `enabled()` listing the set members in enum order; and
  `feature_enum_value` / `feature_enum_name`. Values outside the enum read
  as False and are named `"unknown_feature"`.
- `cpufeat.aarch64` – `Aarch64FeaturesEnum`, `Aarch64Features`,
  `Aarch64Info` (`features`, `implementer`, `variant`, `part`,
  `revision`), `get_aarch64_features_enum_value` and
  `get_aarch64_features_enum_name`.
- `cpufeat.s390x` – `S390XFeaturesEnum`, `S390XFeatures`, `S390XInfo`,
  `S390XPlatformStrings` (`num_processors`, -1 when unknown, and
  `platform`, cut to 63 characters), `get_s390x_features_enum_value` and
  `get_s390x_features_enum_name`.
- `cpufeat.x86_os` – the SSE family (`X86OsFeatures`: `sse`, `sse2`,
  `sse3`, `ssse3`, `sse4_1`, `sse4_2`) as reported by the operating system:
  `detect_features_from_linux_cpuinfo` (first `flags` line of a
  `/proc/cpuinfo` stream), `detect_features_from_freebsd_dmesg` (every
  `  Features` line of a `dmesg.boot` stream), `detect_features_from_darwin`
  (a `sysctl` lookup callable), `detect_features_from_windows` (a callable
  taking a `ProcessorFeature`), and `darwin_avx512_registers`. The caller
  supplies the stream or the lookup function; a `None` stream yields no
  features.
- `cpufeat.report` – builds report trees of plain dicts, lists, ints and
  strings (`aarch64_report`, `s390x_report`, with `flag_names` and
  `cache_info_entries`) and renders them with `render_json` or
  `render_text`; `usage(name)` returns a help message text.

## Examples

```python
import io

from cpufeat.x86_os import detect_features_from_linux_cpuinfo

cpuinfo = io.StringIO(
    "processor       : 0\n"
    "flags           : fpu mmx sse sse2 pni ssse3 sse4_1 sse4_2\n"
)
features = detect_features_from_linux_cpuinfo(cpuinfo)
print(features.sse3)  # True ("pni" in the flags line)
```

Feature sets and reports:

```python
from cpufeat.aarch64 import Aarch64Features, Aarch64FeaturesEnum, Aarch64Info
from cpufeat.report import aarch64_report, render_json, render_text

info = Aarch64Info(
    features=Aarch64Features(fp=True, asimd=True, aes=True),
    implementer=0x41,
    part=0xD03,
    revision=3,
)
print(info.features[Aarch64FeaturesEnum.AES])  # True
tree = aarch64_report(info)
print(render_text(tree))
print(render_json(tree))
```

Text helpers:

```python
from cpufeat.string_view import get_attribute_key_value, has_word, parse_positive_number

parse_positive_number("0xd03")            # 3331
has_word("fp asimd aes", "aes", " ")      # True
has_word("fp asimd aes", "asi", " ")      # False
get_attribute_key_value("CPU part    : 0xd03")  # ("CPU part", "0xd03")
```

## What it does not do

- It does not probe the processor. Nothing here executes CPUID, reads
  hardware capability bits, or fills an `Aarch64Info`, `S390XInfo` or
  `S390XPlatformStrings` from the running machine; the caller builds them.
- The x86 support covers only the SSE family as the operating system
  reports it. There is no x86 vendor, family, model, brand string,
  microarchitecture or cache detection.
- Of the architectures, only AArch64 and s390x have feature tables; ARM,
  MIPS, PowerPC, RISC-V and LoongArch do not.
- There is no command-line program. `cpufeat.report` renders reports and
  provides a help text, but nothing installs or runs a command.