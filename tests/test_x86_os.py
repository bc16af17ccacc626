import io

import pytest

from cpufeat.x86_os import (
    ProcessorFeature,
    X86OsFeatures,
    darwin_avx512_registers,
    detect_features_from_darwin,
    detect_features_from_freebsd_dmesg,
    detect_features_from_linux_cpuinfo,
    detect_features_from_windows,
)

ALL_SSE = X86OsFeatures(
    sse=True, sse2=True, sse3=True, ssse3=True, sse4_1=True, sse4_2=True
)
ONLY_SSE = X86OsFeatures(sse=True)

NEHALEM_CPUINFO = """processor       :
flags           : fpu mmx sse sse2 pni ssse3 sse4_1 sse4_2
"""

ATOM_CPUINFO = """
flags           : fpu mmx sse sse2 pni ssse3 sse4_1 sse4_2
"""

P3_CPUINFO = """
flags           : fpu mmx sse
"""

NEHALEM_DMESG = """
  ---<<BOOT>>---
Kernel boot banner line one.
Kernel boot banner line two.
  Features=0x1783fbff<FPU,VME,DE,PSE,TSC,MSR,PAE,MCE,CX8,APIC,SEP,MTRR,PGE,MCA,CMOV,PAT,PSE36,MMX,FXSR,SSE,SSE2,HTT>
  Features2=0x5eda2203<SSE3,PCLMULQDQ,SSSE3,CX16,PCID,SSE4.1,SSE4.2,MOVBE,POPCNT,AESNI,XSAVE,OSXSAVE,RDRAND>
real memory  = 2147418112 (2047 MB)
"""

P3_DMESG = """
  ---<<BOOT>>---
Kernel boot banner line one.
Kernel boot banner line two.
  Features=0x1783fbff<FPU,VME,DE,PSE,TSC,MSR,PAE,MCE,CX8,APIC,SEP,MTRR,PGE,MCA,CMOV,PAT,PSE36,MMX,FXSR,SSE>
real memory  = 2147418112 (2047 MB)
"""

ALL_DARWIN = {
    "hw.optional.sse",
    "hw.optional.sse2",
    "hw.optional.sse3",
    "hw.optional.supplementalsse3",
    "hw.optional.sse4_1",
    "hw.optional.sse4_2",
}


@pytest.mark.parametrize("text", [NEHALEM_CPUINFO, ATOM_CPUINFO])
def test_linux_all_sse(text):
    assert detect_features_from_linux_cpuinfo(io.StringIO(text)) == ALL_SSE


def test_linux_p3_only_sse():
    assert detect_features_from_linux_cpuinfo(io.StringIO(P3_CPUINFO)) == ONLY_SSE


def test_linux_bytes_stream():
    result = detect_features_from_linux_cpuinfo(io.BytesIO(NEHALEM_CPUINFO.encode()))
    assert result == ALL_SSE


def test_linux_flags_on_last_line_without_newline():
    result = detect_features_from_linux_cpuinfo(io.StringIO("flags : sse pni"))
    assert result == X86OsFeatures(sse=True, sse3=True)


def test_linux_words_must_match_whole():
    result = detect_features_from_linux_cpuinfo(io.StringIO("flags : sse2 sse4_1\n"))
    assert result == X86OsFeatures(sse2=True, sse4_1=True)


def test_linux_only_first_flags_line_counts():
    text = "flags : sse\nflags : sse sse2 pni\n"
    assert detect_features_from_linux_cpuinfo(io.StringIO(text)) == ONLY_SSE


def test_linux_without_flags_line():
    text = "processor : 0\nmodel name : something\n"
    assert detect_features_from_linux_cpuinfo(io.StringIO(text)) == X86OsFeatures()


def test_linux_missing_stream():
    assert detect_features_from_linux_cpuinfo(None) == X86OsFeatures()


def test_freebsd_nehalem():
    assert detect_features_from_freebsd_dmesg(io.StringIO(NEHALEM_DMESG)) == ALL_SSE


def test_freebsd_p3():
    assert detect_features_from_freebsd_dmesg(io.StringIO(P3_DMESG)) == ONLY_SSE


def test_freebsd_ignores_lines_without_prefix():
    text = "Features=0x1<SSE,SSE2>\n"
    assert detect_features_from_freebsd_dmesg(io.StringIO(text)) == X86OsFeatures()


def test_freebsd_missing_stream():
    assert detect_features_from_freebsd_dmesg(None) == X86OsFeatures()


def test_darwin_all():
    assert detect_features_from_darwin(lambda name: name in ALL_DARWIN) == ALL_SSE


def test_darwin_p3():
    names = {"hw.optional.sse"}
    assert detect_features_from_darwin(lambda name: name in names) == ONLY_SSE


def test_darwin_ssse3_uses_supplemental_name():
    names = {"hw.optional.supplementalsse3"}
    result = detect_features_from_darwin(lambda name: name in names)
    assert result == X86OsFeatures(ssse3=True)


def test_darwin_avx512_registers():
    assert darwin_avx512_registers(lambda name: name == "hw.optional.avx512f") is True
    assert darwin_avx512_registers(lambda name: False) is False


def test_windows_all():
    present = set(ProcessorFeature)
    assert detect_features_from_windows(lambda f: f in present) == ALL_SSE


def test_windows_p3():
    present = {ProcessorFeature.XMMI_INSTRUCTIONS_AVAILABLE}
    assert detect_features_from_windows(lambda f: f in present) == ONLY_SSE


def test_windows_feature_identifiers():
    assert detect_features_from_windows(lambda f: f == 6) == ONLY_SSE
    assert detect_features_from_windows(lambda f: f == 10) == X86OsFeatures(sse2=True)
    assert detect_features_from_windows(lambda f: f == 13) == X86OsFeatures(sse3=True)
    assert detect_features_from_windows(lambda f: f == 38) == X86OsFeatures(sse4_2=True)


def test_windows_queries_each_feature():
    asked = []

    def present(feature):
        asked.append(feature)
        return False

    assert detect_features_from_windows(present) == X86OsFeatures()
    assert set(asked) == set(ProcessorFeature)