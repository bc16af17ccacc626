import json

import pytest

from cpufeat.aarch64 import Aarch64Features, Aarch64Info
from cpufeat.cache_info import CacheInfo, CacheLevelInfo, CacheType
from cpufeat.report import (
    aarch64_report,
    cache_info_entries,
    flag_names,
    render_json,
    render_text,
    s390x_report,
    usage,
)
from cpufeat.s390x import S390XFeatures, S390XInfo, S390XPlatformStrings


def _a53_info():
    features = Aarch64Features(
        fp=True, asimd=True, evtstrm=True, aes=True,
        pmull=True, sha1=True, sha2=True, crc32=True,
    )
    return Aarch64Info(features=features, implementer=0x41, variant=0x0, part=0xD03, revision=3)


def _cache():
    return CacheInfo([
        CacheLevelInfo(1, CacheType.DATA, 32 * 1024, 8, 64, 64, 1),
        CacheLevelInfo(3, CacheType.UNIFIED, 6 * 1024 * 1024, 12, 64, 8192, 1),
    ])


def test_flag_names_sorted():
    names = flag_names(_a53_info().features)
    assert names == sorted(["fp", "asimd", "evtstrm", "aes", "pmull", "sha1", "sha2", "crc32"])


def test_flag_names_empty():
    assert flag_names(Aarch64Features()) == []


def test_flag_names_uses_feature_names():
    assert flag_names(Aarch64Features(smei16i64=True, sve2=True)) == ["sme" + "i16i64", "sve2"]


def test_cache_info_entries():
    entries = cache_info_entries(_cache())
    assert len(entries) == 2
    assert entries[0]["level"] == 1
    assert entries[0]["cache_type"] == "data"
    assert entries[1]["cache_type"] == "unified"
    assert entries[1]["cache_size"] == 6 * 1024 * 1024
    assert list(entries[0]) == [
        "level", "cache_type", "cache_size", "ways", "line_size", "tlb_entries", "partitioning",
    ]


def test_aarch64_report():
    report = aarch64_report(_a53_info())
    assert list(report) == ["arch", "implementer", "variant", "part", "revision", "flags"]
    assert report["arch"] == "aarch64"
    assert report["implementer"] == 0x41
    assert report["part"] == 0xD03
    assert report["revision"] == 3
    assert "crc32" in report["flags"]


def test_s390x_report():
    info = S390XInfo(features=S390XFeatures(esan3=True, sie=True))
    report = s390x_report(info, S390XPlatformStrings(num_processors=24, platform="z16"))
    assert report["arch"] == "s390x"
    assert report["platform"] == "zSeries"
    assert report["model"] == "z16"
    assert report["# processors"] == 24
    assert report["flags"] == ["esan3", "sie"]


def test_render_json_round_trip():
    tree = aarch64_report(_a53_info())
    tree["cache_info"] = cache_info_entries(_cache())
    assert json.loads(render_json(tree)) == tree


def test_render_json_empty_containers():
    assert render_json({"flags": [], "m": {}}) == '{"flags":[],"m":{}}'


def test_render_json_escapes_slash():
    out = render_json({"k": "a/b\"c"})
    assert json.loads(out) == {"k": "a/b\"c"}
    assert "\\/" in out


def test_render_json_negative_int():
    assert json.loads(render_json({"# processors": -1})) == {"# processors": -1}


def test_render_json_rejects_unknown():
    with pytest.raises(TypeError):
        render_json({"x": 1.5})


def test_render_text_lines():
    report = s390x_report(S390XInfo(), S390XPlatformStrings(num_processors=2, platform="z15"))
    lines = render_text(report).split("\n")
    assert len(lines) == len(report)
    for line, key in zip(lines, report):
        assert line.startswith(key.ljust(15) + " : ")
    assert lines[0].endswith(": s390x")


def test_render_text_int_format():
    assert render_text({"implementer": 0x41}).endswith(" 65 (0x41)")
    assert render_text({"n": -1}).endswith("-1 (0xFFFFFFFF)")


def test_render_text_flags_joined():
    report = aarch64_report(_a53_info())
    flags_line = render_text(report).split("\n")[-1]
    assert flags_line.split(" : ", 1)[1] == ",".join(report["flags"])


def test_render_text_cache_maps_as_json():
    entries = cache_info_entries(_cache())
    line = render_text({"cache_info": entries})
    value = line.split(" : ", 1)[1]
    assert json.loads("[" + value + "]") == entries


def test_render_text_empty():
    assert render_text({}) == ""


def test_render_text_requires_map():
    with pytest.raises(TypeError):
        render_text([1, 2])


def test_usage():
    text = usage("list_cpu_features")
    assert "Usage: list_cpu_features [options]\n" in text
    assert "-j | --json     Format output as json instead of plain text." in text
    assert text.startswith("\n") and text.endswith("\n\n")