"""AArch64 processor features and identification."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from cpufeat.introspection import FeatureSet, feature_enum_name, feature_enum_value


class Aarch64FeaturesEnum(IntEnum):
    """AArch64 features, in the order used for introspection."""

    FP = 0
    ASIMD = 1
    EVTSTRM = 2
    AES = 3
    PMULL = 4
    SHA1 = 5
    SHA2 = 6
    CRC32 = 7
    ATOMICS = 8
    FPHP = 9
    ASIMDHP = 10
    CPUID = 11
    ASIMDRDM = 12
    JSCVT = 13
    FCMA = 14
    LRCPC = 15
    DCPOP = 16
    SHA3 = 17
    SM3 = 18
    SM4 = 19
    ASIMDDP = 20
    SHA512 = 21
    SVE = 22
    ASIMDFHM = 23
    DIT = 24
    USCAT = 25
    ILRCPC = 26
    FLAGM = 27
    SSBS = 28
    SB = 29
    PACA = 30
    PACG = 31
    DCPODP = 32
    SVE2 = 33
    SVEAES = 34
    SVEPMULL = 35
    SVEBITPERM = 36
    SVESHA3 = 37
    SVESM4 = 38
    FLAGM2 = 39
    FRINT = 40
    SVEI8MM = 41
    SVEF32MM = 42
    SVEF64MM = 43
    SVEBF16 = 44
    I8MM = 45
    BF16 = 46
    DGH = 47
    RNG = 48
    BTI = 49
    MTE = 50
    ECV = 51
    AFP = 52
    RPRES = 53
    MTE3 = 54
    SME = 55
    SME_I16I64 = 56
    SME_F64F64 = 57
    SME_I8I32 = 58
    SME_F16F32 = 59
    SME_B16F32 = 60
    SME_F32F32 = 61
    SME_FA64 = 62
    WFXT = 63
    EBF16 = 64
    SVE_EBF16 = 65
    CSSC = 66
    RPRFM = 67
    SVE2P1 = 68
    SME2 = 69
    SME2P1 = 70
    SME_I16I32 = 71
    SME_BI32I32 = 72
    SME_B16B16 = 73
    SME_F16F16 = 74
    LAST_ = 75

    @property
    def feature_name(self) -> str:
        """Name of the feature flag, e.g. ``smei16i64``."""
        return self.name.lower().replace("_", "")


class Aarch64Features(FeatureSet, enum=Aarch64FeaturesEnum):
    """AArch64 feature flags, all False unless set."""


@dataclass
class Aarch64Info:
    """Features and identification registers of an AArch64 processor."""

    features: Aarch64Features = field(default_factory=Aarch64Features)
    implementer: int = 0
    variant: int = 0
    part: int = 0
    revision: int = 0


def get_aarch64_features_enum_value(features: Aarch64Features, value: Any) -> bool:
    """Return whether feature ``value`` is set; False when out of range."""
    return feature_enum_value(features, value)


def get_aarch64_features_enum_name(value: Any) -> str:
    """Return the name of feature ``value``, or ``"unknown_feature"``."""
    return feature_enum_name(Aarch64FeaturesEnum, value)