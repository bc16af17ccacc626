"""s390x processor features and platform strings."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from cpufeat.introspection import FeatureSet, feature_enum_name, feature_enum_value
from cpufeat.string_view import copy_string

PLATFORM_BUFFER_SIZE = 64


class S390XFeaturesEnum(IntEnum):
    """s390x features, in the order used for introspection."""

    ESAN3 = 0
    ZARCH = 1
    STFLE = 2
    MSA = 3
    LDISP = 4
    EIMM = 5
    DFP = 6
    EDAT = 7
    ETF3EH = 8
    HIGHGPRS = 9
    TE = 10
    VX = 11
    VXD = 12
    VXE = 13
    GS = 14
    VXE2 = 15
    VXP = 16
    SORT = 17
    DFLT = 18
    VXP2 = 19
    NNPA = 20
    PCIMIO = 21
    SIE = 22
    LAST_ = 23


class S390XFeatures(FeatureSet, enum=S390XFeaturesEnum):
    """s390x feature flags, all False unless set."""


@dataclass
class S390XInfo:
    """Features of an s390x processor."""

    features: S390XFeatures = field(default_factory=S390XFeatures)


@dataclass
class S390XPlatformStrings:
    """Processor count (-1 when unknown) and platform name.

    The platform name is limited to 63 characters.
    """

    num_processors: int = -1
    platform: str = ""

    def __post_init__(self) -> None:
        self.platform = copy_string(self.platform, PLATFORM_BUFFER_SIZE)


def get_s390x_features_enum_value(features: S390XFeatures, value: Any) -> bool:
    """Return whether feature ``value`` is set; False when out of range."""
    return feature_enum_value(features, value)


def get_s390x_features_enum_name(value: Any) -> str:
    """Return the name of feature ``value``, or ``"unknown_feature"``."""
    return feature_enum_name(S390XFeaturesEnum, value)