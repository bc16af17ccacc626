"""Generic access to per-architecture feature flags by enum member."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, ClassVar

UNKNOWN_FEATURE = "unknown_feature"


def _is_sentinel(member: IntEnum) -> bool:
    return member.name.endswith("LAST_")


def _feature_members(enum_type: type[IntEnum]) -> list[IntEnum]:
    return [member for member in enum_type if not _is_sentinel(member)]


def _name_of(member: IntEnum) -> str:
    name = getattr(member, "feature_name", None)
    return name if isinstance(name, str) else member.name.lower()


def _resolve(enum_type: type[IntEnum], value: Any) -> IntEnum | None:
    try:
        member = enum_type(value)
    except (ValueError, TypeError):
        return None
    return None if _is_sentinel(member) else member


class FeatureSet:
    """Boolean flags, one per member of an enum.

    Subclasses bind the enum with ``class X(FeatureSet, enum=MyEnum)``.
    Flags are reachable by attribute (the feature name) and by enum member.
    A member's feature name is its ``feature_name`` attribute when the enum
    defines one, otherwise its lower-cased name. Members whose name ends in
    ``LAST_`` mark the end of the list and are not features.
    """

    _enum: ClassVar[type[IntEnum] | None] = None
    _by_name: ClassVar[dict[str, IntEnum]] = {}

    def __init_subclass__(cls, *, enum: type[IntEnum] | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if enum is not None:
            cls._enum = enum
            cls._by_name = {_name_of(member): member for member in _feature_members(enum)}

    def __init__(self, **flags: bool) -> None:
        if self._enum is None:
            raise TypeError(f"{type(self).__name__} is not bound to a feature enum")
        object.__setattr__(self, "_values", dict.fromkeys(_feature_members(self._enum), False))
        for name, value in flags.items():
            member = self._by_name.get(name)
            if member is None:
                raise TypeError(f"unknown feature {name!r}")
            self._values[member] = bool(value)

    def __getattr__(self, name: str) -> bool:
        if name.startswith("_"):
            raise AttributeError(name)
        member = type(self)._by_name.get(name)
        if member is None:
            raise AttributeError(f"{type(self).__name__} has no feature {name!r}")
        return self._values[member]

    def __setattr__(self, name: str, value: Any) -> None:
        member = type(self)._by_name.get(name)
        if member is not None:
            self._values[member] = bool(value)
        elif name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            raise AttributeError(f"{type(self).__name__} has no feature {name!r}")

    def _member(self, feature: Any) -> IntEnum:
        member = _resolve(self._enum, feature)
        if member is None:
            raise KeyError(feature)
        return member

    def __getitem__(self, feature: Any) -> bool:
        return self._values[self._member(feature)]

    def __setitem__(self, feature: Any, value: bool) -> None:
        self._values[self._member(feature)] = bool(value)

    def enabled(self) -> list[IntEnum]:
        """Return the members that are set, in enum order."""
        return [member for member, on in self._values.items() if on]

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._values == other._values

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        flags = ", ".join(f"{_name_of(member)}=True" for member in self.enabled())
        return f"{type(self).__name__}({flags})"


def feature_enum_value(features: FeatureSet, value: Any) -> bool:
    """Return the flag for ``value``; False for values outside the enum."""
    member = _resolve(features._enum, value)
    if member is None:
        return False
    return features[member]


def feature_enum_name(enum_type: type[IntEnum], value: Any) -> str:
    """Return the feature name of ``value``, or ``"unknown_feature"``."""
    member = _resolve(enum_type, value)
    if member is None:
        return UNKNOWN_FEATURE
    return _name_of(member)