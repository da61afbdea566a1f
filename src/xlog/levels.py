"""
Level definitions and ordering.

Levels are bit flags so a destination can be registered for a combined
mask (e.g. WARNING | INFO). Ordering never compares raw values: every
"greater/lesser" query goes through LEVEL_ORDER.
"""

from enum import IntFlag
from collections.abc import Iterable

from xlog.errors import InvalidLevelError


class Level(IntFlag):
    """The eight canonical levels, least to most severe."""
    DEBUG = 1 << 0
    INFO = 1 << 1
    NOTICE = 1 << 2
    WARNING = 1 << 3
    ERROR = 1 << 4
    CRITICAL = 1 << 5
    ALERT = 1 << 6
    EMERGENCY = 1 << 7

    @classmethod
    def from_name(cls, name: str) -> "Level":
        """Resolve a single level from its name, case-insensitive."""
        name_upper = name.strip().upper()
        for member in LEVEL_ORDER:
            if member.name == name_upper:
                return member
        raise InvalidLevelError(
            f"Unknown log level '{name}'. "
            f"Valid levels: {', '.join(m.name for m in LEVEL_ORDER)}"
        )


# Single source of truth for severity order.
LEVEL_ORDER: tuple[Level, ...] = (
    Level.DEBUG,
    Level.INFO,
    Level.NOTICE,
    Level.WARNING,
    Level.ERROR,
    Level.CRITICAL,
    Level.ALERT,
    Level.EMERGENCY,
)

# Display names used by the {level} placeholder. Mutable so deployments can
# localize them.
LEVEL_NAMES: dict[Level, str] = {member: member.name for member in LEVEL_ORDER}

_ALL_LEVELS = sum(int(m) for m in LEVEL_ORDER)


def rank(level: int) -> int:
    """Position of `level` in LEVEL_ORDER. Only canonical levels have a rank."""
    for idx, member in enumerate(LEVEL_ORDER):
        if member == level:
            return idx
    raise InvalidLevelError(f"Invalid level {level!r}: not one of the canonical levels")


def at_or_above(candidate: int, threshold: int) -> bool:
    return rank(candidate) >= rank(threshold)


def is_greater_level(is_greater_than: int, that: int) -> bool:
    return rank(is_greater_than) > rank(that)


def is_lesser_level(is_less_than: int, that: int) -> bool:
    return rank(is_less_than) < rank(that)


def level_name(level: int) -> str:
    """
    Display name for a level. Masks render as their flagged names joined
    with '|'; values with no canonical bits fall back to the number.
    """
    if level in LEVEL_NAMES:
        return LEVEL_NAMES[level]
    names = [LEVEL_NAMES.get(m, m.name) for m in levels_in(level)]
    return "|".join(names) if names else str(int(level))


def levels_in(mask: int) -> list[Level]:
    """Canonical levels whose bit is set in `mask`, in severity order."""
    return [member for member in LEVEL_ORDER if member & mask]


def routed_levels(mask: int) -> list[Level]:
    """
    Levels a destination registered at `mask` receives.

    Every flagged level, plus every level ranked above the highest flagged
    one. For a single level this is plain at-or-above routing.
    """
    flagged = levels_in(mask)
    if not flagged or int(mask) & ~_ALL_LEVELS:
        raise InvalidLevelError(f"Invalid level mask {mask!r}")
    top = rank(flagged[-1])
    return [
        member for idx, member in enumerate(LEVEL_ORDER)
        if member & mask or idx > top
    ]


def resolve_level(value: "int | str | Iterable[str | int]") -> Level:
    """
    Convert a level spec to a Level (possibly a combined mask).

    Accepts a Level or int, a name ("warning"), a '|' separated list of
    names ("WARNING|INFO"), or a list of names/ints.
    """
    if isinstance(value, bool):
        raise InvalidLevelError(f"Expected a level, got {value!r}")
    if isinstance(value, int):
        if value == 0:
            return Level(0)
        if int(value) & ~_ALL_LEVELS:
            raise InvalidLevelError(f"Invalid level value {value}")
        return Level(value)
    if isinstance(value, str):
        parts = [p for p in value.split("|") if p.strip()]
        if not parts:
            raise InvalidLevelError(f"Empty level name {value!r}")
        return resolve_level(parts) if len(parts) > 1 else Level.from_name(parts[0])
    if isinstance(value, Iterable):
        mask = Level(0)
        for item in value:
            mask |= resolve_level(item)
        return mask
    raise InvalidLevelError(f"Expected int or str for level, got {type(value).__name__}")
