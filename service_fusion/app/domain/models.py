"""
Creature models served by the Fusion Service.
"""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

STAT_MIN = 0
STAT_MAX = 65535

NO_TYPE = "none"
MISSING_NAME = "MISSING NO"


class Stats(BaseModel):
    """Base stats of a creature, each an unsigned 16-bit value."""

    model_config = ConfigDict(frozen=True)

    hp: int = Field(default=0, ge=STAT_MIN, le=STAT_MAX)
    attack: int = Field(default=0, ge=STAT_MIN, le=STAT_MAX)
    defense: int = Field(default=0, ge=STAT_MIN, le=STAT_MAX)
    special_attack: int = Field(default=0, ge=STAT_MIN, le=STAT_MAX)
    special_defense: int = Field(default=0, ge=STAT_MIN, le=STAT_MAX)
    speed: int = Field(default=0, ge=STAT_MIN, le=STAT_MAX)


class Pokemon(BaseModel):
    """
    A creature record: name, base stats and an ordered pair of types.

    The second type is the literal ``"none"`` for single-typed creatures.
    Instances are frozen so a cached record cannot be altered by a caller.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    stats: Stats = Field(default_factory=Stats)
    types: Tuple[str, str] = (NO_TYPE, NO_TYPE)


def missing_pokemon() -> Pokemon:
    """Fallback record returned when either side of a fusion cannot be resolved."""
    return Pokemon(
        name=MISSING_NAME,
        stats=Stats(
            hp=1,
            attack=1,
            defense=1,
            special_attack=1,
            special_defense=1,
            speed=1,
        ),
        types=(NO_TYPE, NO_TYPE),
    )
