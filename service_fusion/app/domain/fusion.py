"""
Fusion engine: combines two creatures into a synthetic third one.

The rules are deterministic and never touch their inputs:

- name: first half of the head's name followed by the second half of the
  body's name, split on code points with floor division.
- stats: ``(head * 2 + body) // 3`` for each stat.
- types: the head's primary type, then the body's secondary type, or the
  body's primary type when the body is single-typed.

Speed keeps the historical formula ``(head.attack * 2 + body.speed) // 3``
unless the engine is built with ``legacy_speed=False``.
"""

from typing import Tuple

from .models import NO_TYPE, Pokemon, Stats


def _blend(head_value: int, body_value: int) -> int:
    return (head_value * 2 + body_value) // 3


def fuse_name(head_name: str, body_name: str) -> str:
    """Join the first half of ``head_name`` with the second half of ``body_name``."""
    return head_name[:len(head_name) // 2] + body_name[len(body_name) // 2:]


def fuse_types(head: Pokemon, body: Pokemon) -> Tuple[str, str]:
    second = body.types[1] if body.types[1] != NO_TYPE else body.types[0]
    return head.types[0], second


class FusionEngine:
    """Stateless combiner for two creatures."""

    def __init__(self, legacy_speed: bool = True):
        self.legacy_speed = legacy_speed

    def fuse_stats(self, head: Stats, body: Stats) -> Stats:
        speed_source = head.attack if self.legacy_speed else head.speed
        return Stats(
            hp=_blend(head.hp, body.hp),
            attack=_blend(head.attack, body.attack),
            defense=_blend(head.defense, body.defense),
            special_attack=_blend(head.special_attack, body.special_attack),
            special_defense=_blend(head.special_defense, body.special_defense),
            speed=_blend(speed_source, body.speed),
        )

    def fuse(self, head: Pokemon, body: Pokemon) -> Pokemon:
        """Fuse ``head`` and ``body`` into a new creature."""
        return Pokemon(
            name=fuse_name(head.name, body.name),
            stats=self.fuse_stats(head.stats, body.stats),
            types=fuse_types(head, body),
        )


_default_engine = FusionEngine()


def fuse_pokemon(head: Pokemon, body: Pokemon) -> Pokemon:
    """Fuse two creatures with the default (historical) rules."""
    return _default_engine.fuse(head, body)
