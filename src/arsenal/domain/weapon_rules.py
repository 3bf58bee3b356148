"""Helpers that interpret weapon definitions at fire time.

All randomness goes through an injected :class:`RNG` so callers control
determinism; none of these helpers keep state of their own.
"""
from __future__ import annotations

from arsenal.core.rng import RNG
from arsenal.domain.defs import RecoilRange, WeaponDef


def can_shoot(weapon: WeaponDef, elapsed: float, last_shot_time: float) -> bool:
    """Return True once at least ``shoot_interval`` seconds passed since the last shot."""
    return elapsed - last_shot_time >= weapon.shoot_interval


def choose_shot_sound(weapon: WeaponDef, rng: RNG) -> str:
    """Pick one of the weapon's shot sounds uniformly at random."""
    return rng.choice(weapon.shot_sounds)


def sample_recoil(recoil: RecoilRange, rng: RNG) -> float:
    """Return a recoil angle in degrees drawn uniformly from the range."""
    if recoil.min == recoil.max:
        return recoil.min
    return rng.uniform(recoil.min, recoil.max)


def gen_v_recoil_angle(weapon: WeaponDef, rng: RNG) -> float:
    return sample_recoil(weapon.v_recoil, rng)


def gen_h_recoil_angle(weapon: WeaponDef, rng: RNG) -> float:
    return sample_recoil(weapon.h_recoil, rng)


def try_consume_ammo(weapon: WeaponDef, available: int) -> int | None:
    """Return the ammo left after one shot, or None if the shot cannot be paid for.

    A shot needs the full ``ammo_consumption_per_shot``; partial payment is
    never taken.
    """
    cost = weapon.ammo_consumption_per_shot
    if available < cost:
        return None
    return available - cost


def critical_chance(weapon: WeaponDef, bonus: float = 0.0) -> float:
    """Return the base critical probability plus ``bonus``, clamped to [0, 1]."""
    return min(1.0, max(0.0, weapon.base_critical_shot_probability + bonus))


def roll_critical(weapon: WeaponDef, rng: RNG, bonus: float = 0.0) -> bool:
    """Roll whether a shot is critical."""
    chance = critical_chance(weapon, bonus)
    if chance <= 0.0:
        return False
    return rng.random() < chance
