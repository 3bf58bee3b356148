"""Weapon definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class ShotEffect(Enum):
    """Visual effect spawned along a hitscan shot."""

    BEAM = "Beam"
    SMOKE = "Smoke"
    RAIL = "Rail"


class ProjectileKind(Enum):
    """Physical projectiles a weapon can launch."""

    PLASMA = "Plasma"
    GRENADE = "Grenade"


@dataclass(frozen=True, slots=True)
class RayProjectile:
    """Hitscan shot: damage is applied instantly along a traced line."""

    damage: float

    tag = "Ray"


@dataclass(frozen=True, slots=True)
class PhysicalProjectile:
    """Simulated projectile; its damage is resolved by the projectile itself."""

    kind: ProjectileKind

    tag = "Projectile"


WeaponProjectile = Union[RayProjectile, PhysicalProjectile]


@dataclass(frozen=True, slots=True)
class RecoilRange:
    """Bounds, in degrees, of the random recoil impulse applied per shot."""

    min: float
    max: float


@dataclass(frozen=True, slots=True)
class Vector3:
    x: float
    y: float
    z: float


@dataclass(frozen=True, slots=True)
class WeaponDef:
    """Immutable weapon definition loaded from the weapon table."""

    id: str
    model: str
    shot_sounds: tuple[str, ...]
    projectile: WeaponProjectile
    shoot_interval: float
    yaw_correction: float
    pitch_correction: float
    ammo_indicator_offset: Vector3
    ammo_consumption_per_shot: int
    v_recoil: RecoilRange
    h_recoil: RecoilRange
    shot_effect: ShotEffect
    base_critical_shot_probability: float

    @property
    def is_hitscan(self) -> bool:
        return isinstance(self.projectile, RayProjectile)
