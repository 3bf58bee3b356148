"""Domain definition exports."""

from .weapon_def import (
    PhysicalProjectile,
    ProjectileKind,
    RayProjectile,
    RecoilRange,
    ShotEffect,
    Vector3,
    WeaponDef,
    WeaponProjectile,
)

__all__ = [
    "PhysicalProjectile",
    "ProjectileKind",
    "RayProjectile",
    "RecoilRange",
    "ShotEffect",
    "Vector3",
    "WeaponDef",
    "WeaponProjectile",
]
