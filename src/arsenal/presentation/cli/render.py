"""Shared CLI rendering helpers."""
from __future__ import annotations

from arsenal.domain.defs import RayProjectile, WeaponDef


def format_projectile(weapon: WeaponDef) -> str:
    projectile = weapon.projectile
    if isinstance(projectile, RayProjectile):
        return f"Ray(damage: {projectile.damage:g})"
    return f"Projectile({projectile.kind.value})"


def format_weapon_row(weapon: WeaponDef) -> str:
    """Return a one-line summary used by ``arsenal list``."""
    return f"{weapon.id:<14} {format_projectile(weapon):<22} {weapon.shot_effect.value}"


def format_weapon_details(weapon: WeaponDef) -> list[str]:
    """Return the lines printed by ``arsenal show``."""
    offset = weapon.ammo_indicator_offset
    lines = [
        f"=== {weapon.id} ===",
        f"model: {weapon.model}",
        "shot_sounds:",
    ]
    lines.extend(f"  - {sound}" for sound in weapon.shot_sounds)
    lines.extend(
        [
            f"projectile: {format_projectile(weapon)}",
            f"shoot_interval: {weapon.shoot_interval:g}s",
            f"yaw/pitch correction: {weapon.yaw_correction:g} / {weapon.pitch_correction:g} deg",
            f"ammo_indicator_offset: ({offset.x:g}, {offset.y:g}, {offset.z:g})",
            f"ammo_consumption_per_shot: {weapon.ammo_consumption_per_shot}",
            f"v_recoil: {weapon.v_recoil.min:g}..{weapon.v_recoil.max:g} deg",
            f"h_recoil: {weapon.h_recoil.min:g}..{weapon.h_recoil.max:g} deg",
            f"shot_effect: {weapon.shot_effect.value}",
            f"base_critical_shot_probability: {weapon.base_critical_shot_probability:.0%}",
        ]
    )
    return lines
