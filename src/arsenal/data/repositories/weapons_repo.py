"""Weapons repository."""
from __future__ import annotations

import math
from typing import Dict

from arsenal.data.errors import DataValidationError, DuplicateIdentifierError
from arsenal.data.repositories.base import RepositoryBase
from arsenal.data.ron_loader import RonMap, RonStruct, RonTuple, RonUnit, is_identifier
from arsenal.data.ron_writer import dumps
from arsenal.domain.defs import (
    PhysicalProjectile,
    ProjectileKind,
    RayProjectile,
    RecoilRange,
    ShotEffect,
    Vector3,
    WeaponDef,
    WeaponProjectile,
)

WEAPON_FIELDS = (
    "model",
    "shot_sounds",
    "projectile",
    "shoot_interval",
    "yaw_correction",
    "pitch_correction",
    "ammo_indicator_offset",
    "ammo_consumption_per_shot",
    "v_recoil",
    "h_recoil",
    "shot_effect",
    "base_critical_shot_probability",
)


class WeaponsRepository(RepositoryBase[WeaponDef]):
    """Loads and validates weapon definitions."""

    def __init__(self, base_path=None) -> None:
        super().__init__("weapons.ron", base_path)

    def _build(self, raw: RonMap) -> Dict[str, WeaponDef]:
        weapons: Dict[str, WeaponDef] = {}
        for raw_id, payload in raw.entries:
            weapon_id = self._parse_id(raw_id)
            if weapon_id in weapons:
                raise DuplicateIdentifierError(weapon_id)
            weapons[weapon_id] = self._parse_weapon(weapon_id, payload)
        return weapons

    def to_ron(self) -> str:
        """Serialize the loaded catalog back to the table format."""
        entries = [(_id_to_raw(weapon_id), _weapon_to_raw(weapon)) for weapon_id, weapon in self.load().items()]
        return dumps(RonStruct(None, {"map": RonMap(entries)}))

    @staticmethod
    def _parse_id(raw_id: object) -> str:
        if isinstance(raw_id, RonUnit):
            return raw_id.name
        if isinstance(raw_id, str) and raw_id:
            return raw_id
        raise DataValidationError(f"Weapon IDs must be identifiers or non-empty strings, got {raw_id!r}.")

    def _parse_weapon(self, weapon_id: str, payload: object) -> WeaponDef:
        if not isinstance(payload, RonStruct) or payload.name is not None:
            raise DataValidationError(
                f"weapon '{weapon_id}' must be an anonymous struct '( ... )'.", weapon_id=weapon_id
            )
        data = payload.fields
        self._assert_exact_fields(data, set(WEAPON_FIELDS), weapon_id)

        shoot_interval = self._require_float(data["shoot_interval"], weapon_id, "shoot_interval")
        if shoot_interval <= 0:
            raise DataValidationError(
                f"weapon '{weapon_id}' shoot_interval must be positive, got {shoot_interval}.",
                weapon_id=weapon_id,
                field="shoot_interval",
            )
        ammo = self._require_int(data["ammo_consumption_per_shot"], weapon_id, "ammo_consumption_per_shot")
        if ammo < 0:
            raise DataValidationError(
                f"weapon '{weapon_id}' ammo_consumption_per_shot must not be negative, got {ammo}.",
                weapon_id=weapon_id,
                field="ammo_consumption_per_shot",
            )
        probability = self._require_float(
            data["base_critical_shot_probability"], weapon_id, "base_critical_shot_probability"
        )
        if not 0.0 <= probability <= 1.0:
            raise DataValidationError(
                f"weapon '{weapon_id}' base_critical_shot_probability must be within [0, 1], got {probability}.",
                weapon_id=weapon_id,
                field="base_critical_shot_probability",
            )

        return WeaponDef(
            id=weapon_id,
            model=self._require_str(data["model"], weapon_id, "model"),
            shot_sounds=self._parse_shot_sounds(data["shot_sounds"], weapon_id),
            projectile=self._parse_projectile(data["projectile"], weapon_id),
            shoot_interval=shoot_interval,
            yaw_correction=self._require_float(data["yaw_correction"], weapon_id, "yaw_correction"),
            pitch_correction=self._require_float(data["pitch_correction"], weapon_id, "pitch_correction"),
            ammo_indicator_offset=self._parse_vector3(data["ammo_indicator_offset"], weapon_id),
            ammo_consumption_per_shot=ammo,
            v_recoil=self._parse_recoil(data["v_recoil"], weapon_id, "v_recoil"),
            h_recoil=self._parse_recoil(data["h_recoil"], weapon_id, "h_recoil"),
            shot_effect=self._parse_shot_effect(data["shot_effect"], weapon_id),
            base_critical_shot_probability=probability,
        )

    def _parse_shot_sounds(self, value: object, weapon_id: str) -> tuple[str, ...]:
        if not isinstance(value, list):
            raise DataValidationError(
                f"weapon '{weapon_id}' shot_sounds must be a list.", weapon_id=weapon_id, field="shot_sounds"
            )
        if not value:
            raise DataValidationError(
                f"weapon '{weapon_id}' shot_sounds must not be empty.", weapon_id=weapon_id, field="shot_sounds"
            )
        return tuple(
            self._require_str(entry, weapon_id, f"shot_sounds[{index}]") for index, entry in enumerate(value)
        )

    def _parse_projectile(self, value: object, weapon_id: str) -> WeaponProjectile:
        tag = value.name if isinstance(value, (RonStruct, RonTuple, RonUnit)) else None
        if tag == RayProjectile.tag:
            if isinstance(value, RonStruct) and set(value.fields) == {"damage"}:
                damage = self._require_float(value.fields["damage"], weapon_id, "projectile.damage")
                if damage < 0:
                    raise DataValidationError(
                        f"weapon '{weapon_id}' projectile damage must not be negative, got {damage}.",
                        weapon_id=weapon_id,
                        field="projectile.damage",
                    )
                return RayProjectile(damage=damage)
            raise DataValidationError(
                f"weapon '{weapon_id}' projectile must be written 'Ray(damage: <number>)'.",
                weapon_id=weapon_id,
                field="projectile",
            )
        if tag == PhysicalProjectile.tag:
            if isinstance(value, RonTuple) and len(value.items) == 1 and isinstance(value.items[0], RonUnit):
                kind_name = value.items[0].name
                try:
                    return PhysicalProjectile(kind=ProjectileKind(kind_name))
                except ValueError as exc:
                    raise DataValidationError(
                        f"weapon '{weapon_id}' has unknown projectile kind '{kind_name}' "
                        f"(expected one of {[kind.value for kind in ProjectileKind]}).",
                        weapon_id=weapon_id,
                        field="projectile",
                    ) from exc
            raise DataValidationError(
                f"weapon '{weapon_id}' projectile must be written 'Projectile(<Kind>)'.",
                weapon_id=weapon_id,
                field="projectile",
            )
        raise DataValidationError(
            f"weapon '{weapon_id}' has unknown projectile tag {tag!r} (expected 'Ray' or 'Projectile').",
            weapon_id=weapon_id,
            field="projectile",
        )

    @staticmethod
    def _parse_shot_effect(value: object, weapon_id: str) -> ShotEffect:
        if isinstance(value, RonUnit):
            try:
                return ShotEffect(value.name)
            except ValueError:
                pass
        raise DataValidationError(
            f"weapon '{weapon_id}' has unknown shot_effect {getattr(value, 'name', value)!r} "
            f"(expected one of {[effect.value for effect in ShotEffect]}).",
            weapon_id=weapon_id,
            field="shot_effect",
        )

    def _parse_vector3(self, value: object, weapon_id: str) -> Vector3:
        components = self._require_number_tuple(value, 3, weapon_id, "ammo_indicator_offset")
        return Vector3(*components)

    def _parse_recoil(self, value: object, weapon_id: str, field: str) -> RecoilRange:
        low, high = self._require_number_tuple(value, 2, weapon_id, field)
        if low > high:
            raise DataValidationError(
                f"weapon '{weapon_id}' {field} minimum {low} exceeds maximum {high}.",
                weapon_id=weapon_id,
                field=field,
            )
        return RecoilRange(min=low, max=high)

    def _require_number_tuple(self, value: object, size: int, weapon_id: str, field: str) -> list[float]:
        if not isinstance(value, RonTuple) or value.name is not None or len(value.items) != size:
            raise DataValidationError(
                f"weapon '{weapon_id}' {field} must be a tuple of {size} numbers.",
                weapon_id=weapon_id,
                field=field,
            )
        return [self._require_float(item, weapon_id, f"{field}[{index}]") for index, item in enumerate(value.items)]

    @staticmethod
    def _require_str(value: object, weapon_id: str, field: str) -> str:
        if not isinstance(value, str):
            raise DataValidationError(
                f"weapon '{weapon_id}' {field} must be a string.", weapon_id=weapon_id, field=field
            )
        return value

    @staticmethod
    def _require_int(value: object, weapon_id: str, field: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise DataValidationError(
                f"weapon '{weapon_id}' {field} must be an integer.", weapon_id=weapon_id, field=field
            )
        return value

    @staticmethod
    def _require_float(value: object, weapon_id: str, field: str) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DataValidationError(
                f"weapon '{weapon_id}' {field} must be a number.", weapon_id=weapon_id, field=field
            )
        try:
            number = float(value)
        except OverflowError as exc:
            raise DataValidationError(
                f"weapon '{weapon_id}' {field} is out of range.", weapon_id=weapon_id, field=field
            ) from exc
        if not math.isfinite(number):
            raise DataValidationError(
                f"weapon '{weapon_id}' {field} must be finite.", weapon_id=weapon_id, field=field
            )
        return number

    @staticmethod
    def _assert_exact_fields(payload: dict[str, object], expected_keys: set[str], weapon_id: str) -> None:
        actual_keys = set(payload.keys())
        missing = expected_keys - actual_keys
        unknown = actual_keys - expected_keys
        if missing or unknown:
            msg_parts = []
            if missing:
                msg_parts.append(f"missing fields: {sorted(missing)}")
            if unknown:
                msg_parts.append(f"unknown fields: {sorted(unknown)}")
            field = sorted(missing or unknown)[0]
            raise DataValidationError(
                f"weapon '{weapon_id}' has schema issues ({'; '.join(msg_parts)}).",
                weapon_id=weapon_id,
                field=field,
            )


def _id_to_raw(weapon_id: str) -> object:
    return RonUnit(weapon_id) if is_identifier(weapon_id) else weapon_id


def _weapon_to_raw(weapon: WeaponDef) -> RonStruct:
    projectile = weapon.projectile
    if isinstance(projectile, RayProjectile):
        raw_projectile: object = RonStruct(RayProjectile.tag, {"damage": projectile.damage})
    else:
        raw_projectile = RonTuple(PhysicalProjectile.tag, [RonUnit(projectile.kind.value)])
    offset = weapon.ammo_indicator_offset
    return RonStruct(
        None,
        {
            "model": weapon.model,
            "shot_sounds": list(weapon.shot_sounds),
            "projectile": raw_projectile,
            "shoot_interval": weapon.shoot_interval,
            "yaw_correction": weapon.yaw_correction,
            "pitch_correction": weapon.pitch_correction,
            "ammo_indicator_offset": RonTuple(None, [offset.x, offset.y, offset.z]),
            "ammo_consumption_per_shot": weapon.ammo_consumption_per_shot,
            "v_recoil": RonTuple(None, [weapon.v_recoil.min, weapon.v_recoil.max]),
            "h_recoil": RonTuple(None, [weapon.h_recoil.min, weapon.h_recoil.max]),
            "shot_effect": RonUnit(weapon.shot_effect.value),
            "base_critical_shot_probability": weapon.base_critical_shot_probability,
        },
    )
