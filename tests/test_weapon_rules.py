import pytest

from arsenal.core.rng import RNG
from arsenal.data import paths
from arsenal.data.repositories import WeaponsRepository
from arsenal.domain import weapon_rules
from arsenal.domain.defs import RecoilRange, WeaponDef


@pytest.fixture(scope="module")
def railgun() -> WeaponDef:
    return WeaponsRepository(base_path=paths.get_bundled_definitions_path()).get("RailGun")


@pytest.fixture(scope="module")
def glock() -> WeaponDef:
    return WeaponsRepository(base_path=paths.get_bundled_definitions_path()).get("Glock")


def test_can_shoot_respects_interval(railgun: WeaponDef) -> None:
    assert not weapon_rules.can_shoot(railgun, elapsed=11.5, last_shot_time=10.0)
    assert weapon_rules.can_shoot(railgun, elapsed=12.0, last_shot_time=10.0)


def test_choose_shot_sound_picks_from_definition(glock: WeaponDef) -> None:
    rng = RNG(7)
    picks = {weapon_rules.choose_shot_sound(glock, rng) for _ in range(50)}

    assert picks == set(glock.shot_sounds)


def test_sample_recoil_stays_in_range() -> None:
    rng = RNG(3)
    recoil = RecoilRange(-2.0, 4.0)

    samples = [weapon_rules.sample_recoil(recoil, rng) for _ in range(100)]

    assert all(-2.0 <= sample <= 4.0 for sample in samples)
    assert weapon_rules.sample_recoil(RecoilRange(1.5, 1.5), rng) == 1.5


def test_recoil_angles_are_deterministic_per_seed(railgun: WeaponDef) -> None:
    rng_a = RNG(99)
    rng_b = RNG(99)

    draws_a = [(weapon_rules.gen_v_recoil_angle(railgun, rng_a), weapon_rules.gen_h_recoil_angle(railgun, rng_a))]
    draws_b = [(weapon_rules.gen_v_recoil_angle(railgun, rng_b), weapon_rules.gen_h_recoil_angle(railgun, rng_b))]

    assert draws_a == draws_b


def test_try_consume_ammo_requires_full_cost(railgun: WeaponDef) -> None:
    assert weapon_rules.try_consume_ammo(railgun, 25) == 15
    assert weapon_rules.try_consume_ammo(railgun, 10) == 0
    assert weapon_rules.try_consume_ammo(railgun, 9) is None


def test_critical_chance_is_clamped(glock: WeaponDef) -> None:
    assert weapon_rules.critical_chance(glock) == glock.base_critical_shot_probability
    assert weapon_rules.critical_chance(glock, bonus=5.0) == 1.0
    assert weapon_rules.critical_chance(glock, bonus=-5.0) == 0.0


def test_roll_critical_extremes(glock: WeaponDef) -> None:
    rng = RNG(1)

    assert all(weapon_rules.roll_critical(glock, rng, bonus=1.0) for _ in range(20))
    assert not any(weapon_rules.roll_critical(glock, rng, bonus=-1.0) for _ in range(20))
