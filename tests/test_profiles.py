from __future__ import annotations

import pytest

from assetiq.core.catalog import COMPONENT_TYPES
from assetiq.core.errors import InputError, UnknownComponentType
from assetiq.core.profiles import ComponentProfile, ProfileStore, WearPoint


@pytest.fixture
def store() -> ProfileStore:
    return ProfileStore.default()


def test_default_store_covers_every_component_type(store: ProfileStore) -> None:
    assert len(store) == len(COMPONENT_TYPES)
    for t in COMPONENT_TYPES:
        assert t in store


def test_unknown_component_type_is_an_input_error(store: ProfileStore) -> None:
    with pytest.raises(UnknownComponentType) as exc:
        store.get_profile("flux_capacitor")
    assert isinstance(exc.value, InputError)
    assert exc.value.component_type == "flux_capacitor"


def test_wear_curve_control_points_and_clamping(store: ProfileStore) -> None:
    # winding: 0->100, 20->85, 30->70, 40->50, 50->25
    assert store.wear_percentage("winding", 0) == 100.0
    assert store.wear_percentage("winding", 40) == 50.0
    assert store.wear_percentage("winding", 50) == 25.0
    assert store.wear_percentage("winding", 75) == 25.0


def test_wear_curve_interpolates_linearly(store: ProfileStore) -> None:
    assert store.wear_percentage("winding", 25) == pytest.approx(77.5)
    assert store.wear_percentage("winding", 5) == pytest.approx(97.5)


@pytest.mark.parametrize("component_type", COMPONENT_TYPES)
def test_wear_is_non_increasing_with_age(store: ProfileStore, component_type: str) -> None:
    values = [store.wear_percentage(component_type, age) for age in range(0, 61)]
    assert all(b <= a for a, b in zip(values, values[1:]))


def test_profile_rejects_bad_wear_curves() -> None:
    with pytest.raises(ValueError):
        ComponentProfile("x", "m", "m", wear_curve=(WearPoint(0, 100), WearPoint(0, 90)))
    with pytest.raises(ValueError):
        ComponentProfile("x", "m", "m", wear_curve=(WearPoint(0, 90), WearPoint(10, 95)))


def test_next_maintenance_task_picks_nearest(store: ProfileStore) -> None:
    task = store.next_maintenance_task("winding", 0)
    assert task is not None
    assert task.task == "DGA oil sampling and analysis"
    assert task.due_in_months == 6


def test_next_maintenance_task_ties_keep_catalog_order(store: ProfileStore) -> None:
    # at 7 months the 6-month DGA and the 12-month tests are both due in 5
    task = store.next_maintenance_task("winding", 7)
    assert task is not None
    assert task.task == "DGA oil sampling and analysis"
    assert task.due_in_months == pytest.approx(5)


def test_most_likely_failure_mode_without_readings(store: ProfileStore) -> None:
    fm = store.most_likely_failure_mode("winding")
    assert fm is not None
    assert fm.mode == "Insulation thermal degradation (cellulose aging)"
    assert fm.probability == pytest.approx(0.35)


def test_hot_winding_boosts_thermal_modes(store: ProfileStore) -> None:
    # 100 of 110 degC is above the 80% trigger
    fm = store.most_likely_failure_mode("winding", temperature=100)
    assert fm is not None
    assert fm.mode == "Insulation thermal degradation (cellulose aging)"
    assert fm.probability == pytest.approx(0.35 * 1.4)


def test_failure_probability_is_capped(store: ProfileStore) -> None:
    for t in COMPONENT_TYPES:
        fm = store.most_likely_failure_mode(t, moisture=1000, temperature=1000)
        if fm is not None:
            assert 0 < fm.probability <= 0.95
