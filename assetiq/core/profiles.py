from __future__ import annotations

import math
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Iterable, Mapping

import numpy as np

from assetiq.core.contract import (
    DEFAULT_EXPECTED_LIFE_YEARS,
    FAILURE_PROBABILITY_CAP,
    MOISTURE_MULTIPLIER,
    MOISTURE_TRIGGER_RATIO,
    TEMPERATURE_MULTIPLIER,
    TEMPERATURE_TRIGGER_RATIO,
)
from assetiq.core.errors import UnknownComponentType

MOISTURE_SIGNAL_WORDS = ("moisture", "dielectric")
TEMPERATURE_SIGNAL_WORDS = ("temperature", "hot", "thermal")


@dataclass(frozen=True)
class WearPoint:
    age_years: float
    health_percent: float


@dataclass(frozen=True)
class FailureMode:
    mode: str
    base_probability: float
    warning_signals: tuple[str, ...] = ()
    mean_time_between_failures: float | None = None

    def mentions(self, words: Iterable[str]) -> bool:
        signals = [s.lower() for s in self.warning_signals]
        return any(w in s for s in signals for w in words)


@dataclass(frozen=True)
class MaintenanceTask:
    task: str
    interval_months: float
    duration_hours: float
    parts: tuple[str, ...] = ()


@dataclass(frozen=True)
class ProfileSpecs:
    expected_life_years: float | None = None
    max_temperature: float | None = None
    max_moisture: float | None = None
    maintenance_interval_hours: float | None = None
    mtbf: float | None = None


@dataclass(frozen=True)
class ComponentProfile:
    """
    Static OEM reference data for one component type.

    The wear curve must be strictly increasing in age and non-increasing in
    health; this is checked on construction.
    """
    component_type: str
    manufacturer: str
    model: str
    specs: ProfileSpecs = field(default_factory=ProfileSpecs)
    wear_curve: tuple[WearPoint, ...] = ()
    failure_modes: tuple[FailureMode, ...] = ()
    maintenance_tasks: tuple[MaintenanceTask, ...] = ()

    def __post_init__(self) -> None:
        for prev, nxt in zip(self.wear_curve, self.wear_curve[1:]):
            if nxt.age_years <= prev.age_years:
                raise ValueError(f"{self.component_type}: wear curve ages must strictly increase")
            if nxt.health_percent > prev.health_percent:
                raise ValueError(f"{self.component_type}: wear curve health must not increase with age")

    @property
    def expected_life_years(self) -> float:
        return float(self.specs.expected_life_years or DEFAULT_EXPECTED_LIFE_YEARS)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ComponentProfile":
        specs = data.get("specs", {}) or {}
        return cls(
            component_type=str(data["componentType"]),
            manufacturer=str(data.get("manufacturer", "")),
            model=str(data.get("model", "")),
            specs=ProfileSpecs(
                expected_life_years=specs.get("expectedLifeYears"),
                max_temperature=specs.get("maxTemperature"),
                max_moisture=specs.get("maxMoisture"),
                maintenance_interval_hours=specs.get("maintenanceIntervalHours"),
                mtbf=specs.get("mtbf"),
            ),
            wear_curve=tuple(
                WearPoint(float(p["years"]), float(p["healthPercent"])) for p in data.get("wearCurve", [])
            ),
            failure_modes=tuple(
                FailureMode(
                    mode=str(f["mode"]),
                    base_probability=float(f["probability"]),
                    warning_signals=tuple(f.get("warningSignals", [])),
                    mean_time_between_failures=f.get("mtbf"),
                )
                for f in data.get("failureModes", [])
            ),
            maintenance_tasks=tuple(
                MaintenanceTask(
                    task=str(t["task"]),
                    interval_months=float(t["intervalMonths"]),
                    duration_hours=float(t["estimatedDuration"]),
                    parts=tuple(t.get("requiredParts", [])),
                )
                for t in data.get("maintenanceTasks", [])
            ),
        )


@dataclass(frozen=True)
class ScheduledTask:
    task: str
    due_in_months: float
    duration_hours: float
    parts: tuple[str, ...] = ()


@dataclass(frozen=True)
class LikelyFailureMode:
    mode: str
    probability: float
    warning_signals: tuple[str, ...] = ()


class ProfileStore:
    """Read-only registry of component profiles keyed by component-type tag."""

    def __init__(self, profiles: Iterable[ComponentProfile]) -> None:
        table: dict[str, ComponentProfile] = {}
        for p in profiles:
            table[p.component_type] = p
        self._profiles: Mapping[str, ComponentProfile] = MappingProxyType(table)

    @classmethod
    def default(cls) -> "ProfileStore":
        return _default_store()

    def __contains__(self, component_type: object) -> bool:
        return component_type in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def component_types(self) -> list[str]:
        return list(self._profiles)

    def get_profile(self, component_type: str) -> ComponentProfile:
        try:
            return self._profiles[component_type]
        except KeyError:
            raise UnknownComponentType(component_type) from None

    def wear_percentage(self, component_type: str, age_years: float) -> float:
        """
        Piecewise-linear health % for a given age.
        Ages outside the curve clamp to the first/last control point.
        """
        curve = self.get_profile(component_type).wear_curve
        if not curve:
            return 100.0

        xs = np.array([p.age_years for p in curve], dtype=float)
        ys = np.array([p.health_percent for p in curve], dtype=float)

        # exact control-point ages return the stored value untouched
        hits = np.flatnonzero(xs == float(age_years))
        if hits.size:
            return float(ys[hits[0]])

        return float(np.interp(float(age_years), xs, ys))

    def next_maintenance_task(self, component_type: str, age_months: float) -> ScheduledTask | None:
        profile = self.get_profile(component_type)

        nearest: ScheduledTask | None = None
        nearest_due = math.inf

        for t in profile.maintenance_tasks:
            if t.interval_months <= 0:
                continue
            due = (math.floor(age_months / t.interval_months) + 1) * t.interval_months - age_months
            # strict < keeps catalog order on ties
            if 0 < due < nearest_due:
                nearest_due = due
                nearest = ScheduledTask(
                    task=t.task,
                    due_in_months=due,
                    duration_hours=t.duration_hours,
                    parts=t.parts,
                )
        return nearest

    def most_likely_failure_mode(
        self,
        component_type: str,
        moisture: float | None = None,
        temperature: float | None = None,
    ) -> LikelyFailureMode | None:
        profile = self.get_profile(component_type)
        specs = profile.specs

        best: LikelyFailureMode | None = None
        best_p = 0.0

        for fm in profile.failure_modes:
            p = fm.base_probability

            if moisture and specs.max_moisture:
                if moisture / specs.max_moisture > MOISTURE_TRIGGER_RATIO and fm.mentions(MOISTURE_SIGNAL_WORDS):
                    p *= MOISTURE_MULTIPLIER

            if temperature and specs.max_temperature:
                if temperature / specs.max_temperature > TEMPERATURE_TRIGGER_RATIO and fm.mentions(TEMPERATURE_SIGNAL_WORDS):
                    p *= TEMPERATURE_MULTIPLIER

            if p > best_p:
                best_p = p
                best = LikelyFailureMode(
                    mode=fm.mode,
                    probability=min(FAILURE_PROBABILITY_CAP, p),
                    warning_signals=fm.warning_signals,
                )
        return best


@lru_cache(maxsize=1)
def _default_store() -> ProfileStore:
    from assetiq.core.catalog import COMPONENT_PROFILES

    return ProfileStore(ComponentProfile.from_dict(d) for d in COMPONENT_PROFILES)
