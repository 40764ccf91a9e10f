from __future__ import annotations

from datetime import datetime
from typing import Any

import pytest

from assetiq.core.health import HealthInferenceEngine
from assetiq.impact.demo import demo_fleet_dict
from assetiq.impact.engine import ImpactPropagationEngine


@pytest.fixture
def as_of() -> datetime:
    return datetime(2026, 1, 15, 8, 0, 0)


@pytest.fixture
def health_engine() -> HealthInferenceEngine:
    """Default catalog, default synthesizer, default known-issue registry."""
    return HealthInferenceEngine()


@pytest.fixture
def impact_engine() -> ImpactPropagationEngine:
    return ImpactPropagationEngine()


@pytest.fixture
def fleet_dict(as_of: datetime) -> dict[str, Any]:
    return demo_fleet_dict(as_of)


@pytest.fixture
def fleet_without_lng(fleet_dict: dict[str, Any]) -> dict[str, Any]:
    """Demo fleet with only HFO and MDO fuel contracts."""
    contracts = fleet_dict["supplyChain"]["fuelContracts"]
    fleet_dict["supplyChain"]["fuelContracts"] = [c for c in contracts if c["fuelType"] != "LNG"]
    return fleet_dict
