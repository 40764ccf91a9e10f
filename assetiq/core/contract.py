# assetiq/core/contract.py
"""
AssetIQ Decision Contract

This module defines the locked thresholds, multipliers and fixed confidences
that map evidence -> priorities and impacts -> overall risk.

If you change any constants in here, bump ASSETIQ_DECISION_VERSION.
"""

ASSETIQ_DECISION_VERSION = "3.0.0"

# Priority ladder (health %, remaining-life %). Evaluated top to bottom.
CRITICAL_HEALTH_BELOW = 30.0
CRITICAL_REMAINING_BELOW = 10.0
CRITICAL_FAILURE_PROBABILITY_ABOVE = 0.5

HIGH_HEALTH_BELOW = 50.0
HIGH_REMAINING_BELOW = 25.0

MEDIUM_HEALTH_BELOW = 70.0
MEDIUM_REMAINING_BELOW = 50.0

PRIORITY_ORDER = {"critical": 0, "high": 1, "medium": 2, "low": 3}
SEVERITY_ORDER = {"critical": 0, "high": 1, "medium": 2, "low": 3, "positive": 4}

# Failure-mode adjustment
MOISTURE_TRIGGER_RATIO = 0.8
MOISTURE_MULTIPLIER = 1.5
TEMPERATURE_TRIGGER_RATIO = 0.8
TEMPERATURE_MULTIPLIER = 1.4
FAILURE_PROBABILITY_CAP = 0.95

# Override status -> failure-mode probability
OVERRIDE_STATUS_PROBABILITY = {"critical": 0.85, "warning": 0.65, "degraded": 0.45}
OVERRIDE_DEFAULT_CONFIDENCE = 92

# Remaining life
DEFAULT_EXPECTED_LIFE_YEARS = 40.0
MONTHS_UNIT_ABOVE = 6

# Degradation curve
HISTORY_POINTS = 8
PROJECTED_POINTS = 5
PROJECTION_STEP_YEARS = 2
PROJECTION_ACCELERATION = 1.3
CURVE_DEFAULT_AGE_YEARS = 20.0

# Explain step flags
TEMPERATURE_KEY_RATIO = 0.85
MOISTURE_KEY_RATIO = 0.8
DEFAULT_MAX_TEMPERATURE = 95.0
DEFAULT_MAX_MOISTURE = 35.0

# Fixed per-step confidences
CONFIDENCE_KNOWN_ISSUE = 95
CONFIDENCE_AGE_HEALTH = 95
CONFIDENCE_OEM_LIFE = 100
CONFIDENCE_TEMPERATURE = 92
CONFIDENCE_MOISTURE = 90
CONFIDENCE_WORK_HISTORY = 88
CONFIDENCE_FLEET_PATTERN = 82

# Prediction confidence when no override supplies one
EVIDENCE_CONFIDENCE_BASE = 80
EVIDENCE_CONFIDENCE_SPAN = 15
EVIDENCE_GAP_PENALTY = 10

# Emit: cost model
COST_MULTIPLIER = {"critical": 5.0, "high": 3.0, "medium": 1.5, "low": 1.0}
COST_PER_TASK_HOUR = 2000
DEFAULT_BASE_COST = 50000
INACTION_FACTOR = 3
REPAIR_COST_MIN_FACTOR = 0.8
REPAIR_COST_MAX_FACTOR = 2.0
DOWNTIME_MIN_HOURS = 24
DOWNTIME_MAX_HOURS = 72
OUTAGE_MAX_HOURS = 168
CURRENCY = "USD"
WINDOW_START_DAYS = 14
WINDOW_END_DAYS = 30
NEXT_ANALYSIS_HOURS = 24

# Impact propagation
MAINTENANCE_WINDOW_DAYS = 30
AUDIT_WINDOW_DAYS = 60
LOW_BERTH_AVAILABILITY = 0.3
IMO2030_TARGET_PROGRESS = 80
IMO2030_HIGH_RISK_BELOW = 60
LATERAL_VESSEL_LIMIT = 3
HIGH_RECOMMENDATION_LIMIT = 3
ESG_BASELINE_SCORE = 75

ACTION_TEXT_PROCESS = "Schedule stakeholder review meeting"
