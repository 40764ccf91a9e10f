"""
Bundled reference catalogs.

Plain data only: the registries in profiles.py, evidence.py and issues.py
build immutable stores from these tables. Keys follow the camelCase JSON
contract so the same shapes can be loaded from external files.
"""
from __future__ import annotations

COMPONENT_TYPES = (
    "winding",
    "bushing",
    "tap_changer",
    "cooling_system",
    "oil_system",
    "surge_arrester",
    "current_transformer",
    "breaker",
    "relay",
    "protection_system",
)


COMPONENT_PROFILES = (
    {
        "componentType": "winding",
        "manufacturer": "ABB / Hitachi Energy",
        "model": "Power Transformer Winding Assembly",
        "specs": {
            "maxTemperature": 110,
            "maxMoisture": 35,
            "expectedLifeYears": 50,
            "maintenanceIntervalHours": 8760,
            "mtbf": 175000,
        },
        "wearCurve": [
            {"years": 0, "healthPercent": 100},
            {"years": 10, "healthPercent": 95},
            {"years": 20, "healthPercent": 85},
            {"years": 30, "healthPercent": 70},
            {"years": 40, "healthPercent": 50},
            {"years": 50, "healthPercent": 25},
        ],
        "failureModes": [
            {
                "mode": "Insulation thermal degradation (cellulose aging)",
                "probability": 0.35,
                "warningSignals": ["Elevated CO/CO2 in DGA", "Furan levels increasing", "DP below 400", "Hot-spot temperature exceedance"],
                "mtbf": 175000,
            },
            {
                "mode": "Turn-to-turn insulation failure",
                "probability": 0.20,
                "warningSignals": ["Elevated H2 in DGA", "Partial discharge activity", "Winding resistance imbalance", "Hot-spot deviation"],
                "mtbf": 200000,
            },
            {
                "mode": "Winding deformation from through-faults",
                "probability": 0.15,
                "warningSignals": ["FRA pattern change", "Impedance shift", "Elevated C2H2 after fault", "Oil movement during faults"],
                "mtbf": 250000,
            },
            {
                "mode": "Overload-accelerated aging",
                "probability": 0.30,
                "warningSignals": ["Sustained load above nameplate", "Top-oil > 95°C", "Hot-spot > 110°C", "Furan rate of increase"],
                "mtbf": 120000,
            },
        ],
        "maintenanceTasks": [
            {"task": "DGA oil sampling and analysis", "intervalMonths": 6, "estimatedDuration": 2},
            {"task": "Power factor / dissipation factor test", "intervalMonths": 12, "estimatedDuration": 4},
            {"task": "Winding resistance measurement", "intervalMonths": 24, "estimatedDuration": 4},
            {"task": "Frequency response analysis (FRA)", "intervalMonths": 60, "estimatedDuration": 8},
            {"task": "Furan analysis (oil sample)", "intervalMonths": 12, "estimatedDuration": 2},
        ],
    },
    {
        "componentType": "bushing",
        "manufacturer": "ABB / Trench / HSP",
        "model": "OIP/RIP HV Bushing",
        "specs": {"maxTemperature": 85, "expectedLifeYears": 40, "maintenanceIntervalHours": 8760, "mtbf": 200000},
        "wearCurve": [
            {"years": 0, "healthPercent": 100},
            {"years": 10, "healthPercent": 96},
            {"years": 20, "healthPercent": 88},
            {"years": 30, "healthPercent": 72},
            {"years": 35, "healthPercent": 55},
            {"years": 40, "healthPercent": 30},
        ],
        "failureModes": [
            {
                "mode": "Capacitance / power factor change (dielectric deterioration)",
                "probability": 0.35,
                "warningSignals": ["Power factor increase > 0.5%", "Capacitance change > 5%", "Oil leakage at base", "Thermal asymmetry"],
                "mtbf": 200000,
            },
            {
                "mode": "Moisture ingress through gasket",
                "probability": 0.25,
                "warningSignals": ["Capacitance change", "Elevated power factor", "Oil discoloration", "Reduced dielectric strength"],
                "mtbf": 150000,
            },
            {
                "mode": "Porcelain cracking / flashover",
                "probability": 0.15,
                "warningSignals": ["Visible cracks", "Partial discharge during fog/rain", "Salt/pollution buildup", "Corona activity"],
                "mtbf": 180000,
            },
            {
                "mode": "Internal short circuit",
                "probability": 0.25,
                "warningSignals": ["Sudden power factor jump", "DGA shows H2/C2H2 spike", "Trip event", "Oil discoloration"],
                "mtbf": 220000,
            },
        ],
        "maintenanceTasks": [
            {"task": "Visual inspection and IR thermography", "intervalMonths": 6, "estimatedDuration": 1},
            {"task": "Power factor and capacitance test", "intervalMonths": 12, "estimatedDuration": 4},
            {"task": "Oil level and leakage check", "intervalMonths": 3, "estimatedDuration": 0.5},
            {
                "task": "Bushing replacement (planned)",
                "intervalMonths": 480,
                "estimatedDuration": 48,
                "requiredParts": ["RIP bushing assembly", "Gasket set", "Connection hardware"],
            },
        ],
    },
    {
        "componentType": "tap_changer",
        "manufacturer": "MR (Maschinenfabrik Reinhausen)",
        "model": "OLTC Type M",
        "specs": {"expectedLifeYears": 30, "maintenanceIntervalHours": 4380, "mtbf": 80000},
        "wearCurve": [
            {"years": 0, "healthPercent": 100},
            {"years": 5, "healthPercent": 92},
            {"years": 15, "healthPercent": 75},
            {"years": 25, "healthPercent": 50},
            {"years": 30, "healthPercent": 25},
        ],
        "failureModes": [
            {
                "mode": "Contact erosion / carbon buildup",
                "probability": 0.40,
                "warningSignals": ["Elevated contact resistance", "DGA in OLTC compartment: C2H2", "Oil discoloration", "Slow tap change time"],
                "mtbf": 80000,
            },
            {
                "mode": "Diverter switch wear",
                "probability": 0.25,
                "warningSignals": ["Arcing during operation", "Oil carbonization", "Transition resistance change", "Motor current anomaly"],
                "mtbf": 60000,
            },
            {
                "mode": "Drive mechanism failure",
                "probability": 0.20,
                "warningSignals": ["Motor current spike", "Tap change time increase", "Mechanical noise", "Position feedback error"],
                "mtbf": 100000,
            },
            {
                "mode": "Oil contamination from switching",
                "probability": 0.15,
                "warningSignals": ["Oil darkening", "Particle count increase", "Dielectric strength reduction", "Sludge formation"],
                "mtbf": 50000,
            },
        ],
        "maintenanceTasks": [
            {"task": "Oil sampling from OLTC compartment", "intervalMonths": 6, "estimatedDuration": 1},
            {"task": "Operations counter reading and drive test", "intervalMonths": 3, "estimatedDuration": 0.5},
            {"task": "Contact resistance measurement", "intervalMonths": 12, "estimatedDuration": 4},
            {
                "task": "OLTC overhaul (contact/diverter replacement)",
                "intervalMonths": 120,
                "estimatedDuration": 72,
                "requiredParts": ["Contact assembly", "Diverter switch", "Resistors", "Oil for OLTC compartment"],
            },
        ],
    },
    {
        "componentType": "cooling_system",
        "manufacturer": "Kelvion / GE",
        "model": "ONAF/OFAF Cooling Bank",
        "specs": {"maxTemperature": 65, "expectedLifeYears": 25, "maintenanceIntervalHours": 4380, "mtbf": 30000},
        "wearCurve": [
            {"years": 0, "healthPercent": 100},
            {"years": 5, "healthPercent": 92},
            {"years": 10, "healthPercent": 80},
            {"years": 15, "healthPercent": 65},
            {"years": 20, "healthPercent": 45},
            {"years": 25, "healthPercent": 20},
        ],
        "failureModes": [
            {
                "mode": "Fan motor bearing failure",
                "probability": 0.35,
                "warningSignals": ["Motor current increase", "Vibration", "Reduced airflow", "Fan motor temperature rise"],
                "mtbf": 30000,
            },
            {
                "mode": "Radiator blockage (internal sludge)",
                "probability": 0.25,
                "warningSignals": ["Oil flow reduction", "Temperature differential across radiator", "Top-oil temperature rise"],
                "mtbf": 40000,
            },
            {
                "mode": "Oil pump failure",
                "probability": 0.20,
                "warningSignals": ["Flow rate decrease", "Pump motor current change", "Oil temperature differential", "Pump noise"],
                "mtbf": 35000,
            },
            {
                "mode": "Control system malfunction",
                "probability": 0.20,
                "warningSignals": ["Fans not starting on temperature", "Stage control failure", "Sensor drift", "Relay failure"],
                "mtbf": 25000,
            },
        ],
        "maintenanceTasks": [
            {"task": "Fan motor inspection and cleaning", "intervalMonths": 6, "estimatedDuration": 2},
            {"task": "Oil pump flow verification", "intervalMonths": 12, "estimatedDuration": 2},
            {"task": "Radiator cleaning (external)", "intervalMonths": 6, "estimatedDuration": 4},
            {
                "task": "Fan motor replacement",
                "intervalMonths": 120,
                "estimatedDuration": 8,
                "requiredParts": ["Fan motor assembly", "Fan blades", "Mounting hardware"],
            },
            {
                "task": "Oil pump replacement",
                "intervalMonths": 144,
                "estimatedDuration": 16,
                "requiredParts": ["Oil circulation pump", "Coupling", "Gaskets"],
            },
        ],
    },
    {
        "componentType": "oil_system",
        "manufacturer": "Nynas / Shell Diala",
        "model": "Mineral Insulating Oil System",
        "specs": {"maxMoisture": 35, "expectedLifeYears": 20, "maintenanceIntervalHours": 4380, "mtbf": 50000},
        "wearCurve": [
            {"years": 0, "healthPercent": 100},
            {"years": 5, "healthPercent": 90},
            {"years": 10, "healthPercent": 75},
            {"years": 15, "healthPercent": 55},
            {"years": 20, "healthPercent": 30},
        ],
        "failureModes": [
            {
                "mode": "Oil oxidation and acidity increase",
                "probability": 0.30,
                "warningSignals": ["Acidity > 0.20 mg KOH/g", "IFT < 22 mN/m", "Color darkening", "Sludge formation"],
                "mtbf": 50000,
            },
            {
                "mode": "Moisture contamination",
                "probability": 0.30,
                "warningSignals": ["Moisture > 30 ppm (for 230kV+)", "Dielectric strength drop", "Power factor increase", "Gasket deterioration"],
                "mtbf": 40000,
            },
            {
                "mode": "Corrosive sulfur attack",
                "probability": 0.15,
                "warningSignals": ["Copper strip test fails", "DBDS detection", "Conductor surface deposits", "Elevated copper in oil"],
                "mtbf": 60000,
            },
            {
                "mode": "Oil leak (tank/gasket/valve)",
                "probability": 0.25,
                "warningSignals": ["Oil level decrease", "Visible staining", "Conservator level low", "Pressure gauge anomaly"],
                "mtbf": 35000,
            },
        ],
        "maintenanceTasks": [
            {"task": "Oil sampling and routine analysis", "intervalMonths": 6, "estimatedDuration": 1},
            {"task": "DGA analysis", "intervalMonths": 6, "estimatedDuration": 1},
            {
                "task": "Silica gel breather inspection/replacement",
                "intervalMonths": 6,
                "estimatedDuration": 1,
                "requiredParts": ["Silica gel cartridge"],
            },
            {
                "task": "Hot oil filtration and dehydration",
                "intervalMonths": 60,
                "estimatedDuration": 24,
                "requiredParts": ["Filter elements", "Vacuum pump oil"],
            },
            {
                "task": "Full oil replacement",
                "intervalMonths": 240,
                "estimatedDuration": 72,
                "requiredParts": ["Transformer oil (volume per unit)"],
            },
        ],
    },
    {
        "componentType": "surge_arrester",
        "manufacturer": "ABB / Siemens",
        "model": "PEXLIM Metal Oxide Arrester",
        "specs": {"expectedLifeYears": 25, "maintenanceIntervalHours": 8760, "mtbf": 100000},
        "wearCurve": [
            {"years": 0, "healthPercent": 100},
            {"years": 10, "healthPercent": 90},
            {"years": 15, "healthPercent": 75},
            {"years": 20, "healthPercent": 55},
            {"years": 25, "healthPercent": 30},
        ],
        "failureModes": [
            {
                "mode": "MOV disc degradation from surge events",
                "probability": 0.40,
                "warningSignals": ["Leakage current increase", "Surge counter high count", "Third harmonic change", "Thermal image anomaly"],
                "mtbf": 100000,
            },
            {
                "mode": "Moisture ingress (seal failure)",
                "probability": 0.30,
                "warningSignals": ["Leakage current increase", "Visible seal damage", "Partial discharge on housing"],
                "mtbf": 80000,
            },
            {
                "mode": "Porcelain housing failure",
                "probability": 0.15,
                "warningSignals": ["Visible cracks", "Pollution flashover risk", "Mechanical damage"],
                "mtbf": 120000,
            },
        ],
        "maintenanceTasks": [
            {"task": "Visual inspection and surge counter reading", "intervalMonths": 6, "estimatedDuration": 0.5},
            {"task": "Leakage current measurement", "intervalMonths": 12, "estimatedDuration": 2},
            {"task": "IR thermography scan", "intervalMonths": 12, "estimatedDuration": 1},
            {
                "task": "Arrester replacement",
                "intervalMonths": 300,
                "estimatedDuration": 8,
                "requiredParts": ["Metal oxide arrester assembly", "Mounting hardware", "Ground lead"],
            },
        ],
    },
    {
        "componentType": "current_transformer",
        "manufacturer": "Trench / ABB",
        "model": "Oil-filled Metering CT",
        "specs": {"expectedLifeYears": 35, "maintenanceIntervalHours": 8760, "mtbf": 100000},
        "wearCurve": [
            {"years": 0, "healthPercent": 100},
            {"years": 10, "healthPercent": 95},
            {"years": 20, "healthPercent": 82},
            {"years": 30, "healthPercent": 60},
            {"years": 35, "healthPercent": 35},
        ],
        "failureModes": [
            {
                "mode": "CT ratio error / saturation",
                "probability": 0.30,
                "warningSignals": ["Ratio test deviation", "Burden measurement change", "Protection misoperation"],
                "mtbf": 100000,
            },
            {
                "mode": "Oil leak / moisture ingress",
                "probability": 0.35,
                "warningSignals": ["Oil level low", "Visible leakage", "Dielectric test failure"],
                "mtbf": 80000,
            },
            {
                "mode": "Internal insulation failure",
                "probability": 0.20,
                "warningSignals": ["DGA anomaly", "Power factor change", "Partial discharge"],
                "mtbf": 120000,
            },
        ],
        "maintenanceTasks": [
            {"task": "Visual inspection", "intervalMonths": 6, "estimatedDuration": 0.5},
            {"task": "Ratio and burden test", "intervalMonths": 60, "estimatedDuration": 4},
            {"task": "Oil sampling (if oil-filled)", "intervalMonths": 24, "estimatedDuration": 1},
        ],
    },
    {
        "componentType": "breaker",
        "manufacturer": "ABB / Siemens / GE",
        "model": "SF6 Circuit Breaker",
        "specs": {"expectedLifeYears": 30, "maintenanceIntervalHours": 4380, "mtbf": 50000},
        "wearCurve": [
            {"years": 0, "healthPercent": 100},
            {"years": 10, "healthPercent": 90},
            {"years": 20, "healthPercent": 70},
            {"years": 25, "healthPercent": 50},
            {"years": 30, "healthPercent": 25},
        ],
        "failureModes": [
            {"mode": "SF6 gas leak", "probability": 0.30, "warningSignals": ["SF6 pressure drop", "Density alarm", "Leak detection"], "mtbf": 80000},
            {"mode": "Trip coil failure", "probability": 0.25, "warningSignals": ["Coil resistance change", "Trip time increase", "Trip test failure"], "mtbf": 50000},
            {"mode": "Contact wear", "probability": 0.25, "warningSignals": ["Contact resistance increase", "Arcing contact worn", "Trip counter high"], "mtbf": 60000},
            {
                "mode": "Operating mechanism failure",
                "probability": 0.20,
                "warningSignals": ["Slow operation", "Mechanical binding", "Spring charge failure"],
                "mtbf": 70000,
            },
        ],
        "maintenanceTasks": [
            {"task": "SF6 gas pressure check", "intervalMonths": 3, "estimatedDuration": 0.5},
            {"task": "Trip and close test", "intervalMonths": 12, "estimatedDuration": 4},
            {"task": "Contact resistance measurement", "intervalMonths": 12, "estimatedDuration": 2},
            {"task": "Breaker timing test", "intervalMonths": 24, "estimatedDuration": 4},
            {
                "task": "Major overhaul",
                "intervalMonths": 180,
                "estimatedDuration": 48,
                "requiredParts": ["Contact set", "SF6 gas", "Seal kit", "Trip coils"],
            },
        ],
    },
    {
        "componentType": "relay",
        "manufacturer": "SEL / GE / ABB",
        "model": "Digital Protective Relay",
        "specs": {"expectedLifeYears": 20, "maintenanceIntervalHours": 8760, "mtbf": 60000},
        "wearCurve": [
            {"years": 0, "healthPercent": 100},
            {"years": 5, "healthPercent": 95},
            {"years": 10, "healthPercent": 85},
            {"years": 15, "healthPercent": 65},
            {"years": 20, "healthPercent": 40},
        ],
        "failureModes": [
            {
                "mode": "Settings drift / misoperation",
                "probability": 0.35,
                "warningSignals": ["Relay event log anomaly", "Settings audit discrepancy", "Trip test deviation"],
                "mtbf": 60000,
            },
            {
                "mode": "Communication failure",
                "probability": 0.25,
                "warningSignals": ["SCADA communication loss", "IEC 61850 message errors", "Ping timeout"],
                "mtbf": 40000,
            },
            {
                "mode": "Power supply failure",
                "probability": 0.20,
                "warningSignals": ["DC voltage fluctuation", "Relay reboot events", "Battery alarm"],
                "mtbf": 50000,
            },
            {
                "mode": "Hardware component failure",
                "probability": 0.20,
                "warningSignals": ["Self-test alarm", "I/O board failure", "Display malfunction"],
                "mtbf": 70000,
            },
        ],
        "maintenanceTasks": [
            {"task": "Relay event log review", "intervalMonths": 3, "estimatedDuration": 1},
            {"task": "Trip test and calibration", "intervalMonths": 12, "estimatedDuration": 4},
            {"task": "Settings audit and verification", "intervalMonths": 24, "estimatedDuration": 2},
            {"task": "Firmware update", "intervalMonths": 36, "estimatedDuration": 2},
        ],
    },
    {
        "componentType": "protection_system",
        "manufacturer": "Various",
        "model": "Integrated Protection System",
        "specs": {"expectedLifeYears": 25, "maintenanceIntervalHours": 8760, "mtbf": 80000},
        "wearCurve": [
            {"years": 0, "healthPercent": 100},
            {"years": 10, "healthPercent": 88},
            {"years": 15, "healthPercent": 72},
            {"years": 20, "healthPercent": 55},
            {"years": 25, "healthPercent": 30},
        ],
        "failureModes": [
            {
                "mode": "Protection coordination error",
                "probability": 0.30,
                "warningSignals": ["Miscoordination event", "Settings change needed", "Study results outdated"],
                "mtbf": 80000,
            },
            {
                "mode": "Backup protection failure",
                "probability": 0.25,
                "warningSignals": ["Trip test failure", "Relay self-test alarm", "DC supply issue"],
                "mtbf": 90000,
            },
        ],
        "maintenanceTasks": [
            {"task": "Protection coordination study review", "intervalMonths": 60, "estimatedDuration": 16},
            {"task": "End-to-end trip test", "intervalMonths": 12, "estimatedDuration": 8},
        ],
    },
)


# (preventive phrasings, corrective phrasings) per component type
WORK_ORDER_ISSUES = {
    "winding": (
        (
            "Winding resistance measurement completed",
            "Power factor test - within limits",
            "Turns ratio test passed",
            "Winding temperature sensor calibrated",
            "Insulation resistance test completed",
        ),
        (
            "Winding hot spot detected - de-rating applied",
            "Insulation degradation - scheduled rewinding",
            "Partial discharge detected - monitoring increased",
            "Inter-turn fault investigation",
            "Emergency winding repair - thermal event",
        ),
    ),
    "bushing": (
        (
            "Bushing power factor test passed",
            "Oil level verification - normal",
            "Infrared scan - no hot spots",
            "Capacitance measurement completed",
            "Visual inspection - no leakage",
        ),
        (
            "Bushing oil leak repair",
            "Capacitance drift detected - replacement scheduled",
            "Bushing thermal anomaly - urgent replacement",
            "Porcelain crack detected - emergency replacement",
            "Bushing DGA sampling - elevated gases",
        ),
    ),
    "tap_changer": (
        (
            "Tap changer contact inspection completed",
            "Drive mechanism lubrication",
            "Operation counter logged",
            "Transition resistance measurement",
            "Motor drive current test passed",
        ),
        (
            "Contact erosion - pitting detected",
            "Drive mechanism failure - motor replaced",
            "Selector switch sticking - cleaned and adjusted",
            "Oil contamination from arcing - oil replaced",
            "Emergency tap changer lockout - diverter failure",
        ),
    ),
    "cooling_system": (
        (
            "Cooling fan operation verified",
            "Radiator fin cleaning completed",
            "Oil pump flow rate test passed",
            "Thermostat calibration verified",
            "Cooling control relay test completed",
        ),
        (
            "Fan motor replacement - bearing failure",
            "Oil pump seal leak repair",
            "Radiator blockage cleared",
            "Cooling control board replacement",
            "Emergency portable cooling deployed - fan bank failure",
        ),
    ),
    "oil_system": (
        (
            "Oil DGA sampling completed",
            "Moisture content test - within limits",
            "Oil filtration service completed",
            "Silica gel breather replaced",
            "Conservator tank inspection",
        ),
        (
            "Oil reclamation - elevated acidity",
            "Moisture ingress - seal repair and oil treatment",
            "Oil leak repair at drain valve",
            "Buchholz relay trip investigation - gas accumulation",
            "Emergency oil replacement - dielectric breakdown",
        ),
    ),
    "surge_arrester": (
        (
            "Leakage current measurement completed",
            "Visual inspection - no discharge tracking",
            "Ground connection resistance verified",
            "Thermal scan completed",
            "Counter reading logged",
        ),
        (
            "Arrester replacement - elevated leakage current",
            "Ground connection repair",
            "Tracking damage detected - replacement scheduled",
            "Arrester failure post-lightning event",
            "Emergency arrester replacement - flashover",
        ),
    ),
    "current_transformer": (
        (
            "Ratio test completed - within tolerance",
            "Burden test passed",
            "Insulation resistance measurement",
            "Secondary winding continuity verified",
            "Visual inspection - no oil leaks",
        ),
        (
            "CT ratio drift - replacement scheduled",
            "Secondary winding open circuit protection activated",
            "Oil leak at terminal box - sealed",
            "CT saturation investigation - relay misoperation",
            "Emergency CT replacement - insulation failure",
        ),
    ),
    "breaker": (
        (
            "Breaker timing test completed",
            "Contact resistance measurement - within spec",
            "SF6 gas pressure verified",
            "Trip coil current test passed",
            "Mechanism lubrication completed",
        ),
        (
            "Breaker trip coil replacement",
            "SF6 gas leak repair",
            "Contact erosion - replacement scheduled",
            "Mechanism spring failure - repair completed",
            "Emergency breaker replacement - failure to trip",
        ),
    ),
    "relay": (
        (
            "Relay setting verification completed",
            "Trip test - successful operation",
            "Communication link test passed",
            "Firmware version verified",
            "Battery backup test completed",
        ),
        (
            "Relay misoperation investigation - settings adjusted",
            "Communication module replacement",
            "Power supply failure - replacement",
            "Firmware upgrade - bug fix applied",
            "Emergency relay replacement - board failure",
        ),
    ),
    "protection_system": (
        (
            "End-to-end protection test completed",
            "Differential protection scheme verified",
            "CT circuit integrity confirmed",
            "Overcurrent relay coordination reviewed",
            "Arc flash study updated",
        ),
        (
            "Protection misoperation - coordination study updated",
            "CT wiring fault repaired",
            "Relay replacement - intermittent fault",
            "Protection scheme reconfiguration after network change",
            "Emergency protection bypass removed",
        ),
    ),
}


FLEET_PATTERNS = (
    {
        "componentType": "winding",
        "pattern": "Accelerated insulation aging in high-load summer conditions",
        "occurrences": 8,
        "averageFailurePoint": {"value": 28, "unit": "years"},
        "affectedAssets": ["BGE-TF-001", "PECO-TF-003", "ComEd-TF-005"],
        "recommendedIntervention": "Reduce loading to 85% during peak summer and increase DGA sampling frequency",
    },
    {
        "componentType": "winding",
        "pattern": "Partial discharge activity in units above 30 years service",
        "occurrences": 5,
        "averageFailurePoint": {"value": 32, "unit": "years"},
        "affectedAssets": ["BGE-TF-001", "ACE-TF-008"],
        "recommendedIntervention": "Install online PD monitoring and schedule power factor testing every 6 months",
    },
    {
        "componentType": "bushing",
        "pattern": "Capacitance drift in older porcelain bushings",
        "occurrences": 6,
        "averageFailurePoint": {"value": 25, "unit": "years"},
        "affectedAssets": ["PECO-TF-003", "ComEd-TF-005", "DPL-TF-007"],
        "recommendedIntervention": "Replace with RIP bushings during next planned outage",
    },
    {
        "componentType": "tap_changer",
        "pattern": "Contact erosion from frequent voltage regulation cycles",
        "occurrences": 9,
        "averageFailurePoint": {"value": 15, "unit": "years"},
        "affectedAssets": ["BGE-TF-001", "PECO-TF-003", "ComEd-TF-005", "PHI-TF-006", "ACE-TF-008"],
        "recommendedIntervention": "Implement condition-based tap changer maintenance at 50k operations",
    },
    {
        "componentType": "cooling_system",
        "pattern": "Fan motor bearing failures during extended heat waves",
        "occurrences": 12,
        "averageFailurePoint": {"value": 8, "unit": "years"},
        "affectedAssets": ["BGE-TF-001", "PECO-TF-003", "ComEd-TF-005", "PHI-TF-006"],
        "recommendedIntervention": "Stock spare fan motors and pre-stage portable cooling for summer peak",
    },
    {
        "componentType": "oil_system",
        "pattern": "Moisture ingress through aging gaskets in coastal substations",
        "occurrences": 7,
        "averageFailurePoint": {"value": 20, "unit": "years"},
        "affectedAssets": ["BGE-TF-001", "ACE-TF-008", "DPL-TF-007"],
        "recommendedIntervention": "Replace gaskets and install online moisture sensors",
    },
    {
        "componentType": "oil_system",
        "pattern": "Elevated DBDS levels in naphthenic oil",
        "occurrences": 4,
        "averageFailurePoint": {"value": 18, "unit": "years"},
        "affectedAssets": ["PECO-TF-003", "ComEd-TF-005"],
        "recommendedIntervention": "Schedule oil reclamation with passivator injection",
    },
    {
        "componentType": "breaker",
        "pattern": "SF6 micro-leaks in circuit breakers above 20 years",
        "occurrences": 6,
        "averageFailurePoint": {"value": 22, "unit": "years"},
        "affectedAssets": ["BGE-TF-001", "PHI-TF-006", "DPL-TF-007"],
        "recommendedIntervention": "Implement SF6 leak detection monitoring and schedule seal replacements",
    },
    {
        "componentType": "surge_arrester",
        "pattern": "Elevated leakage current post-storm season",
        "occurrences": 5,
        "averageFailurePoint": {"value": 15, "unit": "years"},
        "affectedAssets": ["BGE-TF-001", "ACE-TF-008", "DPL-TF-007"],
        "recommendedIntervention": "Conduct post-storm arrester testing and replace units showing degradation",
    },
    {
        "componentType": "protection_system",
        "pattern": "Relay coordination issues after network reconfiguration",
        "occurrences": 4,
        "averageFailurePoint": {"value": 10, "unit": "years"},
        "affectedAssets": ["ComEd-TF-005", "PECO-TF-003"],
        "recommendedIntervention": "Mandate protection coordination study after any topology change",
    },
    {
        "componentType": "current_transformer",
        "pattern": "CT ratio errors in aging oil-filled units",
        "occurrences": 3,
        "averageFailurePoint": {"value": 30, "unit": "years"},
        "affectedAssets": ["BGE-TF-001", "ACE-TF-008"],
        "recommendedIntervention": "Schedule CT replacement with dry-type units during planned outages",
    },
    {
        "componentType": "relay",
        "pattern": "Firmware compatibility issues after SCADA upgrades",
        "occurrences": 5,
        "averageFailurePoint": {"value": 7, "unit": "years"},
        "affectedAssets": ["ComEd-TF-005", "PECO-TF-003", "PHI-TF-006"],
        "recommendedIntervention": "Establish firmware lifecycle management and pre-test all upgrades",
    },
)


KNOWN_ISSUES = {
    "BGE-TF-001": [
        {
            "componentName": "Winding Insulation",
            "category": "insulation",
            "issue": "DGA trending: elevated CO and CO2 indicating cellulose degradation",
            "healthScore": 35,
            "temperature": 98,
            "moisture": 28,
            "status": "critical",
            "pmPrediction": {
                "predictedIssue": "Winding insulation thermal degradation - accelerated aging",
                "priority": "critical",
                "warningSignals": [
                    "CO at 850 ppm (limit 500 ppm per IEEE C57.104)",
                    "CO2/CO ratio indicates overheating > 200°C",
                    "Furan analysis: 2-FAL at 2.8 mg/L (end-of-life threshold 4.0)",
                    "Degree of polymerization estimated at 350 (new: 1000+)",
                ],
                "recommendedAction": (
                    "IMMEDIATE: Reduce loading to 75% of nameplate. Schedule replacement transformer "
                    "procurement (18-24 month lead time). Deploy mobile substation as interim backup."
                ),
                "timeToFailure": "18-36 months under current loading",
                "confidence": 92,
                "customersAtRisk": 72000,
            },
        },
        {
            "componentName": "HV Bushings",
            "category": "bushing",
            "issue": "Power factor test trending upward - possible moisture ingress",
            "healthScore": 48,
            "temperature": 82,
            "moisture": 22,
            "status": "warning",
            "pmPrediction": {
                "predictedIssue": "Bushing capacitance change indicating dielectric deterioration",
                "priority": "high",
                "warningSignals": [
                    "Power factor increased 15% over baseline",
                    "Capacitance change of 3.2% (alarm at 5%)",
                    "Thermal image shows asymmetric heating pattern",
                    "Oil-impregnated paper bushings - original 1974 installation",
                ],
                "recommendedAction": (
                    "Order replacement RIP bushings. Schedule bushing replacement during planned outage within 6 months."
                ),
                "timeToFailure": "6-12 months",
                "confidence": 85,
                "customersAtRisk": 72000,
            },
        },
        {
            "componentName": "Cooling System",
            "category": "cooling",
            "issue": "Fan bank #2 reduced airflow - motor bearing wear",
            "healthScore": 62,
            "temperature": 72,
            "status": "degraded",
            "pmPrediction": {
                "predictedIssue": "Cooling capacity degradation leading to thermal derating",
                "priority": "medium",
                "warningSignals": [
                    "Fan motor current draw increased 22%",
                    "Vibration readings elevated on fan #2A and #2C",
                    "Top-oil temperature 8°C above expected for current load",
                ],
                "recommendedAction": (
                    "Replace fan motors on bank #2 during next maintenance window. Monitor top-oil temperature closely."
                ),
                "timeToFailure": "3-6 months",
                "confidence": 78,
                "customersAtRisk": 72000,
            },
        },
    ],
    "COMED-TF-004": [
        {
            "componentName": "Winding Insulation",
            "category": "insulation",
            "issue": "CRITICAL: DGA shows active arcing - C2H2 spike detected",
            "healthScore": 28,
            "temperature": 112,
            "moisture": 45,
            "status": "critical",
            "pmPrediction": {
                "predictedIssue": "Active internal arcing - imminent winding failure",
                "priority": "critical",
                "warningSignals": [
                    "C2H2 (acetylene) at 280 ppm - CRITICAL (limit 2 ppm)",
                    "H2 at 2,400 ppm - CRITICAL (limit 700 ppm)",
                    "TDCG rate of change: 150 ppm/day - RAPIDLY INCREASING",
                    "Buchholz relay gas accumulation alarm active",
                ],
                "recommendedAction": (
                    "IMMEDIATE: De-energize transformer. Deploy mobile substation. "
                    "This unit is in active failure mode. Do NOT re-energize."
                ),
                "timeToFailure": "Days to weeks - failure imminent",
                "confidence": 97,
                "customersAtRisk": 65000,
            },
        },
        {
            "componentName": "HV Bushings",
            "category": "bushing",
            "issue": "Bushing oil level low - possible external leak",
            "healthScore": 45,
            "temperature": 78,
            "status": "warning",
            "pmPrediction": {
                "predictedIssue": "Bushing explosion risk if oil level drops further",
                "priority": "critical",
                "warningSignals": [
                    "Oil level gauge shows 60% (minimum 80%)",
                    "Oil staining visible on bushing porcelain",
                    "Temperature differential between phases: 12°C",
                ],
                "recommendedAction": (
                    "Include in immediate de-energization scope. "
                    "Replace bushings as part of transformer replacement project."
                ),
                "timeToFailure": "Concurrent with transformer failure risk",
                "confidence": 90,
                "customersAtRisk": 65000,
            },
        },
        {
            "componentName": "Oil System",
            "category": "oil",
            "issue": "Severe oil degradation - acidity and sludge formation",
            "healthScore": 32,
            "moisture": 52,
            "status": "critical",
            "pmPrediction": {
                "predictedIssue": "Oil no longer providing adequate insulation and cooling",
                "priority": "critical",
                "warningSignals": [
                    "Oil acidity at 0.35 mg KOH/g (limit 0.20)",
                    "Interfacial tension at 15 mN/m (condemn at 18)",
                    "Visible sludge deposits on radiator internals",
                    "Dielectric strength at 25 kV (minimum 30 kV)",
                ],
                "recommendedAction": (
                    "Oil is beyond reclamation. Full replacement required as part of transformer replacement scope."
                ),
                "timeToFailure": "Contributing to active failure mode",
                "confidence": 94,
                "customersAtRisk": 65000,
            },
        },
    ],
    "PECO-TF-001": [
        {
            "componentName": "Winding Insulation",
            "category": "insulation",
            "issue": "DGA trending: thermal fault signature developing",
            "healthScore": 58,
            "temperature": 96,
            "moisture": 25,
            "status": "warning",
            "pmPrediction": {
                "predictedIssue": "Localized hot spot in LV winding - turn-to-turn insulation risk",
                "priority": "high",
                "warningSignals": [
                    "C2H4 at 85 ppm and rising (thermal fault gas)",
                    "C2H4/C2H6 ratio indicates hot spot 300-700°C range",
                    "Top-oil to winding gradient increasing",
                    "Load growth from data center corridor increasing thermal stress",
                ],
                "recommendedAction": (
                    "Install fiber-optic hot-spot sensors. Commission thermal study. "
                    "Plan capacity relief via new transformer in the capacity growth program."
                ),
                "timeToFailure": "12-24 months",
                "confidence": 80,
                "customersAtRisk": 55000,
            },
        },
        {
            "componentName": "Cooling System",
            "category": "cooling",
            "issue": "Oil pump #2 flow rate declining",
            "healthScore": 70,
            "temperature": 74,
            "status": "degraded",
            "pmPrediction": {
                "predictedIssue": "Reduced oil circulation impacting cooling capacity",
                "priority": "medium",
                "warningSignals": [
                    "Pump #2 flow rate 15% below design",
                    "Motor current slightly elevated",
                    "Oil temperature differential across cooler increased",
                ],
                "recommendedAction": (
                    "Replace oil pump during next scheduled outage. Verify all cooler fans operational."
                ),
                "timeToFailure": "6-9 months",
                "confidence": 74,
                "customersAtRisk": 55000,
            },
        },
        {
            "componentName": "LV Bushings",
            "category": "bushing",
            "issue": "Hairline crack observed on 69kV bushing porcelain",
            "healthScore": 66,
            "temperature": 64,
            "status": "degraded",
            "pmPrediction": {
                "predictedIssue": "Moisture ingress through crack leading to bushing failure",
                "priority": "medium",
                "warningSignals": [
                    "Visual crack on phase C 69kV bushing",
                    "Power factor test shows slight increase",
                    "No oil leakage yet but monitoring required",
                ],
                "recommendedAction": "Order replacement bushing. Schedule replacement during spring outage.",
                "timeToFailure": "3-6 months",
                "confidence": 71,
                "customersAtRisk": 55000,
            },
        },
    ],
}
