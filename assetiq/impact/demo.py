from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from assetiq.impact.models import FleetState


def demo_fleet_dict(as_of: datetime) -> dict[str, Any]:
    """Four vessels, three projects; every date is relative to as_of."""
    def days(n: int) -> str:
        return (as_of + timedelta(days=n)).isoformat()

    return {
        "asOf": as_of.isoformat(),
        "vessels": [
            {"id": "v1", "name": "Al Mirfa", "type": "dredger", "status": "operational",
             "location": {"lat": 24.5, "lng": 54.0}, "healthScore": 85, "fuelLevel": 72, "crewCount": 45,
             "dailyOperatingCost": 85000, "dailyRevenue": 120000, "emissionsPerDay": 45},
            {"id": "v2", "name": "Al Hamra", "type": "dredger", "status": "operational",
             "location": {"lat": 24.6, "lng": 54.1}, "healthScore": 78, "fuelLevel": 65, "crewCount": 42,
             "dailyOperatingCost": 82000, "dailyRevenue": 115000, "emissionsPerDay": 42},
            {"id": "v3", "name": "SEP-550", "type": "jack_up_barge", "status": "operational", "project": "ZADCO",
             "location": {"lat": 24.4, "lng": 53.9}, "healthScore": 73, "fuelLevel": 80, "crewCount": 35,
             "dailyOperatingCost": 65000, "dailyRevenue": 95000, "emissionsPerDay": 28},
            {"id": "v4", "name": "PLB-648", "type": "pipe_lay_barge", "status": "maintenance",
             "location": {"lat": 24.3, "lng": 54.2}, "healthScore": 60, "fuelLevel": 45, "crewCount": 50,
             "dailyOperatingCost": 95000, "dailyRevenue": 140000, "emissionsPerDay": 55},
        ],
        "projects": [
            {"id": "p1", "name": "ZADCO Upper Zakum", "client": "ZADCO", "status": "active", "priority": "critical",
             "progress": 45, "budget": {"allocated": 15000000, "spent": 6750000}, "deadline": days(90),
             "assignedVessels": ["v1", "v3"], "dailyBurnRate": 150000, "penaltyPerDayDelay": 50000},
            {"id": "p2", "name": "ADNOC LNG Terminal", "client": "ADNOC", "status": "active", "priority": "high",
             "progress": 30, "budget": {"allocated": 25000000, "spent": 7500000}, "deadline": days(120),
             "assignedVessels": ["v2", "v4"], "dailyBurnRate": 200000, "penaltyPerDayDelay": 75000},
            {"id": "p3", "name": "Ras Al Khair Expansion", "client": "Saudi Aramco", "status": "planning",
             "priority": "medium", "progress": 10, "budget": {"allocated": 8000000, "spent": 800000},
             "deadline": days(180), "assignedVessels": [], "dailyBurnRate": 80000, "penaltyPerDayDelay": 25000},
        ],
        "crew": [
            {"id": "c1", "name": "Ahmed Hassan", "role": "Captain", "vesselId": "v1",
             "certifications": ["Master Mariner", "STCW"], "availability": "assigned"},
            {"id": "c2", "name": "Mohammed Ali", "role": "Chief Engineer", "vesselId": "v1",
             "certifications": ["Marine Engineering", "STCW"], "availability": "assigned"},
            {"id": "c3", "name": "Youssef Ibrahim", "role": "Captain", "vesselId": "v2",
             "certifications": ["Master Mariner", "STCW"], "availability": "assigned"},
            {"id": "c4", "name": "Omar Khalid", "role": "First Officer", "vesselId": "v3",
             "certifications": ["Officer of Watch", "STCW"], "availability": "leave"},
            {"id": "c5", "name": "Khalid Saeed", "role": "Engineer",
             "certifications": ["Marine Engineering"], "availability": "training"},
        ],
        "maintenance": [
            {"id": "m1", "vesselId": "v1", "type": "Engine Overhaul", "scheduledDate": days(15),
             "estimatedDuration": 7, "priority": "high", "canDefer": False},
            {"id": "m2", "vesselId": "v3", "type": "Crane Inspection", "scheduledDate": days(25),
             "estimatedDuration": 3, "priority": "medium", "canDefer": True},
            {"id": "m3", "vesselId": "v2", "type": "Hull Cleaning", "scheduledDate": days(45),
             "estimatedDuration": 2, "priority": "low", "canDefer": True},
        ],
        "supplyChain": {
            "spareParts": [
                {"id": "sp1", "name": "Main Engine Bearings", "quantity": 4, "reorderPoint": 5, "leadTimeDays": 21},
                {"id": "sp2", "name": "Hydraulic Pumps", "quantity": 2, "reorderPoint": 3, "leadTimeDays": 14},
                {"id": "sp3", "name": "Generator Parts Kit", "quantity": 8, "reorderPoint": 4, "leadTimeDays": 7},
            ],
            "fuelContracts": [
                {"id": "fc1", "fuelType": "HFO", "pricePerUnit": 450, "minCommitment": 10000, "expiryDate": days(365)},
                {"id": "fc2", "fuelType": "MDO", "pricePerUnit": 680, "minCommitment": 5000, "expiryDate": days(180)},
                {"id": "fc3", "fuelType": "LNG", "pricePerUnit": 520, "minCommitment": 3000, "expiryDate": days(730)},
            ],
            "portContracts": [
                {"id": "pc1", "portName": "Abu Dhabi Port", "berthAvailability": 0.7, "dailyRate": 15000},
                {"id": "pc2", "portName": "Jebel Ali", "berthAvailability": 0.25, "dailyRate": 18000},
                {"id": "pc3", "portName": "Khalifa Port", "berthAvailability": 0.85, "dailyRate": 12000},
            ],
        },
        "compliance": {
            "imo2030Progress": 65,
            "ciiRatings": {"v1": "B", "v2": "C", "v3": "B", "v4": "C"},
            "upcomingAudits": [
                {"date": days(45), "type": "ISM Audit"},
                {"date": days(90), "type": "CII Verification"},
            ],
            "certificates": [
                {"name": "SOLAS", "vesselId": "v1", "expiryDate": days(180)},
                {"name": "ISM", "vesselId": "v2", "expiryDate": days(30)},
            ],
        },
        "financials": {
            "monthlyBudget": 5000000,
            "currentSpend": 3200000,
            "carbonCreditBalance": 5000,
            "carbonCreditPrice": 85,
            "insurancePremiumBase": 2500000,
        },
    }


def demo_fleet_state(as_of: datetime) -> FleetState:
    return FleetState.from_dict(demo_fleet_dict(as_of))


def demo_change_dict(change_type: str = "fuel_switch") -> dict[str, Any]:
    presets: dict[str, dict[str, Any]] = {
        "fuel_switch": {
            "title": "Switch Al Mirfa to LNG",
            "affectedVessels": ["v1"],
            "affectedProjects": ["p1"],
            "parameters": {"newFuelType": "LNG"},
        },
        "vessel_assignment": {
            "title": "Reassign Al Mirfa to ADNOC LNG Terminal",
            "affectedVessels": ["v1"],
            "affectedProjects": ["p1"],
            "parameters": {"delayDays": 10},
        },
        "equipment_failure": {
            "title": "Main engine failure on SEP-550",
            "affectedVessels": ["v3"],
            "affectedProjects": ["p1"],
            "parameters": {"severity": "critical", "estimatedDamage": 750000},
        },
    }
    body = presets.get(change_type, {"title": change_type.replace("_", " ").title()})
    return {"id": f"demo-{change_type}", "type": change_type, "description": body["title"], **body}
