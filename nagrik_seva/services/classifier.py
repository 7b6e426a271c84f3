"""
Complaint Classifier - rule-based department routing.

Maps free-text complaints to a category, responsible department, helpline
and safety guidance using keyword matching.

DESIGN PRINCIPLES:
- Deterministic and pure: same text, same result
- Total: every input produces exactly one result, never an error
- Rules are checked in a fixed order; the first match wins
- Keywords match as substrings of the lower-cased text
"""

from typing import Dict, List
import logging

from nagrik_seva.models.analysis import ClassificationResult, RiskLevel

logger = logging.getLogger(__name__)


# Ordered rule table. Order matters: "water leak near the garbage dump"
# is Waste because the Waste rule is checked first.
CATEGORY_RULES: List[Dict] = [
    {
        "category": "Waste",
        "keywords": ["garbage", "waste", "trash", "dump", "smell", "dirty", "clean"],
        "department": "Sanitation Department",
        "importance": "Garbage accumulation can spread disease and attract pests.",
        "helpline": "1800-WASTE-MGT",
        "actions": ["Avoid the area if possible", "Report to local sanitation", "Take a photo"],
        "risk_level": RiskLevel.MEDIUM,
        "advice": "Proper waste management is key to urban hygiene. Avoid physical contact with waste.",
    },
    {
        "category": "Water",
        "keywords": ["water", "leak", "pipe", "sewage", "flood", "supply", "drain"],
        "department": "Water Board (Jal Board)",
        "importance": "Water leaks waste resources and can cause structural damage.",
        "helpline": "1800-WATER-FIX",
        "actions": ["Close main valve if possible", "Do not drink contaminated water"],
        "risk_level": RiskLevel.HIGH,
        "advice": "Standing water is a breeding ground for mosquitoes. Report leaks immediately to save water.",
    },
    {
        "category": "Air",
        "keywords": ["air", "smoke", "pollution", "dust", "burn", "fumes"],
        "department": "Pollution Control Board",
        "importance": "Poor air quality affects respiratory health.",
        "helpline": "1800-AIR-CARE",
        "actions": ["Wear a mask", "Keep windows closed"],
        "risk_level": RiskLevel.HIGH,
        "advice": "High pollution levels detected. Vulnerable groups should stay indoors.",
    },
    {
        "category": "Transport",
        "keywords": ["road", "pothole", "traffic", "bus", "transport", "street", "signal", "light"],
        "department": "Roads & Transport Authority",
        "importance": "Damaged roads cause accidents and traffic delays.",
        "helpline": "1800-ROAD-SAFE",
        "actions": ["Drive slowly", "Report exact location"],
        "risk_level": RiskLevel.MEDIUM,
        "advice": "Road safety is a shared responsibility. Alert others to the hazard.",
    },
    {
        "category": "Energy",
        "keywords": ["energy", "power", "electric", "outage", "pole", "wire", "shock"],
        "department": "Electricity Department",
        "importance": "Exposed wires or outages can be dangerous.",
        "helpline": "1800-POWER-OFF",
        "actions": ["Stay away from wires", "Report immediately"],
        "risk_level": RiskLevel.HIGH,
        "advice": "Electrical hazards can be fatal. Do not attempt to fix wires yourself.",
    },
]

DEFAULT_RULE: Dict = {
    "category": "General",
    "keywords": [],
    "department": "Civic Help Center",
    "importance": "Important for community well-being.",
    "helpline": "1800-CIVIC-HELP",
    "actions": ["Provide clear details", "Upload a photo if possible"],
    "risk_level": RiskLevel.LOW,
    "advice": "Your feedback helps improve our city services.",
}


def match_rule(text: str) -> Dict:
    """Return the first rule with a keyword in `text`, or the default rule."""
    text_lower = (text or "").lower()
    for rule in CATEGORY_RULES:
        if any(keyword in text_lower for keyword in rule["keywords"]):
            return rule
    return DEFAULT_RULE


def classify_text(text: str) -> ClassificationResult:
    """
    Classify a complaint.

    Args:
        text: Raw complaint text (any string, may be empty)

    Returns:
        ClassificationResult with department, helpline and guidance
    """
    rule = match_rule(text)
    logger.debug(f"Classified complaint as {rule['category']}")

    return ClassificationResult(
        category=rule["category"],
        department=rule["department"],
        importance=rule["importance"],
        helpline=rule["helpline"],
        actions=list(rule["actions"]),
        risk_level=rule["risk_level"],
        advice=rule["advice"],
    )
