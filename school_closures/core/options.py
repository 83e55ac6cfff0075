"""
Option sets offered by data entry forms.
These are suggestions for the presentation layer; the validator only requires non-empty text.
"""

from typing import Any, Dict, List

from .config import YEAR_MAX, YEAR_MIN

MAHARASHTRA_DISTRICTS = [
    "Ahmednagar", "Akola", "Amravati", "Aurangabad", "Beed", "Bhandara", "Buldhana",
    "Chandrapur", "Dhule", "Gadchiroli", "Gondia", "Hingoli", "Jalgaon", "Jalna",
    "Kolhapur", "Latur", "Mumbai City", "Mumbai Suburban", "Nagpur", "Nanded",
    "Nandurbar", "Nashik", "Osmanabad", "Palghar", "Parbhani", "Pune", "Raigad",
    "Ratnagiri", "Sangli", "Satara", "Sindhudurg", "Solapur", "Thane", "Wardha",
    "Washim", "Yavatmal",
]

CLOSURE_REASONS = [
    "Low student enrollment",
    "Lack of teachers",
    "Poor infrastructure",
    "School merger policy",
    "Financial constraints",
    "Natural disaster damage",
    "Accessibility issues",
    "Government policy change",
    "Community migration",
    "Other",
]


def closure_years() -> List[int]:
    """Selectable years of closure, most recent first."""
    return list(range(YEAR_MAX, YEAR_MIN - 1, -1))


def form_options() -> Dict[str, Any]:
    return {
        "districts": list(MAHARASHTRA_DISTRICTS),
        "reasons": list(CLOSURE_REASONS),
        "years": closure_years(),
    }
