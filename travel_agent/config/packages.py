"""
Travel package catalogue
"""

import json
import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# The single live package. Keywords trigger selection anywhere in a conversation.
LIVE_PACKAGE = {
    "id": "P001",
    "name": "Bali Explorer (P001)",
    "destination": "Bali, Indonesia",
    "keywords": ["bali", "p001", "explorer"],
    "duration": "6 days / 5 nights",
    "highlights": [
        "Ubud rice terraces and monkey forest",
        "Uluwatu temple at sunset",
        "Mount Batur volcano sunrise trek",
        "Nusa Penida day trip",
    ],
    "accommodation": "4-star resort stays in Ubud and Seminyak with daily breakfast, twin sharing",
    "food": "Daily breakfast plus one Balinese dinner; local warungs and beach cafes are close to both hotels",
    "attractions": "Tanah Lot, Uluwatu, Tegallalang rice terraces, Ubud market, Kuta and Seminyak beaches",
}

# Destination keywords used when composing backend notes
DESTINATION_KEYWORDS = ["bali", "paris", "london"]

# Sub-topics for package questions
PACKAGE_QUESTION_TOPICS = {
    "accommodation": [
        "accommodation", "hotel", "stay", "room", "resort", "villa", "check in", "check-in",
    ],
    "food": [
        "food", "meal", "breakfast", "lunch", "dinner", "restaurant", "cuisine", "vegetarian", "veg",
    ],
    "attractions": [
        "attraction", "nearby", "sightseeing", "places", "visit", "activities", "activity",
        "itinerary", "tour", "beach",
    ],
    "general": [
        "include", "included", "inclusion", "exclude", "duration", "how long", "details",
        "transfer", "airport", "transport", "guide",
    ],
}


def load_packages(path: Optional[str] = None) -> List[Dict[str, Any]]:
    """Load the package catalogue, overriding the live package text from a JSON file if given"""
    package = dict(LIVE_PACKAGE)

    if path:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            for entry in data.get("packages", []):
                if entry.get("id") == package["id"]:
                    package.update({k: v for k, v in entry.items() if v})
                    logger.info(f"✅ Loaded package details for {package['id']} from {path}")
        except FileNotFoundError:
            logger.warning(f"Travel packages file not found: {path}, using built-in catalogue")
        except (OSError, ValueError) as e:
            logger.error(f"❌ Error loading packages data from {path}: {e}")

    return [package]


def format_package_context(packages: List[Dict[str, Any]]) -> str:
    """Render packages as prompt context"""
    lines = []
    for package in packages:
        lines.append(f"- {package['name']} | {package['destination']} | {package['duration']}")
        lines.append(f"  Highlights: {', '.join(package['highlights'])}")
        lines.append(f"  Accommodation: {package['accommodation']}")
        lines.append(f"  Food: {package['food']}")
        lines.append(f"  Attractions: {package['attractions']}")
    return "\n".join(lines)
