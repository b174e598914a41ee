from __future__ import annotations

from typing import List

# Below these counts a tip is shown.
MIN_CONNECTIONS = 3
MIN_PRODUCTS = 5
MIN_CONVERSIONS = 10


def improvement_tips(connections: int, products: int, conversions: int) -> List[dict]:
    """Suggestions for raising the credit score, most useful first."""

    tips = []

    if connections < MIN_CONNECTIONS:
        tips.append({
            "id": "connect-more",
            "title": "Connect More Platforms",
            "description": "Connecting all your social accounts increases your credit score significantly.",
            "impact": "high",
            "action": "Connect now",
            "actionRoute": "/app/connect",
        })

    if products < MIN_PRODUCTS:
        tips.append({
            "id": "add-products",
            "title": "Add More Products",
            "description": "Having more products in your shop shows affiliate commitment.",
            "impact": "medium",
            "action": "Browse products",
            "actionRoute": "/app/recommendations",
        })

    if conversions < MIN_CONVERSIONS:
        tips.append({
            "id": "drive-conversions",
            "title": "Drive More Conversions",
            "description": "Share your shoplinks to generate sales and boost your credit score.",
            "impact": "high",
            "action": "View shoplinks",
            "actionRoute": "/app/shoplinks",
        })

    return tips
