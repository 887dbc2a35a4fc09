"""
app/validators package marker.
"""

from app.validators.esg_rules import ESGValidationRules

__all__ = [
    "ESGValidationRules",
]
