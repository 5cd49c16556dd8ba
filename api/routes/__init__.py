"""API routes package"""

from . import health, patients, diet_plans, exports

__all__ = ["health", "patients", "diet_plans", "exports"]
