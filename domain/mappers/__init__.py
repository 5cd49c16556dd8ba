"""
Domain mappers package.
Handles transformation between ORM models and DTOs (Data Transfer Objects).
"""

from domain.mappers.plan_mapper import DietPlanMapper, active_to_status, status_to_active

__all__ = ["DietPlanMapper", "active_to_status", "status_to_active"]
