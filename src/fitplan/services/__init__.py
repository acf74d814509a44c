"""Services coordinating the plan engine with storage."""

from .plan_service import PlanService
from .record_service import RecordService

__all__ = ["PlanService", "RecordService"]
