"""Async orchestration services."""

from .coaching_service import CoachingService
from .coaching_workflow import CoachingWorkflow, select_ranked_solo_entry

__all__ = ["CoachingService", "CoachingWorkflow", "select_ranked_solo_entry"]
