"""Prompt templates for LLM-powered coaching."""

from rift_coach.prompts.coaching_prompts import (
    build_follow_up_system_prompt,
    build_initial_system_prompt,
    build_user_prompt,
    compute_deltas,
)

__all__ = [
    "build_follow_up_system_prompt",
    "build_initial_system_prompt",
    "build_user_prompt",
    "compute_deltas",
]
