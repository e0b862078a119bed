"""
Orchestration Module

Sequential and fan-out compositions of the profile pipeline.
"""

from .pipeline import Chain, Outcome, gather_fail_fast
from .sequences import (
    PIPELINE_STEPS,
    run_chained,
    run_pipeline,
    show_multiple_users,
    show_user_data,
)

__all__ = [
    "PIPELINE_STEPS",
    "Chain",
    "Outcome",
    "gather_fail_fast",
    "run_chained",
    "run_pipeline",
    "show_multiple_users",
    "show_user_data",
]
