"""
UI Module

Trigger control, output region, rendering and click handlers.
"""

from .controls import OutputRegion, TriggerControl
from .handlers import (
    handle_create_click,
    handle_fetch_click,
    handle_search_click,
    random_user_id,
    validate_user_id,
)
from .render import format_profile, render_profile

__all__ = [
    "OutputRegion",
    "TriggerControl",
    "format_profile",
    "handle_create_click",
    "handle_fetch_click",
    "handle_search_click",
    "random_user_id",
    "render_profile",
    "validate_user_id",
]
