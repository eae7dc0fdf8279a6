from .email_dispatcher import SesEmailDispatcher
from .factory import create_dispatcher
from .log_dispatcher import LogDispatcher
from .teams_dispatcher import TeamsWebhookDispatcher
from .templates import TIER_STYLES, RenderedReminder, render_reminder, render_subject

__all__ = [
    "TIER_STYLES",
    "LogDispatcher",
    "RenderedReminder",
    "SesEmailDispatcher",
    "TeamsWebhookDispatcher",
    "create_dispatcher",
    "render_reminder",
    "render_subject",
]
