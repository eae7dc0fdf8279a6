from .runner import DAILY_REMINDERS_JOB, WEEKLY_SWEEP_JOB, ReminderJobRunner
from .single_flight import SingleFlight

__all__ = ["DAILY_REMINDERS_JOB", "WEEKLY_SWEEP_JOB", "ReminderJobRunner", "SingleFlight"]
