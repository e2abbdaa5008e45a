"""Scheduling of automated turns."""

from .scheduler import AsyncioScheduler, ManualScheduler, RoundToken, Scheduler

__all__ = ["AsyncioScheduler", "ManualScheduler", "RoundToken", "Scheduler"]
