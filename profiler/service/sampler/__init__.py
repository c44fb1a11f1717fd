"""Drift-compensated sampling loop."""

from .sampler import Sampler
from .tick_event import TickEvent

__all__ = ["Sampler", "TickEvent"]
