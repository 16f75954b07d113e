"""Fuel engine — race-day nutrition schedule, adherence tracking and health triage.

Pure domain core: no file, network or timer I/O.
"""

from fuel_engine.session import RaceSession

__all__ = ["RaceSession"]
