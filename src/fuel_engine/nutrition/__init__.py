"""Nutrient profiles, aggregation and hourly statistics."""

from fuel_engine.nutrition.aggregator import aggregate
from fuel_engine.nutrition.hourly_stats import (
    HourlyStats,
    baseline_hourly_targets,
    hourly_stats,
    hourly_table,
)
from fuel_engine.nutrition.profiles import NUTRIENT_PROFILES

__all__ = [
    "HourlyStats",
    "NUTRIENT_PROFILES",
    "aggregate",
    "baseline_hourly_targets",
    "hourly_stats",
    "hourly_table",
]
