"""Serialization of the application state to JSON-compatible dicts."""

from fuel_engine.serialization.app_state import (
    AppState,
    app_state_from_dict,
    app_state_to_dict,
    from_json_string,
    to_json_string,
)

__all__ = [
    "AppState",
    "app_state_from_dict",
    "app_state_to_dict",
    "from_json_string",
    "to_json_string",
]
