"""Shared types for the bulkbatch package."""

from typing import Any, Mapping


class _CurrentTimestamp:
    """Marker value bound as the statement's build time."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CURRENT_TIMESTAMP"


CURRENT_TIMESTAMP = _CurrentTimestamp()

Row = dict[str, Any]
Record = Mapping[str, Any]
Params = tuple | list | dict
