from __future__ import annotations

from typing import Any, Dict, Optional, Protocol


class ThresholdRepository(Protocol):
    """Per-activity threshold preference store (payload is the JSON-ready dict)."""

    def get(self, activity_id: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def save(self, activity_id: str, payload: Dict[str, Any]) -> None:
        raise NotImplementedError
