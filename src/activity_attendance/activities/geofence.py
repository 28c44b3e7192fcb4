from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ..core.exceptions import InvalidLocationDataError


@dataclass(frozen=True)
class Geofence:
    """Tâm và bán kính của vùng điểm danh hợp lệ."""

    lat: float
    lng: float
    radius_meters: float
    address: str = ""
    label: Optional[str] = None

    def checked(self, source: str) -> "Geofence":
        """Return self, or raise naming `source` when the numbers cannot be used."""

        for field_name, value in (("lat", self.lat), ("lng", self.lng), ("radius", self.radius_meters)):
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise InvalidLocationDataError(
                    f"Dữ liệu vị trí không hợp lệ ở {source}: {field_name}={value!r}", source=source
                )
        if not -90 <= self.lat <= 90 or not -180 <= self.lng <= 180:
            raise InvalidLocationDataError(
                f"Tọa độ ngoài phạm vi ở {source}: ({self.lat}, {self.lng})", source=source
            )
        if self.radius_meters <= 0:
            raise InvalidLocationDataError(
                f"Bán kính phải lớn hơn 0 ở {source} (nhận được {self.radius_meters})", source=source
            )
        return self
