from typing import Dict, Optional

from snipers.schemas.common import CamelModel, UtcDateTime


class AssetAllocation(CamelModel):
    percentage: float
    value: float


class SnapshotCreate(CamelModel):
    total_value: float
    btc_value: Optional[float] = None
    assets: Optional[Dict[str, AssetAllocation]] = None


class SnapshotResponse(CamelModel):
    id: int
    user_id: int
    total_value: float
    btc_value: Optional[float] = None
    assets: Optional[Dict[str, AssetAllocation]] = None
    timestamp: UtcDateTime
