from .frames import (
    campaigns_frame,
    demographic_frame,
    device_frame,
    region_frame,
    weekly_frame,
)
from .loader import MarketingDataLoader

__all__ = [
    "MarketingDataLoader",
    "campaigns_frame",
    "demographic_frame",
    "device_frame",
    "region_frame",
    "weekly_frame",
]
