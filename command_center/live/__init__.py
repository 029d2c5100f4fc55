"""
Live data refresh.

Polls three external sources on a fixed interval and republishes normalized
snapshots into the in-memory LiveDataCache that the read endpoints prefer
over storage.
"""

from command_center.live.cache import LiveDataCache
from command_center.live.refresher import LiveDataRefresher

__all__ = ["LiveDataCache", "LiveDataRefresher"]
