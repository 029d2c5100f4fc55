from fastapi import Request

from command_center.live.cache import LiveDataCache


def get_live_cache(request: Request) -> LiveDataCache:
    """Live cache owned by the running application (see service.create_app)."""
    return request.app.state.live_cache
