class LiveSourceError(Exception):
    """Base class for failures while pulling from an external live source."""


class FetchError(LiveSourceError):
    pass


class FetchTimeoutError(FetchError):
    pass


class FetchStatusError(FetchError):
    def __init__(self, url: str, status_code: int):
        super().__init__(f"{url} returned status {status_code}")
        self.url = url
        self.status_code = status_code


class MalformedPayloadError(LiveSourceError):
    pass
