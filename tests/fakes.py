from unittest.mock import MagicMock

import requests


def make_response(status_code=200, payload=None, json_error=None):
    response = MagicMock()
    response.status_code = status_code
    response.__exit__.return_value = False
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


class FakeHttpSession:
    """Stands in for requests.Session: maps URL -> response or exception."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self.closed = False

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        outcome = self.routes.get(url)
        if outcome is None:
            raise requests.ConnectionError(f"no route for {url}")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self):
        self.closed = True
