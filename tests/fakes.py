import requests

SCHEMES = [
    {"schemeCode": 118825, "schemeName": "Mirae Asset Large Cap Fund - Direct Plan - Growth",
     "isinGrowth": "INF769K01AX2", "isinDivReinvestment": None},
    {"schemeCode": "100119", "schemeName": "HDFC Top 100 Fund - Growth Option",
     "isinGrowth": "INF179K01BB8", "isinDivReinvestment": None},
    {"schemeCode": "100120", "schemeName": "HDFC Equity Growth Fund",
     "isinGrowth": None, "isinDivReinvestment": "INF179K01BC6"},
    {"schemeCode": "100121", "schemeName": "Growth HDFC Fund"},
    {"schemeCode": "900001", "schemeName": "a.b*c fund"},
    {"schemeCode": "900002", "schemeName": "aXbYYYc fund"},
]


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self._payload = payload
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self.text is not None:
            raise ValueError("not JSON: " + self.text)
        return self._payload


class FakeSession:
    """
    routes: {url: FakeResponse | Exception}
    records every requested url in .calls
    """
    def __init__(self, routes=None):
        self.routes = routes or {}
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append(url)
        resp = self.routes.get(url)
        if resp is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(resp, Exception):
            raise resp
        return resp
