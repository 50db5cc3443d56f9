# SPDX-License-Identifier: GPL-2.0-or-later
import requests


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self.payload = payload
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")

    def json(self):
        if self.text is not None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


class FakeSession:
    def __init__(self, routes):
        self.routes = routes
        self.headers = {}
        self.verify = True
        self.mounted = {}
        self.gets = []
        self.closed = False

    def mount(self, prefix, adapter):
        self.mounted[prefix] = adapter

    def get(self, url, timeout=None):
        self.gets.append((url, timeout))
        hit = self.routes.get(url)
        if isinstance(hit, BaseException):
            raise hit
        if hit is None:
            return FakeResponse(status_code=404)
        return hit

    def close(self):
        self.closed = True


class _FakeAdapters:
    class HTTPAdapter:
        def __init__(self, max_retries=None):
            self.max_retries = max_retries


class FakeHttp:
    """Stands in for the `requests` module: url -> FakeResponse | exception."""

    adapters = _FakeAdapters

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.sessions = []

    def Session(self):
        s = FakeSession(self.routes)
        self.sessions.append(s)
        return s


class FakeFetcher:
    """ReferenceFetcher stand-in for mode tests."""

    def __init__(self, docs):
        self.docs = dict(docs)
        self.urls = []

    def fetch_json(self, url):
        self.urls.append(url)
        doc = self.docs[url]
        if isinstance(doc, BaseException):
            raise doc
        return doc
