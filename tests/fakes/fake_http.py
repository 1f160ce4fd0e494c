# tests/fakes/fake_http.py

import requests


class FakeResponse:
    """Minimal stand-in for a streamed ``requests.Response``."""

    def __init__(self, status_code=200, chunks=(b"%PDF-1.4\n", b"body"), reason="OK", fail_after=None):
        self.status_code = status_code
        self.reason = reason
        self._chunks = list(chunks)
        self._fail_after = fail_after
        self.closed = False

    def iter_content(self, chunk_size=1):
        for index, chunk in enumerate(self._chunks):
            if self._fail_after is not None and index >= self._fail_after:
                raise requests.ConnectionError("connection reset")
            yield chunk

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


def install_fake_get(monkeypatch, response=None, error=None):
    """Patch ``requests.get`` and return the list of recorded calls."""
    calls = []

    def fake_get(url, **kwargs):
        calls.append((url, kwargs))
        if error is not None:
            raise error
        return response

    monkeypatch.setattr("requests.get", fake_get)
    return calls
