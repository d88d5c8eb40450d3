import pytest
import requests

from jma_tide_pipeline.utils.http_client import ThrottledTextClient


class DummyResponse:
    def __init__(self, text: str, status_code: int = 200):
        self.text = text
        self.status_code = status_code
        self.encoding = None

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")


class FakeClock:
    def __init__(self, start: float = 100.0):
        self.now = start
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def _client(responses, clock, calls=None, **kwargs):
    responses = iter(responses)

    def fake_request(url, headers, timeout):
        if calls is not None:
            calls.append((url, headers, timeout))
        return next(responses)

    return ThrottledTextClient(
        request_func=fake_request, sleep_func=clock.sleep, clock=clock, **kwargs
    )


def test_get_text_sets_encoding_and_headers():
    clock = FakeClock()
    calls = []
    response = DummyResponse("本文")
    client = _client([response], clock, calls, timeout=5, encoding="shift_jis")

    assert client.get_text("http://example.com", headers={"Referer": "x"}) == "本文"
    url, headers, timeout = calls[0]
    assert (url, timeout) == ("http://example.com", 5)
    assert headers["Referer"] == "x"
    assert "Mozilla" in headers["User-Agent"]
    assert response.encoding == "shift_jis"


# 連続アクセスは最小間隔まで待つ。最初の1回は待たない
def test_requests_are_spaced_by_min_interval():
    clock = FakeClock()
    client = _client([DummyResponse("a"), DummyResponse("b"), DummyResponse("c")], clock, min_interval=1.5)

    client.get_text("http://example.com/1")
    clock.now += 0.5
    client.get_text("http://example.com/2")
    clock.now += 3.0
    client.get_text("http://example.com/3")

    assert clock.sleeps == [pytest.approx(1.0)]


def test_error_status_raises_without_retry():
    clock = FakeClock()
    calls = []
    client = _client([DummyResponse("", 503), DummyResponse("ok")], clock, calls)

    with pytest.raises(requests.HTTPError):
        client.get_text("http://example.com")
    assert len(calls) == 1


def test_connection_error_propagates():
    clock = FakeClock()

    def failing_request(url, headers, timeout):
        raise requests.ConnectionError("down")

    client = ThrottledTextClient(request_func=failing_request, sleep_func=clock.sleep, clock=clock)

    with pytest.raises(requests.ConnectionError):
        client.get_text("http://example.com")
