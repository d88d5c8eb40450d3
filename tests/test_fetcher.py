import pytest
import requests

from jma_tide_pipeline.fetcher.tide_fetcher import TideFetcher


class FakeClient:
    """ThrottledTextClient 代替。URLごとの応答を返し、呼び出しを記録する"""

    def __init__(self, payload: str = "payload", error: Exception = None):
        self.payload = payload
        self.error = error
        self.urls = []

    def get_text(self, url, headers=None):
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.payload


def test_build_urls():
    fetcher = TideFetcher("https://www.data.jma.go.jp/kaiyou/", client=FakeClient())

    assert fetcher.build_station_list_url(2025) == (
        "https://www.data.jma.go.jp/kaiyou/db/tide/suisan/station2025.php"
    )
    assert fetcher.build_tide_table_url("TK", 2025) == (
        "https://www.data.jma.go.jp/kaiyou/data/db/tide/suisan/txt/2025/TK.txt"
    )


def test_fetch_tide_table_returns_text():
    client = FakeClient("payload")
    fetcher = TideFetcher(client=client)

    assert fetcher.fetch_tide_table("TK", 2025) == "payload"
    assert client.urls == ["https://www.data.jma.go.jp/kaiyou/data/db/tide/suisan/txt/2025/TK.txt"]


def test_default_client_uses_fetch_settings():
    fetcher = TideFetcher(timeout=5, encoding="shift_jis", min_interval=0.0)

    assert fetcher.client._timeout == 5
    assert fetcher.client._encoding == "shift_jis"


def test_fetch_failure_is_wrapped():
    client = FakeClient(error=requests.ConnectionError("boom"))

    with pytest.raises(requests.RequestException) as excinfo:
        TideFetcher(client=client).fetch_station_directory(2025)
    assert "station2025.php" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)
