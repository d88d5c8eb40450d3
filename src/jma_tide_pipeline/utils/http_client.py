"""HTTPユーティリティ: 一定間隔を空けてGETし、本文を文字列で返す。"""

from __future__ import annotations

import threading
import time
from typing import Callable, Dict, Optional

import requests

# 気象庁サイトはブラウザ以外のUAを弾くことがある
DEFAULT_HEADERS: Dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/129.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,text/plain;q=0.9,*/*;q=0.8",
    "Accept-Language": "ja,en-US;q=0.9,en;q=0.8",
}

DEFAULT_MIN_INTERVAL = 1.0


class ThrottledTextClient:
    """連続アクセスの間隔を保ちながらテキスト（HTML・潮位表）を取得するクライアント。

    失敗時の再試行は行わず、requests の例外をそのまま送出する。
    """

    def __init__(
        self,
        *,
        timeout: int = 30,
        encoding: str = "utf-8",
        min_interval: float = DEFAULT_MIN_INTERVAL,
        default_headers: Optional[Dict[str, str]] = None,
        request_func: Optional[Callable[[str, Dict[str, str], int], requests.Response]] = None,
        sleep_func: Optional[Callable[[float], None]] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self._headers = {**DEFAULT_HEADERS, **(default_headers or {})}
        self._timeout = timeout
        self._encoding = encoding
        self._min_interval = max(min_interval, 0.0)
        self._request = request_func or self._default_request
        self._sleep = sleep_func or time.sleep
        self._clock = clock or time.monotonic
        self._lock = threading.Lock()
        self._last_request_at: Optional[float] = None

    def _default_request(self, url: str, headers: Dict[str, str], timeout: int) -> requests.Response:
        return requests.get(url, headers=headers, timeout=timeout)

    def _wait_turn(self) -> None:
        with self._lock:
            if self._last_request_at is not None:
                wait = self._last_request_at + self._min_interval - self._clock()
                if wait > 0:
                    self._sleep(wait)
            self._last_request_at = self._clock()

    def get_text(self, url: str, headers: Optional[Dict[str, str]] = None) -> str:
        """
        GETして本文を返す。

        :param url: アクセス先URL
        :param headers: 追加または上書きしたいヘッダー
        :raises requests.RequestException: 通信エラーまたは4xx/5xx応答
        """
        self._wait_turn()
        merged_headers = {**self._headers, **(headers or {})}
        response = self._request(url, merged_headers, self._timeout)
        response.raise_for_status()
        response.encoding = self._encoding
        return response.text
