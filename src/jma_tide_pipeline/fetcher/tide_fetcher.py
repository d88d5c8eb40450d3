# jma_tide_pipeline/fetcher/tide_fetcher.py
from typing import Optional

from requests.exceptions import RequestException

from jma_tide_pipeline.logger.app_logger import get_logger
from jma_tide_pipeline.utils.config_loader import DEFAULT_BASE_URL
from jma_tide_pipeline.utils.http_client import DEFAULT_MIN_INTERVAL, ThrottledTextClient


class TideFetcher:
    """
    TideFetcher クラス: 気象庁の潮位表掲載地点一覧と潮位表テキストをHTTPで取得する。
    取得した文字列はそのままパーサーに渡す（部分的な読み込みはしない）。
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = 30,
        encoding: str = "utf-8",
        min_interval: float = DEFAULT_MIN_INTERVAL,
        client: Optional[ThrottledTextClient] = None,
    ):
        """
        :param base_url: 気象庁 海洋データのベースURL（例: https://www.data.jma.go.jp/kaiyou）
        :param timeout: HTTPリクエストのタイムアウト秒
        :param encoding: レスポンスの文字コード
        :param min_interval: 連続リクエストの最小間隔（秒）
        :param client: 差し替え用のHTTPクライアント（省略時は上記の設定で生成）
        """
        self.base_url = base_url.rstrip("/")
        self.client = client or ThrottledTextClient(
            timeout=timeout, encoding=encoding, min_interval=min_interval
        )
        self.logger = get_logger(__name__)

    def build_station_list_url(self, year: int) -> str:
        """潮位表掲載地点一覧表のURLを生成する。"""
        return f"{self.base_url}/db/tide/suisan/station{year}.php"

    def build_tide_table_url(self, station_code: str, year: int) -> str:
        """地点・年ごとの潮位表テキストのURLを生成する。"""
        return f"{self.base_url}/data/db/tide/suisan/txt/{year}/{station_code}.txt"

    def fetch_station_directory(self, year: int) -> str:
        """地点一覧のHTMLを返す。"""
        return self._request_text(self.build_station_list_url(year))

    def fetch_tide_table(self, station_code: str, year: int) -> str:
        """潮位表テキストを返す。"""
        return self._request_text(self.build_tide_table_url(station_code, year))

    def _request_text(self, url: str) -> str:
        self.logger.info("取得開始: %s", url)
        try:
            text = self.client.get_text(url)
        except RequestException as exc:
            raise RequestException(f"{url} からデータ取得に失敗しました") from exc
        self.logger.info("取得完了: %s (%d chars)", url, len(text))
        return text
