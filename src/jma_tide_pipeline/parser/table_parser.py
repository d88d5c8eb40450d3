from abc import ABC, abstractmethod
from typing import Any, List, Optional

from bs4 import BeautifulSoup, Tag


class TableParser(ABC):
    """HTMLテーブル構造を解析するための抽象基底クラス"""

    # テーブルを特定するためのCSSセレクタ（優先順）
    TABLE_SELECTORS: List[str] = ['table']

    @abstractmethod
    def can_parse(self, table: Tag) -> bool:
        """このパーサーで処理可能なテーブルか判定"""
        pass

    @abstractmethod
    def parse_table(self, table: Tag) -> Any:
        """テーブルをパースして結果を返す"""
        pass

    def find_table(self, soup: BeautifulSoup) -> Optional[Tag]:
        """HTMLから適切なテーブル要素を探して返す

        Args:
            soup: BeautifulSoupオブジェクト

        Returns:
            Optional[Tag]: 見つかったテーブル要素。見つからない場合はNone
        """
        for selector in self.TABLE_SELECTORS:
            for table in soup.select(selector):
                if self.can_parse(table):
                    return table
        return None

    def parse(self, html: str) -> Any:
        """HTML文字列からテーブルを探してパースする

        Raises:
            ValueError: 対応するテーブルが見つからない場合
        """
        soup = BeautifulSoup(html, "html.parser")
        table = self.find_table(soup)
        if table is None:
            tables = soup.find_all("table")
            available_tables = [
                {
                    "index": i,
                    "classes": t.get('class', ['no-class']),
                    "first_row": str(t.find('tr'))[:100] + '...' if t.find('tr') else 'no-rows',
                }
                for i, t in enumerate(tables)
            ]
            raise ValueError(
                "サポートされていないテーブル形式です。\n"
                f"利用可能なテーブル: {available_tables}"
            )
        return self.parse_table(table)
