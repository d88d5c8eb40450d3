"""
潮位データのデコードで発生する例外

いずれも決定的なパース失敗であり、リトライ対象ではありません。
"""


class ParseError(ValueError):
    """デコード失敗の基底クラス"""

    kind = "ParseError"


class MalformedCoordinate(ParseError):
    """緯度・経度文字列（例: 35゜30.1'）が解釈できない"""

    kind = "MalformedCoordinate"


class MalformedDirectoryRow(ParseError):
    """観測地点一覧の行が必要なセルを持たない、または地点記号が重複している"""

    kind = "MalformedDirectoryRow"


class MalformedTideRow(ParseError):
    """潮位表の行が短すぎる、または数値欄に数字以外が含まれる"""

    kind = "MalformedTideRow"


class InvalidDate(ParseError):
    """月・日が暦の範囲外"""

    kind = "InvalidDate"
