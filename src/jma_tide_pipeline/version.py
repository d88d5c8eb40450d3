"""バージョン情報管理モジュール"""

# バージョン情報
__version__ = "0.1.0"
__version_info__ = (0, 1, 0)

# アプリケーション情報
__app_name__ = "JMA Tide Pipeline"
__description__ = "気象庁の潮位表データ（観測地点一覧・毎時潮位・満干潮）を取得・保存するツール"
__author__ = "JMA Tide Pipeline Team"
__copyright__ = "2025"


def get_version():
    """バージョン文字列を取得する"""
    return __version__


def get_version_string():
    """詳細なバージョン情報文字列を取得する"""
    return f"{__app_name__} v{__version__} ({__copyright__})"
