"""プロジェクトパスの解決ユーティリティ。"""

from pathlib import Path
from typing import Iterable
import sys


_DEFAULT_MARKERS = ("pyproject.toml", "setup.cfg", ".git")


def get_project_root(markers: Iterable[str] = _DEFAULT_MARKERS) -> Path:
    """プロジェクトルートディレクトリを返す。

    - 凍結時（PyInstaller等）は実行ファイルの親を返す。
    - 非凍結時は pyproject.toml/.git などを上位に探し、見つからなければカレントディレクトリ。
    """
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent

    current = Path(__file__).resolve().parent

    for directory in [current, *current.parents]:
        if any((directory / marker).exists() for marker in markers):
            return directory

    # site-packages にインストールされた場合など
    return Path.cwd()


def resolve_path(target: str | Path) -> Path:
    """相対パスをプロジェクトルート基準の絶対パスに変換する。"""
    path = Path(target)
    if not path.is_absolute():
        path = get_project_root() / path
    return path
