"""
JMA潮位パイプラインのログ設定

設定値は utils.config_loader の ``logging`` セクションから取得する。
"""

import logging
import logging.handlers
import sys
from typing import Any, Dict, Optional

import yaml

_initialized = False  # ログ設定が初期化されたかのフラグ
# このモジュールが追加したハンドラーの目印
_HANDLER_MARK = "_jma_tide_handler"


def _level_of(name: str) -> int:
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"不明なログレベルです: {name}")
    return level


def setup_logging(config: Optional[Dict[str, Any]] = None) -> None:
    """
    ルートロガーにコンソール（WARNING以上）とローテーションファイルのハンドラーを設定する

    Args:
        config: 読み込み済みの設定（None の場合は既定の config.yml を読む）
    """
    global _initialized
    # 局所インポートで循環依存を回避
    from ..utils.config_loader import get_logging_settings, load_config

    if config is None:
        config = load_config()
    settings = get_logging_settings(config)
    level = _level_of(settings.level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # 再設定時は自分のハンドラーだけを差し替える
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            root_logger.removeHandler(handler)
            handler.close()

    settings.file.parent.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(settings.format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.WARNING)

    file_handler = logging.handlers.RotatingFileHandler(
        settings.file,
        maxBytes=settings.max_size_mb * 1024 * 1024,
        backupCount=settings.backup_count,
        encoding='utf-8',
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(level)

    for handler in (console_handler, file_handler):
        setattr(handler, _HANDLER_MARK, True)
        root_logger.addHandler(handler)

    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    名前付きロガーを取得（初回呼び出し時にログ設定を行う）

    Args:
        name: ロガー名

    Returns:
        Logger: ロガーインスタンス
    """
    global _initialized
    if not _initialized:
        try:
            setup_logging()
        except (OSError, ValueError, yaml.YAMLError) as exc:
            logging.basicConfig(level=logging.INFO)
            _initialized = True
            print(f"警告: ログ設定の初期化に失敗しました: {exc}", file=sys.stderr)
    return logging.getLogger(name)
