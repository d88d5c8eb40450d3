"""設定ファイル読み込みユーティリティ"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml

from .path_utils import resolve_path


# app_logger から参照されるため、ここでは標準の logging を直接使う
logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.data.jma.go.jp/kaiyou"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class TideSettings:
    """パイプライン実行時の設定値"""
    base_url: str = DEFAULT_BASE_URL
    timeout: int = 30
    encoding: str = "utf-8"
    min_interval: float = 1.0
    # parser.date_utils の DEFAULT_CENTURY / JST_OFFSET_HOURS と同じ値
    century: int = 2000
    utc_offset_hours: int = 9
    db_path: Path = Path("outputs/tide/tidal_data.db")
    csv_dir: Path = Path("outputs/tide/csv")


@dataclass(frozen=True)
class LoggingSettings:
    """ログ出力の設定値"""
    level: str = "INFO"
    file: Path = Path("outputs/tide/logs/tide_app.log")
    max_size_mb: int = 10
    backup_count: int = 5
    format: str = DEFAULT_LOG_FORMAT


def get_default_config_path() -> Path:
    """Return the canonical config file location."""

    current_dir = Path(__file__).parent.parent
    return current_dir / "config.yml"


def load_config(config_path: str | Path | None = None) -> Dict[str, Any]:
    """Load configuration data, tolerating missing files."""

    if config_path is None:
        config_path = get_default_config_path()
    else:
        config_path = Path(config_path)

    try:
        with config_path.open("r", encoding="utf-8") as file:
            config = yaml.safe_load(file) or {}
        logger.info("設定ファイルを読み込みました: %s", config_path)
        return config
    except FileNotFoundError:
        logger.warning("設定ファイルが見つかりません。デフォルト設定を使用します: %s", config_path)
        return {}
    except yaml.YAMLError as exc:
        logger.error("設定ファイルの解析エラー: %s", exc)
        raise


def _section(config: Dict[str, Any] | None, name: str) -> Dict[str, Any]:
    if not isinstance(config, dict):
        return {}
    value = config.get(name, {}) or {}
    return value if isinstance(value, dict) else {}


def get_tide_settings(config: Dict[str, Any] | None = None) -> TideSettings:
    """Resolve fetch/decode/output settings, filling in defaults.

    Raises:
        ValueError: century が100の倍数でない場合
    """

    if config is None:
        config = load_config()

    # 局所インポートで循環依存を回避
    from ..parser.date_utils import validate_century

    fetch_config = _section(config, "fetch")
    tide_config = _section(config, "tide")
    output_config = _section(config, "output")
    defaults = TideSettings()

    return TideSettings(
        base_url=str(fetch_config.get("base_url", defaults.base_url)).rstrip("/"),
        timeout=int(fetch_config.get("timeout", defaults.timeout)),
        encoding=str(fetch_config.get("encoding", defaults.encoding)),
        min_interval=float(fetch_config.get("min_interval", defaults.min_interval)),
        century=validate_century(int(tide_config.get("century", defaults.century))),
        utc_offset_hours=int(tide_config.get("utc_offset_hours", defaults.utc_offset_hours)),
        db_path=resolve_path(output_config.get("db_path", defaults.db_path)),
        csv_dir=resolve_path(output_config.get("csv_dir", defaults.csv_dir)),
    )


def get_logging_settings(config: Dict[str, Any] | None = None) -> LoggingSettings:
    """Resolve the ``logging`` section; relative log paths are anchored at the project root."""

    log_config = _section(config, "logging")
    defaults = LoggingSettings()

    return LoggingSettings(
        level=str(log_config.get("level", defaults.level)).upper(),
        file=resolve_path(log_config.get("file", defaults.file)),
        max_size_mb=int(log_config.get("max_size_mb", defaults.max_size_mb)),
        backup_count=int(log_config.get("backup_count", defaults.backup_count)),
        format=str(log_config.get("format", defaults.format)),
    )
