"""気象庁 潮位表データの取り込みパイプライン"""

from .version import __version__

__all__ = ["__version__"]
