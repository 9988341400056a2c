"""
外部最適化ツール検出モジュール

ラスター画像用の imageoptim とSVG用の svgo を実行パスから検索します。
片方のみ見つからない場合は警告を出してその種類の最適化をスキップし、
両方見つからない場合は処理を中止します。
"""

import logging
import shutil
import sys
from pathlib import Path
from typing import Optional

from .exceptions import NoOptimizersAvailableError
from .models import Toolset


class ToolProber:
    """外部最適化ツールを検出するクラス"""

    RASTER_TOOL = 'imageoptim'
    VECTOR_TOOL = 'svgo'

    RASTER_HINTS = [
        "Install: npm install -g imageoptim-cli",
        "Also requires ImageOptim.app: https://imageoptim.com/mac",
    ]
    VECTOR_HINTS = [
        "Install: npm install -g svgo",
    ]

    def __init__(self, raster_tool: Optional[str] = None, vector_tool: Optional[str] = None,
                 progress_logger=None):
        """
        ToolProberを初期化

        Args:
            raster_tool: ラスター最適化ツールの実行ファイル名（テスト用に差し替え可能）
            vector_tool: ベクター最適化ツールの実行ファイル名
            progress_logger: 警告表示に使うProgressLogger
        """
        self.raster_tool = raster_tool or self.RASTER_TOOL
        self.vector_tool = vector_tool or self.VECTOR_TOOL
        self.progress_logger = progress_logger
        self.logger = logging.getLogger(__name__)

    def probe(self) -> Toolset:
        """
        両方のツールを検索

        Returns:
            検出結果のToolset

        Raises:
            NoOptimizersAvailableError: どちらのツールも見つからない場合
        """
        raster = self.find_executable(self.raster_tool)
        if raster is None:
            self._warn_missing(self.raster_tool, "PNG/JPEG/GIF", self.RASTER_HINTS)

        vector = self.find_executable(self.vector_tool)
        if vector is None:
            self._warn_missing(self.vector_tool, "SVG", self.VECTOR_HINTS)

        if raster is None and vector is None:
            raise NoOptimizersAvailableError(
                "No optimization tools found.\n"
                "Install the required tools:\n"
                "  npm install -g imageoptim-cli   # For PNG, JPEG, GIF\n"
                "  npm install -g svgo             # For SVG\n"
                "Note: imageoptim-cli requires ImageOptim.app on macOS:\n"
                "  https://imageoptim.com/mac"
            )

        self.logger.debug(f"Optimizers: raster={raster}, vector={vector}")
        return Toolset(raster=raster, vector=vector)

    @staticmethod
    def find_executable(name: str) -> Optional[Path]:
        """実行ファイルをシステムPATHから検索"""
        path = shutil.which(name)
        if path is None and sys.platform == 'win32':
            # npmのグローバルインストールは .cmd ラッパーになる
            path = shutil.which(f"{name}.cmd")
        return Path(path) if path else None

    def _warn_missing(self, tool: str, skipped: str, hints):
        if self.progress_logger:
            self.progress_logger.log_tool_missing(tool, skipped, hints)
        else:
            self.logger.warning(f"{tool} not found. {skipped} optimization will be skipped.")
