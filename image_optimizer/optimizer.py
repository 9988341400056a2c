"""
最適化ツール実行モジュール

ステージング上の画像に対して外部最適化ツールを1回ずつ実行します。
ツールの失敗は処理全体を止めず、結果をToolRunResultとして返します。
失敗した場合、そのツールの対象ファイルは未変更のままレポートに表示されます。
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional

from .exceptions import OptimizerInvocationError
from .file_scanner import FileScanner
from .models import Toolset, ToolOutcome, ToolRunResult


def bundled_svgo_config() -> Path:
    """同梱のsvgo設定ファイル（multipass、viewBox保持）のパス"""
    return Path(__file__).parent / 'data' / 'svgo.config.mjs'


class OptimizerInvoker:
    """外部最適化ツールを実行するクラス"""

    # svgo: 再帰モード + フォルダ指定
    SVGO_FLAGS = ['-rf']

    def __init__(self, toolset: Toolset, svgo_config: Optional[str] = None,
                 timeout: Optional[float] = None, progress_logger=None):
        """
        OptimizerInvokerを初期化

        Args:
            toolset: 検出済みのツール
            svgo_config: svgoの設定ファイルパス（空文字列またはNoneでsvgoの既定値）
            timeout: ツール1回あたりのタイムアウト秒数（Noneで無制限）
            progress_logger: 進捗表示に使うProgressLogger
        """
        self.toolset = toolset
        self.svgo_config = svgo_config
        self.timeout = timeout
        self.progress_logger = progress_logger
        self.file_scanner = FileScanner()
        self.logger = logging.getLogger(__name__)

    def run_all(self, images_dir: Path) -> List[ToolRunResult]:
        """ラスター、ベクターの順に実行"""
        return [self.run_raster(images_dir), self.run_vector(images_dir)]

    def run_raster(self, images_dir: Path) -> ToolRunResult:
        """imageoptimをステージング全体に対して実行"""
        tool = self.toolset.raster
        if tool is None:
            return ToolRunResult(tool='imageoptim', outcome=ToolOutcome.ABSENT)

        if self.file_scanner.count_images(images_dir, raster=True, vector=False) == 0:
            return ToolRunResult(tool=tool.name, outcome=ToolOutcome.SKIPPED)

        self._status("Running ImageOptim on raster images...")
        return self._finish(self._invoke([str(tool), str(images_dir)]))

    def run_vector(self, images_dir: Path) -> ToolRunResult:
        """svgoをステージング全体に対して再帰モードで実行"""
        tool = self.toolset.vector
        if tool is None:
            return ToolRunResult(tool='svgo', outcome=ToolOutcome.ABSENT)

        if self.file_scanner.count_images(images_dir, raster=False, vector=True) == 0:
            return ToolRunResult(tool=tool.name, outcome=ToolOutcome.SKIPPED)

        self._status("Running SVGO on SVG files...")
        return self._finish(self._invoke(self.build_svgo_command(tool, images_dir)))

    def build_svgo_command(self, tool: Path, images_dir: Path) -> List[str]:
        """svgoのコマンドラインを構築"""
        cmd = [str(tool)] + self.SVGO_FLAGS + [str(images_dir)]
        config = self.resolve_svgo_config()
        if config is not None:
            cmd.extend(['--config', str(config)])
        return cmd

    def resolve_svgo_config(self) -> Optional[Path]:
        """設定ファイルが指定され、かつ存在する場合のみそのパスを返す"""
        if not self.svgo_config:
            return None
        config = Path(self.svgo_config).expanduser()
        if not config.is_file():
            self.logger.debug(f"svgo config not found, using defaults: {config}")
            return None
        return config.resolve()

    def _invoke(self, cmd: List[str]) -> ToolRunResult:
        """
        コマンドを実行して結果を返す（例外は送出しない）

        Args:
            cmd: 実行するコマンド

        Returns:
            実行結果
        """
        tool_name = Path(cmd[0]).name
        self.logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = self._run_command(cmd)
        except OptimizerInvocationError as e:
            self.logger.debug(str(e))
            return ToolRunResult(tool=tool_name, outcome=ToolOutcome.FAILED, detail=str(e))

        if result.stdout:
            self.logger.debug(result.stdout.rstrip())

        if result.returncode != 0:
            detail = (result.stderr or '').strip() or None
            self.logger.debug(f"{tool_name} exited with status {result.returncode}: {detail}")
            return ToolRunResult(
                tool=tool_name,
                outcome=ToolOutcome.FAILED,
                returncode=result.returncode,
                detail=detail,
            )

        return ToolRunResult(tool=tool_name, outcome=ToolOutcome.SUCCEEDED, returncode=0)

    def _run_command(self, cmd: List[str]) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding='utf-8',
                errors='replace',
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise OptimizerInvocationError(f"{cmd[0]} timed out after {e.timeout}s") from e
        except OSError as e:
            raise OptimizerInvocationError(f"Could not run {cmd[0]}: {e}") from e

    def _finish(self, result: ToolRunResult) -> ToolRunResult:
        if self.progress_logger:
            self.progress_logger.log_info("")
        return result

    def _status(self, message: str) -> None:
        if self.progress_logger:
            self.progress_logger.log_success(message)
        else:
            self.logger.info(message)
