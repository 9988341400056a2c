"""
適用確認モジュール

レポート表示後に利用者の確認を取り、承認された場合のみ
最適化済みファイルで元ファイルを上書きします。
"""

import logging
import shutil
import sys
from typing import Optional, TextIO

from .models import BYTES_PER_KB, ApplyResult, GateState, OptimizationReport


class ApplyGate:
    """上書き前の確認と適用を行うクラス"""

    PROMPT = "Overwrite original files with optimized versions? [y/N] "
    AFFIRMATIVE = frozenset({'y', 'yes'})

    def __init__(self, input_stream: Optional[TextIO] = None, output_stream: Optional[TextIO] = None,
                 progress_logger=None):
        """
        ApplyGateを初期化

        Args:
            input_stream: 応答を読み取るストリーム（Noneの場合はsys.stdin）
            output_stream: プロンプトを書き出すストリーム（Noneの場合はsys.stdout）
            progress_logger: メッセージ表示に使うProgressLogger
        """
        self.input_stream = input_stream
        self.output_stream = output_stream
        self.progress_logger = progress_logger
        self.logger = logging.getLogger(__name__)

    @classmethod
    def is_affirmative(cls, response: Optional[str]) -> bool:
        """'y' または 'yes'（大文字小文字を区別しない）の場合True"""
        if response is None:
            return False
        return response.strip().lower() in cls.AFFIRMATIVE

    def run(self, report: OptimizationReport) -> ApplyResult:
        """
        確認を取り、承認されたら改善したファイルを元の場所へコピー

        Args:
            report: 最適化レポート

        Returns:
            適用結果
        """
        improved = report.improved_files
        if not improved:
            self._message("No files need updating. All images are already optimized.", warning=True)
            return ApplyResult(state=GateState.SKIPPED)

        saved_kb = report.aggregate.total_saved / BYTES_PER_KB
        self._notice(f"{len(improved)} file(s) can be optimized, saving {saved_kb:.2f}KB total.")
        self._message("")

        if not self.is_affirmative(self.ask()):
            self._message("")
            self._message("Cancelled. No files were modified.", warning=True)
            return ApplyResult(state=GateState.DECLINED)

        self._message("")
        self._success("Updating files...")
        result = ApplyResult(state=GateState.CONFIRMED)

        for file_result in improved:
            try:
                shutil.copyfile(file_result.staged_path, file_result.source_path)
            except OSError as e:
                error_msg = f"Could not overwrite: {e}"
                result.errors.append((file_result.source_path, error_msg))
                if self.progress_logger:
                    self.progress_logger.log_error(file_result.source_path, error_msg, e)
                else:
                    self.logger.error(f"{file_result.source_path} - {error_msg}")
                continue

            result.updated.append(file_result.source_path)
            self._message(f"  ✅ {file_result.relative_path}")

        self._message("")
        self._success(f"Done! {len(result.updated)} file(s) updated.")
        if result.errors:
            self._message(f"{len(result.errors)} file(s) could not be updated.", warning=True)
        return result

    def ask(self) -> Optional[str]:
        """プロンプトを表示して1行読み取る（EOFの場合None）"""
        output = self.output_stream or sys.stdout
        output.write(self.PROMPT)
        output.flush()

        line = (self.input_stream or sys.stdin).readline()
        if not line:
            return None
        return line.rstrip('\n')

    def _message(self, message: str, warning: bool = False) -> None:
        if self.progress_logger:
            if warning:
                self.progress_logger.log_warning(message)
            else:
                self.progress_logger.log_info(message)
        else:
            self.logger.info(message)

    def _notice(self, message: str) -> None:
        if self.progress_logger:
            self.progress_logger.log_notice(message)
        else:
            self.logger.info(message)

    def _success(self, message: str) -> None:
        if self.progress_logger:
            self.progress_logger.log_success(message)
        else:
            self.logger.info(message)
