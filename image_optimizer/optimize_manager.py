"""
最適化処理管理モジュール

対象の検証、ツール検出、ステージング、最適化、レポート、適用確認までの
一連の処理を順番に実行します。
"""

from pathlib import Path
from typing import Optional, TextIO

from .apply_gate import ApplyGate
from .file_scanner import FileScanner
from .logger import create_default_logger, get_default_log_file
from .models import GateState, RunOptions, RunSummary
from .optimizer import OptimizerInvoker
from .path_validator import PathValidator
from .report import build_report, render_report
from .staging import StagingArea
from .tool_prober import ToolProber


class OptimizeManager:
    """画像最適化の一連の処理を担当するクラス"""

    def __init__(self, tool_prober: Optional[ToolProber] = None,
                 input_stream: Optional[TextIO] = None,
                 output_stream: Optional[TextIO] = None,
                 progress_logger=None):
        """
        OptimizeManagerを初期化

        Args:
            tool_prober: ツール検出に使うToolProber（テスト用に差し替え可能）
            input_stream: 確認応答を読み取るストリーム
            output_stream: コンソール出力先（Noneの場合はsys.stdout）
            progress_logger: 既存のProgressLogger（Noneの場合は実行時に作成）
        """
        self.tool_prober = tool_prober
        self.input_stream = input_stream
        self.output_stream = output_stream
        self.progress_logger = progress_logger
        self.file_scanner = FileScanner()

    def run(self, options: RunOptions) -> Optional[RunSummary]:
        """
        最適化を実行

        Args:
            options: 実行設定

        Returns:
            実行結果（画像ファイルが見つからなかった場合はNone）

        Raises:
            ValidationError: 対象パスが無効な場合
            NoOptimizersAvailableError: 最適化ツールが一つも見つからない場合
            FileOperationError: ステージングに失敗した場合
        """
        owns_logger = self.progress_logger is None
        if owns_logger:
            # ログファイルは致命的なエラーの判定後に追加する
            self.progress_logger = create_default_logger(
                verbose=options.verbose, stream=self.output_stream
            )

        try:
            return self._run(options, owns_logger)
        finally:
            if owns_logger:
                self.progress_logger.close()
                self.progress_logger = None

    def _run(self, options: RunOptions, owns_logger: bool = False) -> Optional[RunSummary]:
        # 1. 対象の検証（ファイル操作の前にすべての致命的エラーを検出する）
        target = PathValidator.resolve_target(options.target)

        # 2. ツール検出
        prober = self.tool_prober or ToolProber(progress_logger=self.progress_logger)
        if prober.progress_logger is None:
            prober.progress_logger = self.progress_logger
        toolset = prober.probe()

        if owns_logger:
            log_file = options.log_file
            if log_file is None and options.verbose:
                log_file = get_default_log_file()
            if log_file is not None:
                self.progress_logger.attach_file(log_file)

        # 3. 対象ファイル一覧
        # 作業ディレクトリが対象配下にある場合、ステージング済みの画像は対象外
        temp_dir = Path(options.temp_dir).expanduser().resolve() if options.temp_dir else None
        self.progress_logger.log_scan_start(target.path, target.is_file)
        manifest = self.file_scanner.build_manifest(target, exclude_dir=temp_dir)
        if not manifest:
            self.progress_logger.log_warning("No image files found")
            return None
        self.progress_logger.log_scan_complete(len(manifest))

        with StagingArea(temp_dir, cleanup=options.cleanup,
                         progress_logger=self.progress_logger) as staging:
            # 4. ステージングと最適化（以前の結果があれば再利用）
            reused = staging.has_optimized_output()
            tool_results = []
            if reused:
                self.progress_logger.log_info("")
            else:
                staging.mirror(manifest, target.base_dir)
                self.progress_logger.log_info("")
                invoker = OptimizerInvoker(
                    toolset, svgo_config=options.svgo_config, progress_logger=self.progress_logger
                )
                tool_results = invoker.run_all(staging.images_dir)
                for result in tool_results:
                    self.progress_logger.log_debug(
                        f"{result.tool}: {result.outcome.value}"
                        + (f" ({result.detail})" if result.detail else "")
                    )

            # 5. レポート
            report = build_report(manifest, target.base_dir, staging.images_dir)
            self.progress_logger.log_report(render_report(report))

            if not options.cleanup:
                self.progress_logger.log_staging_hint(staging.path, target.path)

            # 6. 適用確認
            gate = ApplyGate(self.input_stream, self.output_stream, self.progress_logger)
            apply_result = gate.run(report)
            if apply_result.state is GateState.DECLINED and not options.cleanup:
                self.progress_logger.log_notice(f"Temp directory preserved at: {staging.path}")

            return RunSummary(
                target=target,
                manifest=manifest,
                staging_dir=staging.path,
                reused=reused,
                tool_results=tool_results,
                report=report,
                apply_result=apply_result,
            )
