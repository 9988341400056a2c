"""
データモデル定義

Image Optimizerで使用するデータクラスを定義します。
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple


BYTES_PER_KB = 1024


@dataclass(frozen=True)
class Target:
    """最適化対象（単一画像ファイルまたはディレクトリ）"""
    path: Path
    base_dir: Path  # 相対パス計算の基準ディレクトリ
    is_file: bool
    filename: Optional[str] = None  # 単一ファイルの場合のみ


@dataclass(frozen=True)
class Toolset:
    """検出された外部最適化ツール"""
    raster: Optional[Path] = None  # imageoptim
    vector: Optional[Path] = None  # svgo

    @property
    def has_raster(self) -> bool:
        return self.raster is not None

    @property
    def has_vector(self) -> bool:
        return self.vector is not None


class ToolOutcome(Enum):
    """外部ツール実行結果の種別"""
    ABSENT = 'absent'
    SKIPPED = 'skipped'  # 対象ファイルなし
    FAILED = 'failed'
    SUCCEEDED = 'succeeded'


@dataclass(frozen=True)
class ToolRunResult:
    """外部ツール1回分の実行結果"""
    tool: str
    outcome: ToolOutcome
    returncode: Optional[int] = None
    detail: Optional[str] = None

    @property
    def invoked(self) -> bool:
        return self.outcome in (ToolOutcome.FAILED, ToolOutcome.SUCCEEDED)


class FileStatus(Enum):
    """ファイルごとの最適化結果"""
    IMPROVED = 'improved'
    UNCHANGED = 'unchanged'
    REGRESSED = 'regressed'

    @property
    def icon(self) -> str:
        return _STATUS_ICONS[self]


_STATUS_ICONS = {
    FileStatus.IMPROVED: '✅',
    FileStatus.UNCHANGED: '⬜',
    FileStatus.REGRESSED: '⚠️',
}


def percentage_of(saved: int, original: int) -> float:
    """削減率（%、小数点以下1桁で四捨五入）。元サイズ0の場合は0.0"""
    if original == 0:
        return 0.0
    ratio = Decimal(saved * 100) / Decimal(original)
    return float(ratio.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class FileResult:
    """1ファイル分の比較結果"""
    relative_path: str
    source_path: Path
    staged_path: Path
    original_size: int
    optimized_size: int

    @property
    def saved(self) -> int:
        return self.original_size - self.optimized_size

    @property
    def percentage(self) -> float:
        return percentage_of(self.saved, self.original_size)

    @property
    def status(self) -> FileStatus:
        if self.saved > 0:
            return FileStatus.IMPROVED
        if self.saved < 0:
            return FileStatus.REGRESSED
        return FileStatus.UNCHANGED

    @property
    def effective_size(self) -> int:
        # 改善したファイルのみ最適化後サイズを採用する
        if self.status is FileStatus.IMPROVED:
            return self.optimized_size
        return self.original_size


@dataclass(frozen=True)
class AggregateResult:
    """全体の集計結果"""
    total_original: int
    total_effective: int
    improved: int
    unchanged: int
    regressed: int

    @property
    def total_saved(self) -> int:
        return self.total_original - self.total_effective

    @property
    def percentage(self) -> float:
        return percentage_of(self.total_saved, self.total_original)


@dataclass(frozen=True)
class OptimizationReport:
    """最適化レポート"""
    files: List[FileResult]
    aggregate: AggregateResult
    missing: List[Path] = field(default_factory=list)  # ステージングに存在しないファイル

    @property
    def improved_files(self) -> List[FileResult]:
        return [r for r in self.files if r.status is FileStatus.IMPROVED]


class GateState(Enum):
    """適用確認の状態"""
    SKIPPED = 'skipped'  # 適用対象なし
    CONFIRMED = 'confirmed'
    DECLINED = 'declined'


@dataclass
class ApplyResult:
    """適用処理の結果"""
    state: GateState
    updated: List[Path] = field(default_factory=list)
    errors: List[Tuple[Path, str]] = field(default_factory=list)


@dataclass
class RunSummary:
    """1回の実行全体の結果"""
    target: Target
    manifest: List[Path]
    staging_dir: Path
    reused: bool  # 以前の最適化結果を再利用した場合True
    tool_results: List[ToolRunResult]
    report: OptimizationReport
    apply_result: ApplyResult


@dataclass
class RunOptions:
    """1回の実行設定"""
    target: str
    svgo_config: Optional[str] = None
    temp_dir: Optional[str] = None
    cleanup: bool = False
    verbose: bool = False
    log_file: Optional[Path] = None
