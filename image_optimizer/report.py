"""
レポート生成モジュール

元ファイルとステージング上の最適化済みファイルのサイズを比較し、
ファイルごとの結果と全体の集計、表形式のレポートを作成します。
"""

import logging
from pathlib import Path
from typing import List, Sequence

from .models import (
    BYTES_PER_KB, AggregateResult, FileResult, FileStatus, OptimizationReport
)


FILE_COLUMN_WIDTH = 46
BANNER = '═' * 75
RULE = '--- ' + '-' * FILE_COLUMN_WIDTH + '  --------  ---------  --------  ------'

logger = logging.getLogger(__name__)


def build_report(manifest: Sequence[Path], base_dir: Path, images_dir: Path) -> OptimizationReport:
    """
    ファイルごとの比較結果と集計を作成

    Args:
        manifest: 元ファイルの絶対パスのリスト
        base_dir: 相対パス計算の基準ディレクトリ
        images_dir: ステージング上の画像ディレクトリ

    Returns:
        最適化レポート
    """
    files: List[FileResult] = []
    missing: List[Path] = []

    for source in manifest:
        relative = source.relative_to(base_dir)
        staged = images_dir / relative

        if not staged.is_file():
            logger.debug(f"Staged copy missing: {staged}")
            missing.append(source)
            continue

        files.append(FileResult(
            relative_path=relative.as_posix(),
            source_path=source,
            staged_path=staged,
            original_size=source.stat().st_size,
            optimized_size=staged.stat().st_size,
        ))

    return OptimizationReport(files=files, aggregate=aggregate(files), missing=missing)


def aggregate(files: Sequence[FileResult]) -> AggregateResult:
    """全体の集計（回帰したファイルは元サイズで計上）"""
    counts = {status: 0 for status in FileStatus}
    for result in files:
        counts[result.status] += 1

    return AggregateResult(
        total_original=sum(r.original_size for r in files),
        total_effective=sum(r.effective_size for r in files),
        improved=counts[FileStatus.IMPROVED],
        unchanged=counts[FileStatus.UNCHANGED],
        regressed=counts[FileStatus.REGRESSED],
    )


def to_kb(size: int) -> float:
    return size / BYTES_PER_KB


def fit_column(text: str, width: int = FILE_COLUMN_WIDTH) -> str:
    """列幅に合わせて切り詰め・パディング（長い場合は末尾を残す）"""
    if len(text) > width:
        text = '...' + text[-(width - 3):]
    return text.ljust(width)


def render_row(result: FileResult) -> str:
    status = result.status
    if status is FileStatus.REGRESSED:
        saved = f"(+{to_kb(-result.saved):.2f})"
        pct = 'n/a'
    else:
        saved = f"{to_kb(result.saved):.2f}"
        pct = f"{result.percentage:.1f}"

    return (
        f"{status.icon} {fit_column(result.relative_path)}  "
        f"{to_kb(result.original_size):6.2f}KB  {to_kb(result.optimized_size):7.2f}KB  "
        f"{saved:>8}  {pct:>5}%"
    )


def render_total(totals: AggregateResult) -> str:
    return (
        f"   {fit_column('TOTAL')}  "
        f"{to_kb(totals.total_original):6.2f}KB  {to_kb(totals.total_effective):7.2f}KB  "
        f"{to_kb(totals.total_saved):6.2f}KB  {totals.percentage:5.1f}%"
    )


def render_summary(totals: AggregateResult) -> str:
    return (
        f"📈 Summary: ✅ {totals.improved} optimized | "
        f"⬜ {totals.unchanged} unchanged | ⚠️  {totals.regressed} larger"
    )


def render_report(report: OptimizationReport) -> List[str]:
    """
    レポートを表示用の行リストに変換

    Args:
        report: 最適化レポート

    Returns:
        出力する行のリスト
    """
    header = f"{'':<3} {'File':<{FILE_COLUMN_WIDTH}}  {'Original':>8}  {'Optimized':>8}  {'Saved':>8}  {'%':>6}"

    lines = [
        BANNER,
        "📊 IMAGE OPTIMIZATION REPORT",
        BANNER,
        "",
        header,
        RULE,
    ]
    lines.extend(render_row(result) for result in report.files)
    lines.append(RULE)
    lines.append(render_total(report.aggregate))
    lines.append("")
    lines.append(BANNER)
    lines.append(render_summary(report.aggregate))
    lines.append(BANNER)
    lines.append("")

    if report.missing:
        lines.append(f"⚠️  {len(report.missing)} file(s) have no optimized copy and were left out:")
        lines.extend(f"  - {path}" for path in report.missing)
        lines.append("")

    return lines
