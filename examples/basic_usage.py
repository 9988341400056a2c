#!/usr/bin/env python3
"""
Image Optimizer - 基本的な使用例

このスクリプトは、Image Optimizerをプログラムから呼び出す方法を示します。
1回目はレポートのみ確認し、2回目に同じ作業ディレクトリを使って適用します。
"""

import io
import sys
from pathlib import Path

from image_optimizer import (
    NoOptimizersAvailableError, OptimizeManager, RunOptions, ValidationError
)


def example_two_step_workflow(assets_dir: Path, work_dir: Path) -> int:
    """確認してから適用する2段階ワークフローの例"""
    print("=" * 60)
    print("Image Optimizer - 2段階ワークフロー")
    print("=" * 60)

    try:
        # ステップ1: 最適化してレポートを表示（応答 "n" で元ファイルは変更しない）
        print("ステップ1: レポートの確認")
        print("-" * 40)
        preview = OptimizeManager(input_stream=io.StringIO("n\n")).run(
            RunOptions(target=str(assets_dir), temp_dir=str(work_dir))
        )
        if preview is None:
            print("画像ファイルが見つかりませんでした。")
            return 0

        saved = preview.report.aggregate.total_saved
        print(f"\n削減可能なサイズ: {saved:,} バイト")

        # ステップ2: 同じ作業ディレクトリを指定して適用（最適化は再実行されない）
        print("\nステップ2: 適用と後片付け")
        print("-" * 40)
        applied = OptimizeManager(input_stream=io.StringIO("y\n")).run(
            RunOptions(target=str(assets_dir), temp_dir=str(work_dir), cleanup=True)
        )
        print(f"\n更新したファイル: {len(applied.apply_result.updated)}個")
        return 0

    except ValidationError as e:
        print(f"❌ 入力エラー: {e}")
        return 1
    except NoOptimizersAvailableError as e:
        print(f"❌ ツールが見つかりません: {e}")
        return 1


if __name__ == '__main__':
    if len(sys.argv) < 2:
        print("使い方: python basic_usage.py <画像ディレクトリ> [作業ディレクトリ]")
        sys.exit(0)

    assets = Path(sys.argv[1]).expanduser()
    work = Path(sys.argv[2]).expanduser() if len(sys.argv) > 2 else Path.home() / '.image_optimizer' / 'work'
    sys.exit(example_two_step_workflow(assets, work))
