"""
コマンドラインインターフェース

Image Optimizerのメインエントリーポイントです。
対象（ディレクトリまたは画像ファイル）を一時ディレクトリで最適化し、
レポートを表示した上で確認後に元ファイルを上書きします。
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .exceptions import ProcessingError, UnknownFlagError, ValidationError
from .logger import RED, NC, supports_color
from .models import RunOptions
from .optimize_manager import OptimizeManager
from .optimizer import bundled_svgo_config


class _ArgumentParser(argparse.ArgumentParser):
    """解析エラーを終了ではなく例外として扱うパーサー"""

    def error(self, message):
        raise UnknownFlagError(message)


def create_parser() -> argparse.ArgumentParser:
    """
    コマンドライン引数パーサーを作成

    Returns:
        設定済みのArgumentParser
    """
    parser = _ArgumentParser(
        prog='image-optimizer',
        usage='image-optimizer [options] <target> [svgo_config_path] [temp_dir]',
        description='Optimize image assets (PNG, JPEG, GIF, SVG) with a before/after size report.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
        epilog="""
Two-step workflow:
  1. image-optimizer ./assets "" /tmp/my-temp              # Review report
  2. image-optimizer --cleanup ./assets "" /tmp/my-temp    # Apply + cleanup

One-step usage (auto temp dir, always cleans up):
  image-optimizer --cleanup ./assets
        """
    )
    parser.add_argument(
        'target',
        nargs='?',
        help='Directory or image file to optimize'
    )
    parser.add_argument(
        'svgo_config',
        nargs='?',
        default='',
        help='Optional SVGO config file (use "" to skip)'
    )
    parser.add_argument(
        'temp_dir',
        nargs='?',
        default='',
        help='Optional temp directory (reuse to skip re-optimization)'
    )
    parser.add_argument(
        '--cleanup',
        action='store_true',
        help='Clean up temp directory when done (default: keep)'
    )
    parser.add_argument(
        '--bundled-config',
        action='store_true',
        help='Use the bundled SVGO config when no svgo_config_path is given'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show debug output and write a log file'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        help='Write a debug log to this file'
    )
    parser.add_argument(
        '--help', '-h',
        action='store_true',
        help='Show this help message'
    )
    return parser


def build_options(args) -> RunOptions:
    """解析済みの引数から実行設定を作成"""
    svgo_config = args.svgo_config or None
    if svgo_config is None and args.bundled_config:
        svgo_config = str(bundled_svgo_config())

    return RunOptions(
        target=args.target,
        svgo_config=svgo_config,
        temp_dir=args.temp_dir or None,
        cleanup=args.cleanup,
        verbose=args.verbose,
        log_file=Path(args.log_file) if args.log_file else None,
    )


def print_error(message: str) -> None:
    """エラーメッセージを標準エラー出力に表示"""
    if supports_color(sys.stderr):
        message = f"{RED}{message}{NC}"
    print(message, file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """
    メインエントリーポイント

    Args:
        argv: コマンドライン引数（Noneの場合はsys.argv）

    Returns:
        終了コード（0: 成功、1: エラー）
    """
    parser = create_parser()

    try:
        args = parser.parse_intermixed_args(argv)
    except UnknownFlagError as e:
        print_error(f"❌ Error: {e}")
        print("Use --help for usage information.", file=sys.stderr)
        return 1

    # ヘルプ指定時、または対象が指定されていない場合はヘルプを表示
    if args.help or not args.target:
        parser.print_help()
        return 0

    try:
        OptimizeManager().run(build_options(args))
        return 0

    except ValidationError as e:
        print_error(f"❌ Input error: {e}")
        return 1
    except ProcessingError as e:
        print_error(f"❌ Processing error: {e}")
        return 1
    except Exception as e:
        print_error(f"❌ Unexpected error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
