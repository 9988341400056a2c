"""
ロギングシステム

Image Optimizerのロギング機能を提供します。
標準出力とファイル出力の両方をサポートし、色付きの状態表示とエラーログを管理します。
"""

import logging
import os
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, TextIO


RED = '\033[0;31m'
GREEN = '\033[0;32m'
YELLOW = '\033[1;33m'
BLUE = '\033[0;34m'
NC = '\033[0m'

_LEVEL_COLORS = {
    logging.WARNING: YELLOW,
    logging.ERROR: RED,
    logging.CRITICAL: RED,
}


@dataclass
class LogConfig:
    """ログ設定"""
    console_level: int = logging.INFO
    file_level: int = logging.DEBUG
    log_file: Optional[Path] = None
    verbose: bool = False
    use_color: Optional[bool] = None  # Noneの場合は端末かどうかで判定
    stream: Optional[TextIO] = None  # Noneの場合はsys.stdout


def supports_color(stream: TextIO) -> bool:
    """ANSIカラーを出力してよいか判定"""
    if os.environ.get('NO_COLOR'):
        return False
    isatty = getattr(stream, 'isatty', None)
    return bool(isatty and isatty())


class ColorFormatter(logging.Formatter):
    """レベルまたはレコードのcolor属性に応じて色付けするフォーマッター"""

    def __init__(self, fmt: str, use_color: bool):
        super().__init__(fmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not self.use_color:
            return message
        color = getattr(record, 'color', None) or _LEVEL_COLORS.get(record.levelno)
        if color:
            return f"{color}{message}{NC}"
        return message


class ProgressLogger:
    """進捗表示とロギングを管理するクラス"""

    def __init__(self, config: LogConfig):
        self.config = config
        self.logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        """ロガーのセットアップ"""
        logger = logging.getLogger('image_optimizer')
        logger.setLevel(logging.DEBUG)
        logger.propagate = False

        # 既存のハンドラーをクリア
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

        stream = self.config.stream or sys.stdout
        use_color = self.config.use_color
        if use_color is None:
            use_color = supports_color(stream)

        # コンソールハンドラー
        console_handler = logging.StreamHandler(stream)
        console_handler.setLevel(self.config.console_level)
        console_handler.setFormatter(ColorFormatter('%(message)s', use_color))
        logger.addHandler(console_handler)

        # ファイルハンドラー（指定されている場合）
        if self.config.log_file:
            self._add_file_handler(logger, self.config.log_file)

        return logger

    def _add_file_handler(self, logger: logging.Logger, log_file: Path):
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(self.config.file_level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        logger.addHandler(file_handler)

    def attach_file(self, log_file: Path):
        """
        ログファイル出力を後から追加

        ログディレクトリの作成は入力検証とツール検出の後に行う。
        """
        if self.config.log_file is not None:
            return
        self.config.log_file = log_file
        self._add_file_handler(self.logger, log_file)

    def log_tool_missing(self, tool: str, skipped: str, hints: List[str]):
        """ツール未検出の警告"""
        self.logger.warning(f"Warning: {tool} not found. {skipped} optimization will be skipped.")
        for hint in hints:
            self.logger.warning(f"  {hint}")
        self.logger.info("")

    def log_scan_start(self, target_path: Path, is_file: bool):
        """スキャン開始のログ"""
        if is_file:
            self.log_success(f"Processing file: {target_path}")
        else:
            self.log_success(f"Scanning for images in: {target_path}")

    def log_scan_complete(self, file_count: int):
        """スキャン完了のログ"""
        self.log_success(f"Found {file_count} image file(s)")
        self.logger.info("")

    def log_report(self, lines: List[str]):
        """レポート行を出力"""
        for line in lines:
            self.logger.info(line)

    def log_staging_hint(self, staging_dir: Path, target_dir: Path):
        """一時ディレクトリの保持と後から適用する方法を表示"""
        self.log_notice(f"Temp directory: {staging_dir}")
        self.log_notice(
            f"To apply changes later: image-optimizer --cleanup \"{target_dir}\" \"\" \"{staging_dir}\""
        )
        self.logger.info("")

    def log_error(self, file_path: Path, error_message: str, exception: Optional[Exception] = None):
        """エラーログの詳細記録"""
        error_msg = f"Error - {file_path}: {error_message}"

        if exception:
            error_msg += f" ({type(exception).__name__}: {str(exception)})"

        self.logger.error(error_msg)

        # 詳細なスタックトレースはファイルログのみに記録
        if exception and self.config.log_file:
            self.logger.debug("Stack trace:", exc_info=exception)

    def log_success(self, message: str):
        """成功・進行中メッセージ（緑）"""
        self.logger.info(message, extra={'color': GREEN})

    def log_notice(self, message: str):
        """補足メッセージ（青）"""
        self.logger.info(message, extra={'color': BLUE})

    def log_warning(self, message: str):
        """警告メッセージのログ"""
        self.logger.warning(message)

    def log_info(self, message: str):
        """情報メッセージのログ"""
        self.logger.info(message)

    def log_debug(self, message: str):
        """デバッグメッセージのログ"""
        self.logger.debug(message)

    def close(self):
        """ハンドラーを閉じる"""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)


def create_default_logger(verbose: bool = False, log_file: Optional[Path] = None,
                          stream: Optional[TextIO] = None) -> ProgressLogger:
    """デフォルトのロガーを作成"""
    config = LogConfig(
        console_level=logging.DEBUG if verbose else logging.INFO,
        file_level=logging.DEBUG,
        log_file=log_file,
        verbose=verbose,
        stream=stream,
    )
    return ProgressLogger(config)


def get_default_log_file() -> Path:
    """デフォルトのログファイルパスを取得"""
    log_dir = Path.home() / '.image_optimizer' / 'logs'
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    return log_dir / f'image_optimizer_{timestamp}.log'
