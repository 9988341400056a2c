"""
ステージング領域管理モジュール

最適化前に元画像を作業ディレクトリへコピーし、安全にプレビューできるようにします。
作業ディレクトリはコンテキストマネージャーとして扱い、終了時（例外時を含む）に
cleanupが指定されていれば削除します。

同じ作業ディレクトリを2回目の実行で指定すると、既存の最適化結果を再利用します。
これにより「確認してから適用」の2段階ワークフローが可能になります。
"""

import logging
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, Optional

from .exceptions import FileOperationError
from .file_scanner import FileScanner


class StagingArea:
    """最適化用の作業ディレクトリを管理するクラス"""

    IMAGES_SUBDIR = 'images'
    TEMP_PREFIX = 'image-optimizer-'

    def __init__(self, path: Optional[Path] = None, cleanup: bool = False, progress_logger=None):
        """
        StagingAreaを初期化

        Args:
            path: 利用者が指定した作業ディレクトリ（Noneの場合は一時ディレクトリを作成）
            cleanup: 終了時に作業ディレクトリを削除する場合True
            progress_logger: メッセージ表示に使うProgressLogger
        """
        self.requested_path = path
        self.cleanup = cleanup
        self.progress_logger = progress_logger
        self.path: Optional[Path] = None
        self.file_scanner = FileScanner()
        self.logger = logging.getLogger(__name__)

    def __enter__(self) -> 'StagingArea':
        self.open()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    @property
    def images_dir(self) -> Path:
        """ミラーした画像を置くディレクトリ"""
        if self.path is None:
            raise FileOperationError("Staging area is not open")
        return self.path / self.IMAGES_SUBDIR

    def open(self) -> Path:
        """
        作業ディレクトリを用意

        Returns:
            作業ディレクトリのパス

        Raises:
            FileOperationError: ディレクトリを作成できない場合
        """
        try:
            if self.requested_path is not None:
                self.path = Path(self.requested_path).expanduser().resolve()
                self.path.mkdir(parents=True, exist_ok=True)
            else:
                self.path = Path(tempfile.mkdtemp(prefix=self.TEMP_PREFIX))
                self._notice(f"Created temp directory: {self.path}")
        except OSError as e:
            raise FileOperationError(f"Could not create temp directory: {e}") from e

        self.logger.debug(f"Staging directory: {self.path}")
        return self.path

    def close(self) -> bool:
        """
        cleanupが指定されていれば作業ディレクトリを削除

        Returns:
            削除した場合True
        """
        if not self.cleanup or self.path is None or not self.path.is_dir():
            return False

        shutil.rmtree(self.path, ignore_errors=True)
        self._notice("Cleaned up temp directory.")
        return True

    def has_optimized_output(self) -> bool:
        """
        以前の実行で最適化済みファイルが残っているかチェック

        Returns:
            imagesサブディレクトリに画像ファイルが1つ以上ある場合True
        """
        existing = self.file_scanner.count_images(self.images_dir)
        if existing > 0:
            self._notice(
                f"Found {existing} pre-optimized file(s) in temp directory, skipping optimization..."
            )
            return True
        return False

    def staged_path_for(self, source: Path, base_dir: Path) -> Path:
        """元ファイルに対応するステージング上のパスを取得"""
        return self.images_dir / source.relative_to(base_dir)

    def mirror(self, manifest: Iterable[Path], base_dir: Path) -> int:
        """
        対象ファイルを相対パス構造を保ったままコピー

        Args:
            manifest: コピーする元ファイルのリスト
            base_dir: 相対パス計算の基準ディレクトリ

        Returns:
            コピーしたファイル数

        Raises:
            FileOperationError: コピーに失敗した場合
        """
        self._notice("Copying files to temporary location...")
        copied = 0
        for source in manifest:
            destination = self.staged_path_for(source, base_dir)
            try:
                destination.parent.mkdir(parents=True, exist_ok=True)
                # shutil.copy2を使用してメタデータも保持
                shutil.copy2(source, destination)
            except OSError as e:
                raise FileOperationError(f"Could not stage {source}: {e}") from e
            self.logger.debug(f"Staged: {source} -> {destination}")
            copied += 1
        return copied

    def _notice(self, message: str) -> None:
        if self.progress_logger:
            self.progress_logger.log_notice(message)
        else:
            self.logger.info(message)
