"""
ファイルスキャナー

ディレクトリをスキャンして最適化対象の画像ファイルを検索する機能を提供します。
"""

from pathlib import Path
from typing import FrozenSet, List, Optional

from .exceptions import ValidationError
from .models import Target


class FileScanner:
    """ディレクトリをスキャンして画像ファイルを検索するクラス"""

    # ラスター画像拡張子（比較は小文字で行う）
    RASTER_EXTENSIONS: FrozenSet[str] = frozenset({
        '.png',
        '.jpg',
        '.jpeg',
        '.gif',
    })

    # ベクター画像拡張子
    VECTOR_EXTENSIONS: FrozenSet[str] = frozenset({
        '.svg',
    })

    SUPPORTED_EXTENSIONS: FrozenSet[str] = RASTER_EXTENSIONS | VECTOR_EXTENSIONS

    def scan_images(self, directory: Path, exclude_dir: Optional[Path] = None) -> List[Path]:
        """
        ディレクトリを再帰的にスキャンして画像ファイルを検索

        Args:
            directory: スキャンするディレクトリ
            exclude_dir: 除外するディレクトリ（対象内に作業ディレクトリがある場合）

        Returns:
            見つかった画像ファイルのパスのリスト（ソート済み）

        Raises:
            ValidationError: ディレクトリが無効な場合
        """
        if not directory.is_dir():
            raise ValidationError(f"'{directory}' is not a directory")

        images = []
        for file_path in directory.rglob('*'):
            if not file_path.is_file() or not self.is_supported(file_path):
                continue
            if exclude_dir is not None and exclude_dir in file_path.parents:
                continue
            images.append(file_path)
        return sorted(images)

    def build_manifest(self, target: Target, exclude_dir: Optional[Path] = None) -> List[Path]:
        """
        最適化対象ファイルの一覧を作成

        Args:
            target: 解決済みのTarget
            exclude_dir: 除外するディレクトリ

        Returns:
            絶対パスのリスト（単一ファイルの場合は1要素）
        """
        if target.is_file:
            return [target.path]
        return self.scan_images(target.path, exclude_dir)

    def count_images(self, directory: Path, raster: bool = True, vector: bool = True) -> int:
        """ディレクトリ配下の画像ファイル数を数える（存在しなければ0）"""
        if not directory.is_dir():
            return 0

        count = 0
        for file_path in directory.rglob('*'):
            if not file_path.is_file():
                continue
            if raster and self.is_raster(file_path):
                count += 1
            elif vector and self.is_vector(file_path):
                count += 1
        return count

    @classmethod
    def is_supported(cls, file_path: Path) -> bool:
        """サポート対象の画像ファイルかどうかを判定（大文字小文字を区別しない）"""
        return file_path.suffix.lower() in cls.SUPPORTED_EXTENSIONS

    @classmethod
    def is_raster(cls, file_path: Path) -> bool:
        """ラスター画像（PNG/JPEG/GIF）かどうかを判定"""
        return file_path.suffix.lower() in cls.RASTER_EXTENSIONS

    @classmethod
    def is_vector(cls, file_path: Path) -> bool:
        """ベクター画像（SVG）かどうかを判定"""
        return file_path.suffix.lower() in cls.VECTOR_EXTENSIONS
