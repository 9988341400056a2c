"""
パス検証ユーティリティ

最適化対象パスの検証と正規化を提供します。
対象は単一の画像ファイルまたはディレクトリです。
"""

from pathlib import Path

from .exceptions import TargetNotFoundError, UnsupportedFileTypeError
from .file_scanner import FileScanner
from .models import Target


class PathValidator:
    """パス検証を行うユーティリティクラス"""

    @staticmethod
    def resolve_target(path_str: str) -> Target:
        """
        対象パスを検証してTargetに変換

        Args:
            path_str: コマンドラインで指定されたパス文字列

        Returns:
            絶対パスに正規化されたTarget

        Raises:
            UnsupportedFileTypeError: サポート対象外の拡張子のファイルの場合
            TargetNotFoundError: ファイルでもディレクトリでもない場合
        """
        path = PathValidator.normalize_path(path_str)

        if path.is_file():
            if not FileScanner.is_supported(path):
                raise UnsupportedFileTypeError(
                    f"'{path_str}' is not a supported image file "
                    f"(png, jpg, jpeg, gif, svg)"
                )
            return Target(path=path, base_dir=path.parent, is_file=True, filename=path.name)

        if path.is_dir():
            return Target(path=path, base_dir=path, is_file=False)

        raise TargetNotFoundError(f"'{path_str}' does not exist")

    @staticmethod
    def normalize_path(path_str: str) -> Path:
        """
        パス文字列を正規化してPathオブジェクトに変換

        Args:
            path_str: パス文字列

        Returns:
            正規化された絶対パス
        """
        # Path("") はカレントディレクトリになるため対象なしとして扱う
        if not path_str:
            raise TargetNotFoundError("'' does not exist")
        return Path(path_str).expanduser().resolve()
