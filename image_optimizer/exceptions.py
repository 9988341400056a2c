"""
カスタム例外クラス定義

Image Optimizerで使用する例外クラスを定義します。
"""


class ProcessingError(Exception):
    """処理エラーの基底クラス"""
    pass


class ValidationError(ProcessingError):
    """検証エラー"""
    pass


class TargetNotFoundError(ValidationError):
    """対象パスが存在しない"""
    pass


class UnsupportedFileTypeError(ValidationError):
    """サポート対象外の拡張子"""
    pass


class UnknownFlagError(ValidationError):
    """不明なコマンドラインオプション"""
    pass


class NoOptimizersAvailableError(ProcessingError):
    """最適化ツールが一つも見つからない"""
    pass


class FileOperationError(ProcessingError):
    """ファイル操作エラー"""
    pass


class OptimizerInvocationError(ProcessingError):
    """外部最適化ツールの実行失敗（ログ用、呼び出し元には伝播しない）"""
    pass
