"""
ロギングシステムのプロパティベーステスト

**Feature: image-optimizer, Property 11: エラーログの完全性**
"""

import io
import tempfile
import logging
from pathlib import Path
from hypothesis import given, strategies as st
from hypothesis import settings

from image_optimizer.logger import (
    GREEN, NC, RED, YELLOW, LogConfig, ProgressLogger, create_default_logger
)
from image_optimizer.exceptions import (
    ProcessingError, ValidationError, FileOperationError, OptimizerInvocationError
)


single_line_text = st.text(min_size=1, max_size=100).filter(
    lambda x: x.strip() and '\n' not in x and '\r' not in x
)


class TestLoggerProperties:
    """ロギングシステムのプロパティテスト"""

    @given(
        file_paths=st.lists(
            st.text(min_size=1, max_size=50).filter(
                lambda x: x.strip() and '/' not in x and '\\' not in x and '\n' not in x and '\r' not in x
            ),
            min_size=1,
            max_size=5
        ),
        error_messages=st.lists(single_line_text, min_size=1, max_size=5),
        exception_types=st.lists(
            st.sampled_from([ProcessingError, ValidationError, FileOperationError, OptimizerInvocationError]),
            min_size=1,
            max_size=5
        )
    )
    @settings(max_examples=100)
    def test_error_log_with_exceptions_property(self, file_paths, error_messages, exception_types):
        """
        **Feature: image-optimizer, Property 11: エラーログの完全性**

        例外オブジェクトと共にエラーログを記録する場合、ファイルパス、
        エラーメッセージ、例外情報の全てがログファイルに含まれるべきである。
        """
        with tempfile.TemporaryDirectory() as temp_dir:
            log_file = Path(temp_dir) / "logs" / "run.log"
            config = LogConfig(
                console_level=logging.CRITICAL,  # コンソール出力を抑制
                file_level=logging.DEBUG,
                log_file=log_file,
                verbose=True,
                stream=io.StringIO()
            )
            logger = ProgressLogger(config)

            logged_errors = []
            for i, (file_path_str, error_msg, exc_type) in enumerate(
                    zip(file_paths, error_messages, exception_types)):
                file_path = Path(f"test_file_{i}_{file_path_str}")
                exception = exc_type(f"Test exception: {error_msg}")
                logger.log_error(file_path, error_msg, exception)
                logged_errors.append((file_path, error_msg, exception))

            logger.close()
            log_content = log_file.read_text(encoding='utf-8')

            for file_path, error_msg, exception in logged_errors:
                assert str(file_path) in log_content
                assert error_msg in log_content
                assert type(exception).__name__ in log_content
                assert "ERROR" in log_content

    @given(messages=st.lists(single_line_text, min_size=1, max_size=10))
    @settings(max_examples=100)
    def test_console_and_file_logging_consistency_property(self, messages):
        """
        コンソールとファイルの両方にログが出力される場合、
        すべてのメッセージが両方に含まれるべきである。
        """
        with tempfile.TemporaryDirectory() as temp_dir:
            log_file = Path(temp_dir) / "run.log"
            console = io.StringIO()
            logger = ProgressLogger(LogConfig(log_file=log_file, stream=console))

            for message in messages:
                logger.log_info(message)

            logger.close()
            log_content = log_file.read_text(encoding='utf-8')
            console_content = console.getvalue()

            for message in messages:
                assert message in log_content
                assert message in console_content


def test_colors_applied_when_enabled():
    """色付けが有効な場合はレベルと用途に応じて色を付ける"""
    console = io.StringIO()
    logger = ProgressLogger(LogConfig(stream=console, use_color=True))

    logger.log_warning("careful")
    logger.log_success("done")
    logger.log_info("plain")
    logger.logger.error("broken")
    logger.close()

    output = console.getvalue()
    assert f"{YELLOW}careful{NC}" in output
    assert f"{GREEN}done{NC}" in output
    assert f"{RED}broken{NC}" in output
    assert "plain\n" in output
    assert f"plain{NC}" not in output


def test_colors_disabled_for_non_tty_stream():
    """端末以外への出力では色を付けない"""
    console = io.StringIO()
    logger = ProgressLogger(LogConfig(stream=console))

    logger.log_warning("careful")
    logger.close()

    assert console.getvalue() == "careful\n"


def test_debug_only_shown_when_verbose():
    """デバッグメッセージはverbose時のみコンソールに表示"""
    quiet_console = io.StringIO()
    quiet = create_default_logger(verbose=False, stream=quiet_console)
    quiet.log_debug("details")
    quiet.close()

    verbose_console = io.StringIO()
    verbose = create_default_logger(verbose=True, stream=verbose_console)
    verbose.log_debug("details")
    verbose.close()

    assert "details" not in quiet_console.getvalue()
    assert "details" in verbose_console.getvalue()


def test_attach_file_after_creation():
    """作成後に追加したログファイルには以降のメッセージだけが書き込まれる"""
    with tempfile.TemporaryDirectory() as temp_dir:
        log_file = Path(temp_dir) / "logs" / "run.log"
        logger = ProgressLogger(LogConfig(stream=io.StringIO()))

        logger.log_info("before")
        assert not log_file.parent.exists()

        logger.attach_file(log_file)
        logger.log_info("after")
        logger.close()

        log_content = log_file.read_text(encoding='utf-8')
        assert "after" in log_content
        assert "before" not in log_content
