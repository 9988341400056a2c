# Image Optimizer
# Optimize image assets with imageoptim/svgo and a before/after size report

from .models import (
    Target, Toolset, ToolOutcome, ToolRunResult, FileStatus, FileResult,
    AggregateResult, OptimizationReport, GateState, ApplyResult, RunSummary, RunOptions
)
from .exceptions import (
    ProcessingError, ValidationError, TargetNotFoundError, UnsupportedFileTypeError,
    UnknownFlagError, NoOptimizersAvailableError, FileOperationError, OptimizerInvocationError
)
from .path_validator import PathValidator
from .file_scanner import FileScanner
from .tool_prober import ToolProber
from .staging import StagingArea
from .optimizer import OptimizerInvoker, bundled_svgo_config
from .report import build_report, render_report
from .apply_gate import ApplyGate
from .logger import ProgressLogger, LogConfig, create_default_logger, get_default_log_file
from .optimize_manager import OptimizeManager

__all__ = [
    'Target',
    'Toolset',
    'ToolOutcome',
    'ToolRunResult',
    'FileStatus',
    'FileResult',
    'AggregateResult',
    'OptimizationReport',
    'GateState',
    'ApplyResult',
    'RunSummary',
    'RunOptions',
    'ProcessingError',
    'ValidationError',
    'TargetNotFoundError',
    'UnsupportedFileTypeError',
    'UnknownFlagError',
    'NoOptimizersAvailableError',
    'FileOperationError',
    'OptimizerInvocationError',
    'PathValidator',
    'FileScanner',
    'ToolProber',
    'StagingArea',
    'OptimizerInvoker',
    'bundled_svgo_config',
    'build_report',
    'render_report',
    'ApplyGate',
    'ProgressLogger',
    'LogConfig',
    'create_default_logger',
    'get_default_log_file',
    'OptimizeManager'
]
