"""工具函数和辅助模块。

该包提供以下功能：
- 配置管理（ConfigManager）
- 自定义异常（exceptions）
- 日志记录（logger）
"""

from utils.config_manager import ConfigManager, DEFAULT_CONFIG

# 导出异常类
from utils.exceptions import (
    # 基础异常
    SolverError,
    # 配置错误
    ConfigurationError,
    InvalidParameterError,
    MissingParameterError,
    ConfigValidationError,
    # 数据错误
    DataError,
    ConfigFileError,
    # 博弈定义错误
    GameError,
    InvalidGameDefinitionError,
    IllegalActionError,
    # 并行训练错误
    ParallelTrainingError,
    WorkerProcessError,
    # 评估错误
    EvaluationError,
    InvalidStrategyError,
)

# 导出日志功能
from utils.logger import (
    LoggerConfig,
    setup_logger,
    get_logger,
    clear_loggers,
    LoggerMixin,
    configure_logging,
    get_global_config,
    get_training_logger,
    get_environment_logger,
    get_analysis_logger,
)

__all__ = [
    # 配置管理
    'ConfigManager',
    'DEFAULT_CONFIG',
    # 基础异常
    'SolverError',
    # 配置错误
    'ConfigurationError',
    'InvalidParameterError',
    'MissingParameterError',
    'ConfigValidationError',
    # 数据错误
    'DataError',
    'ConfigFileError',
    # 博弈定义错误
    'GameError',
    'InvalidGameDefinitionError',
    'IllegalActionError',
    # 并行训练错误
    'ParallelTrainingError',
    'WorkerProcessError',
    # 评估错误
    'EvaluationError',
    'InvalidStrategyError',
    # 日志功能
    'LoggerConfig',
    'setup_logger',
    'get_logger',
    'clear_loggers',
    'LoggerMixin',
    'configure_logging',
    'get_global_config',
    'get_training_logger',
    'get_environment_logger',
    'get_analysis_logger',
]
