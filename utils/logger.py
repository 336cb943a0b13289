"""求解器日志模块。

基于标准库 logging。所有日志器共享一个全局 LoggerConfig：
控制台输出写到 stderr（stdout 留给CLI的策略表），
设置 log_file 后额外写入一个按大小轮转的日志文件。
CLI 通过 --log-level、--log-file 和 --detailed-log 调用 configure_logging。
"""

import logging
import sys
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, List, Optional


LOG_LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL
}

DEFAULT_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'
# 附带源文件与行号，便于定位训练过程中的日志来源
DETAILED_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - [%(filename)s:%(lineno)d] - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

_loggers: Dict[str, logging.Logger] = {}
_global_config: Optional['LoggerConfig'] = None


def _check_level(level: str) -> str:
    level = level.upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"无效的日志级别: {level}。有效级别: {list(LOG_LEVELS.keys())}")
    return level


@dataclass
class LoggerConfig:
    """日志配置。

    Attributes:
        level: 日志级别名称（不区分大小写）
        log_file: 日志文件路径，None 表示不写文件
        console_output: 是否输出到 stderr
        detailed: 是否在格式中包含文件名和行号
        max_file_size: 单个日志文件的最大字节数
        backup_count: 轮转保留的旧文件数量
    """
    level: str = 'INFO'
    log_file: Optional[str] = None
    console_output: bool = True
    detailed: bool = False
    max_file_size: int = 10 * 1024 * 1024
    backup_count: int = 3

    def __post_init__(self):
        self.level = _check_level(self.level)

    @property
    def file_output(self) -> bool:
        return self.log_file is not None

    @property
    def format_string(self) -> str:
        return DETAILED_FORMAT if self.detailed else DEFAULT_FORMAT


def _build_handlers(config: LoggerConfig) -> List[logging.Handler]:
    """按配置创建控制台与文件处理器（共用同一格式）。"""
    handlers: List[logging.Handler] = []
    if config.console_output:
        handlers.append(logging.StreamHandler(sys.stderr))
    if config.file_output:
        path = Path(config.log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
            encoding='utf-8'
        ))

    formatter = logging.Formatter(config.format_string, DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(LOG_LEVELS[config.level])
        handler.setFormatter(formatter)
    return handlers


def setup_logger(name: str, config: Optional[LoggerConfig] = None) -> logging.Logger:
    """创建（或返回已缓存的）日志器。

    Args:
        name: 日志器名称
        config: 日志配置，None 时使用全局配置

    Returns:
        日志器实例
    """
    if name in _loggers:
        return _loggers[name]

    config = config or get_global_config()
    logger = logging.getLogger(name)
    logger.setLevel(LOG_LEVELS[config.level])
    logger.handlers.clear()
    for handler in _build_handlers(config):
        logger.addHandler(handler)
    logger.propagate = False

    _loggers[name] = logger
    return logger


def get_logger(name: str) -> logging.Logger:
    """按全局配置获取日志器。"""
    return _loggers.get(name) or setup_logger(name)


def clear_loggers() -> None:
    """关闭所有缓存日志器的处理器并清空缓存（释放日志文件句柄）。"""
    for logger in _loggers.values():
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
    _loggers.clear()


class LoggerMixin:
    """为类提供以类名命名的 self.logger。"""

    @property
    def logger(self) -> logging.Logger:
        if not hasattr(self, '_logger'):
            self._logger = get_logger(self.__class__.__name__)
        return self._logger


def get_training_logger() -> logging.Logger:
    return get_logger('training')


def get_environment_logger() -> logging.Logger:
    return get_logger('environment')


def get_analysis_logger() -> logging.Logger:
    return get_logger('analysis')


def configure_logging(level: str = 'INFO', log_file: Optional[str] = None,
                      detailed: bool = False, console_output: bool = True) -> LoggerConfig:
    """替换全局日志配置，已缓存的日志器会在下次获取时按新配置重建。

    Args:
        level: 日志级别
        log_file: 日志文件路径，None 表示只输出到控制台
        detailed: 是否使用包含文件名和行号的格式
        console_output: 是否输出到 stderr

    Returns:
        新的全局配置

    Raises:
        ValueError: 日志级别无效
    """
    global _global_config
    _global_config = LoggerConfig(
        level=level,
        log_file=log_file,
        console_output=console_output,
        detailed=detailed
    )
    clear_loggers()
    return _global_config


def get_global_config() -> LoggerConfig:
    """获取全局日志配置（未配置时使用默认值）。"""
    global _global_config
    if _global_config is None:
        _global_config = LoggerConfig()
    return _global_config
