"""错误处理和日志系统的单元测试。

测试内容：
- 异常层次结构与错误信息
- 日志配置、日志器缓存与文件输出
- 组件在错误输入下抛出的异常类型
"""

import logging
import tempfile
from pathlib import Path

import pytest

from utils.exceptions import (
    SolverError,
    ConfigurationError,
    InvalidParameterError,
    MissingParameterError,
    ConfigValidationError,
    DataError,
    ConfigFileError,
    GameError,
    InvalidGameDefinitionError,
    IllegalActionError,
    ParallelTrainingError,
    WorkerProcessError,
    EvaluationError,
    InvalidStrategyError,
)
from utils.logger import (
    LoggerConfig,
    setup_logger,
    get_logger,
    clear_loggers,
    configure_logging,
    get_global_config,
    LoggerMixin,
    DEFAULT_FORMAT,
    DETAILED_FORMAT,
)
from utils.config_manager import ConfigManager
from environment.game_model import MatrixGame


class TestConfigurationErrors:
    """配置错误测试类。"""

    def test_invalid_parameter_error_message(self):
        """测试无效参数错误信息包含参数名、原因和当前值。"""
        error = InvalidParameterError(
            parameter_name='iterations',
            parameter_value=-10,
            reason='迭代次数必须为正整数'
        )

        assert 'iterations' in str(error)
        assert '迭代次数必须为正整数' in str(error)
        assert '-10' in str(error)
        assert error.details['parameter_name'] == 'iterations'
        assert error.details['parameter_value'] == -10

    def test_missing_parameter_error_message(self):
        error = MissingParameterError(parameter_name='payoffs')

        assert 'payoffs' in str(error)
        assert '缺失' in str(error)
        assert error.details['parameter_name'] == 'payoffs'

    def test_config_validation_error_with_multiple_errors(self):
        """测试配置验证错误包含所有验证错误。"""
        errors = ['iterations: 必须为正整数', 'seed: 必须为非负整数']
        error = ConfigValidationError(errors)

        assert error.errors == errors
        for message in errors:
            assert message in str(error)

    def test_configuration_error_inheritance(self):
        assert isinstance(InvalidParameterError('a', 1, 'b'), ConfigurationError)
        assert isinstance(MissingParameterError('a'), ConfigurationError)
        assert isinstance(ConfigValidationError([]), ConfigurationError)


class TestGameErrors:
    """博弈定义错误测试类。"""

    def test_invalid_game_definition_error(self):
        error = InvalidGameDefinitionError('rps', '收益函数不满足零和')
        assert 'rps' in str(error)
        assert '零和' in str(error)
        assert error.game_name == 'rps'

    def test_illegal_action_error(self):
        error = IllegalActionError(7, '行动索引必须在 [0, 3) 范围内')
        assert '7' in str(error)
        assert error.action == 7

    def test_matrix_game_raises_definition_error(self):
        """测试非零和矩阵博弈抛出博弈定义错误，且可按基类捕获。"""
        with pytest.raises(GameError):
            MatrixGame(['x', 'y'], [[0, 2], [2, 0]])


class TestOtherErrors:
    """数据、并行与评估错误测试类。"""

    def test_config_file_error(self):
        error = ConfigFileError('/tmp/config.json')
        assert '/tmp/config.json' in str(error)
        assert isinstance(error, DataError)

        error = ConfigFileError('/tmp/config.json', '自定义信息')
        assert error.message == '自定义信息'

    def test_worker_process_error(self):
        """测试工作进程错误包含种子与错误信息。"""
        error = WorkerProcessError(seed=3, error_message='ValueError: boom')
        assert '3' in str(error)
        assert 'boom' in str(error)
        assert isinstance(error, ParallelTrainingError)

    def test_invalid_strategy_error(self):
        error = InvalidStrategyError('策略长度不符', strategy=[0.5, 0.5])
        assert '策略长度不符' in str(error)
        assert error.details == {'strategy': [0.5, 0.5]}
        assert isinstance(error, EvaluationError)

        assert InvalidStrategyError('空策略').details is None


class TestExceptionHierarchy:
    """异常层次结构测试类。"""

    def test_all_exceptions_inherit_from_solver_error(self):
        exceptions = [
            InvalidParameterError('a', 1, 'b'),
            MissingParameterError('a'),
            ConfigValidationError(['e']),
            ConfigFileError('p'),
            InvalidGameDefinitionError('g', 'r'),
            IllegalActionError(0, 'r'),
            WorkerProcessError(0),
            InvalidStrategyError('r'),
        ]
        for exc in exceptions:
            assert isinstance(exc, SolverError)
            assert isinstance(exc, Exception)

    def test_solver_error_with_details(self):
        error = SolverError('出错了', details={'key': 'value'})
        assert '出错了' in str(error)
        assert 'key' in str(error)

    def test_solver_error_without_details(self):
        error = SolverError('出错了')
        assert str(error) == '出错了'
        assert error.details is None


class TestLoggerSystem:
    """日志系统测试类。"""

    def setup_method(self):
        """每个测试前清除日志器缓存。"""
        clear_loggers()

    def teardown_method(self):
        """每个测试后恢复默认全局配置。"""
        configure_logging()

    def test_logger_config_validation(self):
        config = LoggerConfig(level='debug')
        assert config.level == 'DEBUG'

        with pytest.raises(ValueError):
            LoggerConfig(level='INVALID')
        with pytest.raises(ValueError):
            configure_logging(level='verbose')

    def test_default_config_has_no_file_output(self):
        """测试默认配置只输出到控制台。"""
        config = LoggerConfig()
        assert config.console_output
        assert not config.file_output
        assert config.format_string == DEFAULT_FORMAT

    def test_setup_logger(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config = LoggerConfig(
                level='DEBUG',
                log_file=str(Path(tmpdir) / 'test.log'),
                console_output=False
            )

            logger = setup_logger('test_logger', config)

            assert logger.level == logging.DEBUG
            assert not logger.propagate
            assert len(logger.handlers) == 1
            clear_loggers()

    def test_get_logger_returns_cached_instance(self):
        logger1 = get_logger('cached_logger')
        logger2 = get_logger('cached_logger')
        assert logger1 is logger2

    def test_configure_logging_applies_to_new_loggers(self):
        """测试全局配置作用于之后创建的日志器。"""
        configure_logging(level='ERROR')
        assert get_global_config().level == 'ERROR'
        assert get_logger('configured').level == logging.ERROR

    def test_configure_logging_rebuilds_cached_loggers(self):
        """测试重新配置后已缓存的日志器按新级别重建。"""
        configure_logging(level='ERROR')
        assert get_logger('rebuilt').level == logging.ERROR
        configure_logging(level='DEBUG')
        assert get_logger('rebuilt').level == logging.DEBUG

    def test_logger_mixin(self):
        class SampleComponent(LoggerMixin):
            def log_something(self):
                self.logger.info('测试消息')
                return self.logger

        logger = SampleComponent().log_something()
        assert logger.name == 'SampleComponent'

    def test_logger_writes_to_file(self):
        """测试日志写入文件，并自动创建上级目录。"""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_path = Path(tmpdir) / 'logs' / 'test.log'
            config = LoggerConfig(level='INFO', log_file=str(log_path), console_output=False)

            logger = setup_logger('file_test', config)
            logger.info('测试日志消息')
            logger.debug('不应写入的调试消息')
            clear_loggers()

            content = log_path.read_text(encoding='utf-8')
            assert '测试日志消息' in content
            assert '不应写入的调试消息' not in content
            assert ' - INFO - file_test - ' in content

    def test_detailed_format_includes_location(self):
        """测试详细格式记录源文件名与行号。"""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_path = Path(tmpdir) / 'detailed.log'
            configure_logging(level='INFO', log_file=str(log_path),
                              detailed=True, console_output=False)
            assert get_global_config().format_string == DETAILED_FORMAT

            get_logger('detailed_test').info('带位置的消息')
            clear_loggers()

            content = log_path.read_text(encoding='utf-8')
            assert '[test_error_handling.py:' in content
            assert '带位置的消息' in content


class TestIntegration:
    """集成测试类。"""

    def test_config_manager_with_custom_exceptions(self):
        """测试配置管理器抛出自定义异常，且可按基类统一捕获。"""
        manager = ConfigManager()
        with pytest.raises(SolverError) as exc_info:
            manager.from_dict({'game': 'blotto', 'tower_values': []})
        assert isinstance(exc_info.value, ConfigValidationError)
