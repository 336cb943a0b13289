"""自定义异常类模块 - 定义求解器中使用的所有自定义异常。

系统需要处理以下类型的错误：
1. 配置错误 - 无效的参数值、缺失必需参数、配置验证失败
2. 数据错误 - 配置文件格式错误
3. 博弈定义错误 - 行动空间为空、收益函数非零和、非法行动索引
4. 评估错误 - 策略分布长度不匹配或包含负值

数值退化（尚无正遗憾值、累积策略为零）不属于错误，由求解器内部以均匀分布代替。
"""

from typing import Optional, List, Any


class SolverError(Exception):
    """遗憾匹配求解器的基础异常类。

    所有自定义异常都继承自此类，便于统一捕获和处理。

    Attributes:
        message: 错误信息
        details: 额外的错误详情
    """

    def __init__(self, message: str, details: Optional[Any] = None):
        """初始化异常。

        Args:
            message: 错误信息
            details: 额外的错误详情（可选）
        """
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        """返回异常的字符串表示。"""
        if self.details:
            return f"{self.message} (详情: {self.details})"
        return self.message


# ============== 配置错误 ==============

class ConfigurationError(SolverError):
    """配置错误的基类。

    当配置参数无效、缺失或不兼容时抛出。
    """
    pass


class InvalidParameterError(ConfigurationError):
    """无效参数错误。

    当参数的值无效时抛出（如行动数量为0、迭代次数为负数）。

    Attributes:
        parameter_name: 参数名称
        parameter_value: 参数值
        reason: 无效原因
    """

    def __init__(self, parameter_name: str, parameter_value: Any, reason: str):
        """初始化无效参数错误。

        Args:
            parameter_name: 参数名称
            parameter_value: 参数值
            reason: 无效原因
        """
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value
        self.reason = reason
        message = f"参数 '{parameter_name}' 无效: {reason} (当前值: {parameter_value})"
        super().__init__(message, details={
            "parameter_name": parameter_name,
            "parameter_value": parameter_value,
            "reason": reason
        })


class MissingParameterError(ConfigurationError):
    """缺失参数错误。

    当必需的配置参数缺失时抛出（如矩阵博弈缺少收益表）。
    """

    def __init__(self, parameter_name: str):
        self.parameter_name = parameter_name
        message = f"缺失必需参数: '{parameter_name}'"
        super().__init__(message, details={"parameter_name": parameter_name})


class ConfigValidationError(ConfigurationError):
    """配置验证错误。

    当配置验证失败时抛出，包含所有验证错误信息。

    Attributes:
        errors: 验证错误列表
    """

    def __init__(self, errors: List[str]):
        """初始化配置验证错误。

        Args:
            errors: 验证错误列表
        """
        self.errors = errors
        message = f"配置验证失败: {'; '.join(errors)}"
        super().__init__(message, details={"errors": errors})


# ============== 数据错误 ==============

class DataError(SolverError):
    """数据错误的基类。"""
    pass


class ConfigFileError(DataError):
    """配置文件错误。

    当配置文件格式错误（如非法JSON）或无法读取时抛出。

    Attributes:
        file_path: 配置文件路径
    """

    def __init__(self, file_path: str, message: Optional[str] = None):
        self.file_path = file_path
        msg = message or f"配置文件格式错误: {file_path}"
        super().__init__(msg, details={"file_path": file_path})


# ============== 博弈定义错误 ==============

class GameError(SolverError):
    """博弈相关错误的基类。"""
    pass


class InvalidGameDefinitionError(GameError):
    """博弈定义无效错误。

    当行动空间为空、收益值不是有限数或收益函数违反零和性质时抛出。
    这属于构造期的致命错误，求解器不会尝试恢复。

    Attributes:
        game_name: 博弈名称
        reason: 无效原因
    """

    def __init__(self, game_name: str, reason: str):
        """初始化博弈定义无效错误。

        Args:
            game_name: 博弈名称
            reason: 无效原因
        """
        self.game_name = game_name
        self.reason = reason
        message = f"博弈 '{game_name}' 定义无效: {reason}"
        super().__init__(message, details={
            "game_name": game_name,
            "reason": reason
        })


class IllegalActionError(GameError):
    """非法行动错误。

    当行动索引超出行动空间范围时抛出。

    Attributes:
        action: 尝试执行的行动索引
        reason: 非法原因
    """

    def __init__(self, action: Any, reason: str):
        self.action = action
        self.reason = reason
        message = f"非法行动 {action}: {reason}"
        super().__init__(message, details={
            "action": action,
            "reason": reason
        })


# ============== 并行训练错误 ==============

class ParallelTrainingError(SolverError):
    """并行训练错误的基类。"""
    pass


class WorkerProcessError(ParallelTrainingError):
    """工作进程错误。

    当某个种子的独立训练在工作进程中失败时抛出。

    Attributes:
        seed: 失败训练使用的随机种子
        error_message: 工作进程报告的错误信息
    """

    def __init__(self, seed: int, error_message: Optional[str] = None):
        """初始化工作进程错误。

        Args:
            seed: 失败训练使用的随机种子
            error_message: 工作进程报告的错误信息
        """
        self.seed = seed
        self.error_message = error_message
        message = f"种子 {seed} 的训练进程发生错误"
        if error_message:
            message += f": {error_message}"
        super().__init__(message, details={
            "seed": seed,
            "error_message": error_message
        })


# ============== 评估错误 ==============

class EvaluationError(SolverError):
    """评估错误的基类。"""
    pass


class InvalidStrategyError(EvaluationError):
    """无效策略错误。

    当策略分布的长度与行动空间不匹配、为空或包含负概率时抛出。

    Attributes:
        reason: 无效原因
    """

    def __init__(self, reason: str, strategy: Optional[Any] = None):
        self.reason = reason
        message = f"无效策略: {reason}"
        super().__init__(message, details={"strategy": strategy} if strategy is not None else None)
