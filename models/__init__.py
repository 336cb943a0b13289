"""遗憾匹配求解器的核心数据模型。

本模块导出以下组件：
- GameType: 博弈类型枚举
- SolverConfig: 求解配置
- TrainingSummary: 训练结果摘要
"""

from .core import (
    GameType,
    SolverConfig,
    TrainingSummary,
)

__all__ = [
    'GameType',
    'SolverConfig',
    'TrainingSummary',
]
