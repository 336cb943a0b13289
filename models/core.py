"""Core data models for the regret-matching solver."""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from enum import Enum

import numpy as np


class GameType(Enum):
    """可求解的博弈类型。

    - RPS: 非对称收益的石头剪刀布变体
    - BLOTTO: 布洛托上校兵力分配博弈
    - MATRIX: 由显式收益表定义的自定义矩阵博弈
    """
    RPS = "rps"
    BLOTTO = "blotto"
    MATRIX = "matrix"


@dataclass
class SolverConfig:
    """求解配置参数。

    Attributes:
        game: 博弈类型（rps, blotto, matrix）
        iterations: 自我对弈迭代次数
        seed: 随机数种子（固定种子可逐位复现一次训练）
        tower_values: 布洛托博弈中各阵地的价值
        num_troops: 布洛托博弈中的总兵力
        actions: 矩阵博弈的行动标签
        payoffs: 矩阵博弈的收益表（行玩家视角）
        best_response_floor: 最佳响应扫描的初始最大值，None表示从负无穷开始
        num_workers: 多种子并行训练时的工作进程数
    """
    game: str = "rps"
    iterations: int = 50000
    seed: int = 42
    tower_values: List[int] = field(default_factory=lambda: [1, 2])
    num_troops: int = 5
    actions: List[str] = field(default_factory=list)
    payoffs: List[List[float]] = field(default_factory=list)
    best_response_floor: Optional[float] = 0.0
    num_workers: int = 1

    def __post_init__(self):
        """Validate configuration parameters."""
        valid_games = [g.value for g in GameType]
        if self.game not in valid_games:
            raise ValueError(f"Game must be one of {valid_games}, got {self.game!r}")
        if not isinstance(self.iterations, int) or self.iterations <= 0:
            raise ValueError(f"Iterations must be a positive integer, got {self.iterations}")
        if not isinstance(self.seed, int) or self.seed < 0:
            raise ValueError(f"Seed must be a non-negative integer, got {self.seed}")
        if self.num_workers <= 0:
            raise ValueError(f"Number of workers must be positive, got {self.num_workers}")
        if self.best_response_floor is not None and not np.isfinite(self.best_response_floor):
            raise ValueError(f"Best response floor must be finite or None, got {self.best_response_floor}")
        if self.game == GameType.BLOTTO.value:
            self._validate_blotto_config()

    def _validate_blotto_config(self) -> None:
        if len(self.tower_values) == 0:
            raise ValueError("Blotto game needs at least one tower")
        for value in self.tower_values:
            if not isinstance(value, int) or value <= 0:
                raise ValueError(f"Tower values must be positive integers, got {self.tower_values}")
        if not isinstance(self.num_troops, int) or self.num_troops < 0:
            raise ValueError(f"Number of troops must be a non-negative integer, got {self.num_troops}")

    @property
    def game_type(self) -> GameType:
        return GameType(self.game)


@dataclass
class TrainingSummary:
    """一次自我对弈训练的结果摘要。

    Attributes:
        iterations: 已完成的迭代次数
        seed: 本次训练使用的随机种子
        average_strategies: 两个玩家的平均策略
        ev: 两个玩家各自平均策略对对手平均策略的期望收益
        exploitability: 两个玩家各自的可剥削度
        nash_conv: 两个玩家可剥削度之和
    """
    iterations: int
    seed: Optional[int]
    average_strategies: List[np.ndarray]
    ev: List[float]
    exploitability: List[float]
    nash_conv: float

    def to_dict(self) -> Dict[str, Any]:
        """转换为可JSON序列化的字典（供调用方展示使用）。"""
        return {
            'iterations': self.iterations,
            'seed': self.seed,
            'average_strategies': [s.tolist() for s in self.average_strategies],
            'ev': list(self.ev),
            'exploitability': list(self.exploitability),
            'nash_conv': self.nash_conv,
        }
