"""自我对弈训练器 - 驱动两个遗憾匹配智能体进行固定次数的同时行动对局。

每次迭代严格按以下顺序执行：
1. 智能体A采样行动
2. 智能体B采样行动
3. A根据B的行动更新遗憾值
4. B根据A的行动更新遗憾值

两个智能体共享一个显式播种的随机数生成器，每次迭代先A后B各抽样一次，
因此固定种子即可逐位复现整个训练过程。训练没有收敛检测或提前终止，
迭代次数由调用方决定（行动空间越大需要越多迭代）。
"""

from typing import List, Optional

import numpy as np

from environment.game_model import GameModel
from analysis.equilibrium_analyzer import EquilibriumAnalyzer
from models.core import TrainingSummary
from training.action_sampler import ActionSampler
from training.regret_agent import RegretMatchingAgent
from utils.exceptions import InvalidParameterError
from utils.logger import LoggerMixin


DEFAULT_SEED = 42


class SelfPlayTrainer(LoggerMixin):
    """自我对弈训练器。

    Attributes:
        agents: 两个智能体 [A, B]
        rng: 共享的随机数生成器
        seed: 随机种子（直接传入 rng 时为 None）
        iterations: 已完成的迭代次数
    """

    def __init__(self, agent_a: RegretMatchingAgent, agent_b: RegretMatchingAgent,
                 rng: Optional[np.random.Generator] = None, seed: Optional[int] = None,
                 best_response_floor: Optional[float] = 0.0):
        """初始化训练器。

        两个智能体原有的采样器会被替换为同一个共享采样器。
        rng 与 seed 都未提供时使用 DEFAULT_SEED。

        Args:
            agent_a: 玩家1的智能体
            agent_b: 玩家2的智能体
            rng: 共享随机数生成器
            seed: 随机种子（仅在未提供 rng 时使用）
            best_response_floor: 可剥削度计算中最佳响应扫描的初始最大值

        Raises:
            InvalidParameterError: 两个玩家是同一实例，或双方行动数量不一致
        """
        if agent_a is agent_b:
            raise InvalidParameterError("agent_b", agent_b, "两个玩家必须使用不同的智能体实例")
        if agent_a.num_actions != agent_b.num_actions:
            raise InvalidParameterError(
                "agent_b", agent_b.num_actions,
                f"双方的行动数量必须一致（玩家1为 {agent_a.num_actions}）"
            )

        self.agents: List[RegretMatchingAgent] = [agent_a, agent_b]
        if rng is None:
            if seed is None:
                seed = DEFAULT_SEED
            rng = np.random.default_rng(seed)
        self.seed = seed
        self.rng = rng

        shared_sampler = ActionSampler(self.rng)
        agent_a.sampler = shared_sampler
        agent_b.sampler = shared_sampler

        self.best_response_floor = best_response_floor
        self.iterations = 0

    @classmethod
    def from_game(cls, game: GameModel, seed: int = DEFAULT_SEED,
                  opponent_game: Optional[GameModel] = None,
                  best_response_floor: Optional[float] = 0.0) -> 'SelfPlayTrainer':
        """为一个博弈（或每方各一个博弈实例）创建训练器。

        Args:
            game: 玩家1的博弈模型
            seed: 随机种子
            opponent_game: 玩家2的博弈模型，None 表示与玩家1共享同一实例
            best_response_floor: 最佳响应扫描的初始最大值

        Returns:
            训练器
        """
        game.validate()
        if opponent_game is None:
            opponent_game = game
        else:
            opponent_game.validate()

        return cls(
            RegretMatchingAgent(game),
            RegretMatchingAgent(opponent_game),
            seed=seed,
            best_response_floor=best_response_floor,
        )

    @property
    def game(self) -> GameModel:
        return self.agents[0].game

    def train(self, iterations: int) -> None:
        """执行固定次数的自我对弈迭代（可多次调用，累积训练）。

        Args:
            iterations: 迭代次数

        Raises:
            InvalidParameterError: 迭代次数不为正整数
        """
        if not isinstance(iterations, (int, np.integer)) or iterations <= 0:
            raise InvalidParameterError("iterations", iterations, "迭代次数必须为正整数")

        agent_a, agent_b = self.agents
        self.logger.info(
            f"开始自我对弈训练: 博弈={self.game.name}, 迭代次数={iterations}, 种子={self.seed}"
        )

        for _ in range(iterations):
            action_a = agent_a.get_action()
            action_b = agent_b.get_action()

            agent_a.update_regrets(action_a, action_b)
            agent_b.update_regrets(action_b, action_a)

        self.iterations += iterations
        self.logger.info(f"训练完成，累计迭代次数: {self.iterations}")

    def get_average_strategy(self, player: int = 0) -> np.ndarray:
        """获取指定玩家（0或1）的平均策略。"""
        return self._agent(player).get_average_strategy()

    def get_average_strategy_p1(self) -> np.ndarray:
        return self.get_average_strategy(0)

    def get_average_strategy_p2(self) -> np.ndarray:
        return self.get_average_strategy(1)

    def _agent(self, player: int) -> RegretMatchingAgent:
        if player not in (0, 1):
            raise InvalidParameterError("player", player, "玩家编号必须为0或1")
        return self.agents[player]

    def _analyzer(self, player: int) -> EquilibriumAnalyzer:
        return EquilibriumAnalyzer(self._agent(player).game, self.best_response_floor)

    def get_ev(self, player: int = 0) -> float:
        """指定玩家的平均策略对抗对手平均策略的期望收益。"""
        return self._analyzer(player).compare_strategy(
            self.get_average_strategy(player),
            self.get_average_strategy(1 - player)
        )

    def get_exploitability(self, player: int = 0) -> float:
        """指定玩家平均策略的可剥削度。

        最佳响应由对手一方的博弈模型计算。
        """
        return self.get_best_response_ev(player) - self.get_ev(player)

    def get_best_response_ev(self, player: int = 0) -> float:
        """对手针对指定玩家平均策略的最佳响应收益（由对手一方的博弈模型计算）。"""
        return self._analyzer(1 - player).opponent_best_response_ev(
            self.get_average_strategy(player)
        )

    def summarize(self) -> TrainingSummary:
        """汇总当前训练结果。"""
        exploitability = [self.get_exploitability(0), self.get_exploitability(1)]
        return TrainingSummary(
            iterations=self.iterations,
            seed=self.seed,
            average_strategies=[self.get_average_strategy(0), self.get_average_strategy(1)],
            ev=[self.get_ev(0), self.get_ev(1)],
            exploitability=exploitability,
            nash_conv=exploitability[0] + exploitability[1],
        )
