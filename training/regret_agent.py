"""遗憾匹配智能体实现。

每个智能体维护一方玩家的累积遗憾值和累积策略：
- 当前策略与正遗憾值成正比（Regret Matching）
- 平均策略（累积策略归一化）收敛到纳什均衡，即使单次迭代的策略不收敛
"""

from typing import Optional

import numpy as np

from environment.game_model import GameModel
from training.action_sampler import ActionSampler
from utils.exceptions import InvalidParameterError


class RegretMatchingAgent:
    """遗憾匹配智能体。

    绑定到一个博弈模型，按索引处理行动，对行动的含义一无所知。

    Attributes:
        game: 博弈模型
        num_actions: 行动空间大小
        regret_sum: 各行动的累积反事实遗憾值
        strategy_sum: 各行动的累积策略概率
        iterations: 已执行的 get_action 次数
    """

    def __init__(self, game: GameModel, sampler: Optional[ActionSampler] = None):
        """初始化智能体。

        Args:
            game: 博弈模型
            sampler: 行动采样器；为 None 时创建一个无种子的采样器

        Raises:
            InvalidParameterError: 行动数量不为正
        """
        if game.num_actions <= 0:
            raise InvalidParameterError("num_actions", game.num_actions, "行动数量必须为正整数")

        self.game = game
        self.num_actions = game.num_actions
        self.sampler = sampler if sampler is not None else ActionSampler()

        # 收益矩阵在构造时构建，get_ev 的异常在此处直接抛出
        self._payoffs = game.payoff_matrix()

        self.regret_sum = np.zeros(self.num_actions, dtype=np.float64)
        self.strategy_sum = np.zeros(self.num_actions, dtype=np.float64)
        self.iterations = 0

    def get_strategy(self) -> np.ndarray:
        """根据累积遗憾值计算当前策略（不修改任何状态）。

        Regret Matching算法：
        - 如果某个行动的累积遗憾值为正，则该行动的概率与遗憾值成正比
        - 如果所有行动的遗憾值都为非正，则使用均匀分布

        Returns:
            行动概率分布
        """
        positive_regrets = np.maximum(self.regret_sum, 0.0)
        normalizing_sum = np.sum(positive_regrets)

        if normalizing_sum > 0:
            return positive_regrets / normalizing_sum
        return np.full(self.num_actions, 1.0 / self.num_actions)

    def get_action(self) -> int:
        """计算当前策略，累加到策略表，并从中采样一个行动。

        Returns:
            采样得到的行动索引
        """
        strategy = self.get_strategy()
        self.strategy_sum += strategy
        self.iterations += 1
        return self.sampler.sample(strategy)

    def update_regrets(self, my_action: int, opp_action: int) -> None:
        """在观察到对手行动后更新遗憾值。

        反事实遗憾 = 在对手行动固定时改为执行该行动的收益 - 实际收益

        Args:
            my_action: 本方实际执行的行动索引
            opp_action: 对手实际执行的行动索引

        Raises:
            IllegalActionError: 行动索引越界
        """
        self.game.check_action(my_action)
        self.game.check_action(opp_action)

        base_ev = self._payoffs[my_action, opp_action]
        self.regret_sum += self._payoffs[:, opp_action] - base_ev

    def get_average_strategy(self) -> np.ndarray:
        """获取累积平均策略。

        累积策略总和不为正时（尚未完成任何迭代）返回均匀分布。

        Returns:
            平均策略
        """
        normalizing_sum = np.sum(self.strategy_sum)
        if normalizing_sum <= 0:
            return np.full(self.num_actions, 1.0 / self.num_actions)
        return self.strategy_sum / normalizing_sum

    def reset(self) -> None:
        """重置智能体状态。"""
        self.regret_sum = np.zeros(self.num_actions, dtype=np.float64)
        self.strategy_sum = np.zeros(self.num_actions, dtype=np.float64)
        self.iterations = 0
