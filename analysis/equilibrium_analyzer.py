"""均衡质量分析器模块 - 评估训练得到的平均策略与纳什均衡的距离。

本模块实现了以下指标：
- 对战期望收益：一个策略对抗固定对手策略的期望收益
- 最佳响应收益：对手针对固定策略采取最佳纯策略时的期望收益
- 可剥削度：最佳响应收益与实际对战收益之差
- NashConv：双方可剥削度之和，在纳什均衡处为0

关于最佳响应扫描的两处行为：
1. 扫描的初始最大值默认为 0.0 而不是负无穷，因此报告的最佳响应收益不会低于0；
   将 best_response_floor 设为 None 可得到真实最大值。
2. 平局时使用"大于等于"比较并按索引升序扫描，索引较大的行动胜出。
"""

from typing import Optional, Sequence, Tuple, Union

import numpy as np

from environment.game_model import GameModel
from utils.exceptions import InvalidStrategyError
from utils.logger import get_analysis_logger


StrategyLike = Union[np.ndarray, Sequence[float]]


class EquilibriumAnalyzer:
    """均衡质量分析器。

    绑定到一个博弈模型，只读取策略，不修改任何训练状态。

    Attributes:
        game: 博弈模型
        best_response_floor: 最佳响应扫描的初始最大值（None 表示负无穷）
    """

    def __init__(self, game: GameModel, best_response_floor: Optional[float] = 0.0):
        """初始化分析器。

        Args:
            game: 博弈模型
            best_response_floor: 最佳响应扫描的初始最大值
        """
        self.game = game
        self.best_response_floor = best_response_floor
        self._payoffs = game.payoff_matrix()
        self._logger = get_analysis_logger()

    def _as_strategy(self, strategy: StrategyLike) -> np.ndarray:
        """将输入转换为策略数组并检查长度与非负性。"""
        array = np.asarray(strategy, dtype=np.float64)
        if array.ndim != 1 or array.shape[0] != self.game.num_actions:
            raise InvalidStrategyError(
                f"策略长度应为 {self.game.num_actions}，实际形状为 {array.shape}"
            )
        if np.any(array < 0):
            raise InvalidStrategyError("策略概率不能为负", strategy=array.tolist())
        return array

    def compare_strategy(self, mine: StrategyLike, theirs: StrategyLike) -> float:
        """计算策略 mine 对抗固定对手策略 theirs 的期望收益。

        EV = Σ_a Σ_b get_ev(a, b) * mine[a] * theirs[b]

        Args:
            mine: 本方策略
            theirs: 对手策略

        Returns:
            本方期望收益
        """
        mine_arr = self._as_strategy(mine)
        theirs_arr = self._as_strategy(theirs)
        return float(mine_arr @ self._payoffs @ theirs_arr)

    def action_evs(self, theirs: StrategyLike) -> np.ndarray:
        """每个纯行动对抗固定策略 theirs 的期望收益。"""
        return self._payoffs @ self._as_strategy(theirs)

    def opponent_best_response(self, theirs: StrategyLike) -> Tuple[Optional[int], float]:
        """寻找针对固定策略 theirs 的最佳纯策略响应。

        Args:
            theirs: 被响应的固定策略

        Returns:
            (最佳行动索引, 最佳响应收益)。没有任何行动达到初始最大值时行动为 None。
        """
        evs = self.action_evs(theirs)

        best_action: Optional[int] = None
        best_action_ev = (
            self.best_response_floor if self.best_response_floor is not None else -np.inf
        )

        for action in range(self.game.num_actions):
            current_action_ev = float(evs[action])
            if best_action_ev <= current_action_ev:
                best_action_ev = current_action_ev
                best_action = action

        return best_action, float(best_action_ev)

    def opponent_best_response_ev(self, theirs: StrategyLike) -> float:
        """对手针对固定策略 theirs 的最佳响应收益。"""
        return self.opponent_best_response(theirs)[1]

    def exploitability(self, average_strategy: StrategyLike,
                       opponent_average_strategy: StrategyLike) -> float:
        """计算平均策略的可剥削度。

        可剥削度 = 完全适应的对手能获得的收益 - 本方对抗对手平均策略实际获得的收益

        Args:
            average_strategy: 本方平均策略
            opponent_average_strategy: 对手平均策略

        Returns:
            可剥削度（随训练迭代增加应趋近于0）
        """
        best_response_ev = self.opponent_best_response_ev(average_strategy)
        ev = self.compare_strategy(average_strategy, opponent_average_strategy)
        self._logger.debug(f"最佳响应收益: {best_response_ev:.6f}, 对战收益: {ev:.6f}")
        return best_response_ev - ev

    def nash_conv(self, strategy_a: StrategyLike, strategy_b: StrategyLike) -> float:
        """双方可剥削度之和。"""
        return (self.exploitability(strategy_a, strategy_b)
                + self.exploitability(strategy_b, strategy_a))
