"""行动采样器 - 按离散概率分布采样行动索引。

使用一次均匀随机抽样（逆累积分布采样）：抽取 r ∈ [0, 1)，
按索引顺序累加概率，返回累积和首次达到或超过 r 的索引。
"""

from typing import Optional, Sequence, Union

import numpy as np

from utils.exceptions import InvalidStrategyError


class ActionSampler:
    """基于显式随机数生成器的行动采样器。

    每次调用 sample 恰好消耗一次随机抽样，
    因此固定种子和调用顺序即可复现整个采样序列。

    Attributes:
        rng: numpy 随机数生成器
    """

    def __init__(self, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None):
        """初始化采样器。

        Args:
            rng: 共享的随机数生成器；为 None 时按 seed 创建新的生成器
            seed: 随机种子（仅在未提供 rng 时使用）
        """
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def sample(self, strategy: Union[np.ndarray, Sequence[float]]) -> int:
        """从策略分布中采样一个行动索引。

        Args:
            strategy: 行动概率分布（非负，和为1）

        Returns:
            行动索引

        Raises:
            InvalidStrategyError: 分布为空
        """
        strategy = np.asarray(strategy, dtype=np.float64)
        n = strategy.shape[0] if strategy.ndim == 1 else 0
        if n == 0:
            raise InvalidStrategyError("策略分布不能为空")

        r = self.rng.random()
        cumulative = np.cumsum(strategy)

        # 第一个满足 cumulative[i] >= r 的索引
        index = int(np.searchsorted(cumulative, r, side='left'))

        # 浮点误差可能使最终累积和略小于 r
        if index >= n:
            index = n - 1
        return index
