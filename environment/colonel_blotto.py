"""Colonel Blotto troop-allocation game.

Each player splits a fixed number of indivisible troops across towers of
known value. A tower is won outright by committing strictly more troops than
the opponent; ties at a tower score nothing. The payoff between two
allocations is the sum of won tower values minus the sum of lost ones.
"""

from math import comb
from numbers import Integral
from typing import Iterator, List, Sequence, Tuple

from environment.game_model import GameModel
from utils.exceptions import InvalidParameterError


Allocation = Tuple[int, ...]


def generate_allocations(num_towers: int, num_troops: int) -> Iterator[Allocation]:
    """按固定顺序生成所有兵力分配方案。

    前 num_towers-1 个阵地依次取 0..剩余兵力（嵌套选择，升序），
    最后一个阵地取剩余的全部兵力。使用显式栈代替递归。

    Args:
        num_towers: 阵地数量（至少为1）
        num_troops: 总兵力（非负）

    Yields:
        每个阵地的兵力元组
    """
    stack: List[Tuple[Allocation, int]] = [((), num_troops)]
    while stack:
        prefix, remaining = stack.pop()
        if len(prefix) == num_towers - 1:
            yield prefix + (remaining,)
            continue
        # 逆序入栈，出栈时按升序展开
        for troops in range(remaining, -1, -1):
            stack.append((prefix + (troops,), remaining - troops))


def count_allocations(num_towers: int, num_troops: int) -> int:
    """分配方案数量 C(T+K-1, K-1)。"""
    return comb(num_troops + num_towers - 1, num_towers - 1)


class ColonelBlotto(GameModel):
    """布洛托上校博弈。

    Attributes:
        tower_values: 各阵地价值（正整数）
        num_troops: 每个玩家的总兵力
    """

    def __init__(self, tower_values: Sequence[int] = (1, 2), num_troops: int = 5):
        """初始化布洛托博弈。

        Args:
            tower_values: 各阵地价值
            num_troops: 总兵力

        Raises:
            InvalidParameterError: 阵地为空、价值非正或兵力为负
        """
        super().__init__()
        if len(tower_values) == 0:
            raise InvalidParameterError("tower_values", list(tower_values), "至少需要一个阵地")
        for value in tower_values:
            if not isinstance(value, Integral) or value <= 0:
                raise InvalidParameterError("tower_values", list(tower_values), "阵地价值必须为正整数")
        if not isinstance(num_troops, Integral) or num_troops < 0:
            raise InvalidParameterError("num_troops", num_troops, "总兵力必须为非负整数")

        self.tower_values: Tuple[int, ...] = tuple(int(v) for v in tower_values)
        self.num_troops = int(num_troops)
        self.name = f"blotto{list(self.tower_values)}x{self.num_troops}"
        self._allocations: Tuple[Allocation, ...] = tuple(
            generate_allocations(len(self.tower_values), self.num_troops)
        )

    @property
    def num_towers(self) -> int:
        return len(self.tower_values)

    @property
    def action_space(self) -> Sequence[Allocation]:
        return self._allocations

    def action_label(self, index: int) -> str:
        self.check_action(index)
        return "(" + ",".join(str(t) for t in self._allocations[index]) + ")"

    def get_ev(self, a: int, b: int) -> float:
        mine = self._allocations[a]
        theirs = self._allocations[b]
        score = 0
        for my_troops, opp_troops, value in zip(mine, theirs, self.tower_values):
            if my_troops > opp_troops:
                score += value
            elif my_troops < opp_troops:
                score -= value
        return float(score)
