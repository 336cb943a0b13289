"""Game model abstraction for two-player zero-sum normal-form games.

A game only supplies a finite, ordered action space and a payoff function
between any two action indices. The solver addresses actions purely by index;
the action descriptors are used for labeling.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

import numpy as np

from utils.exceptions import InvalidGameDefinitionError, IllegalActionError


# 零和校验的数值容差
ZERO_SUM_TOLERANCE = 1e-9


class GameModel(ABC):
    """双人零和同时行动博弈的抽象基类。

    子类必须实现 action_space 和 get_ev。
    收益矩阵在首次访问时由 get_ev 逐项构建并缓存，之后只读。
    """

    name: str = "game"

    def __init__(self):
        self._payoff_matrix: Optional[np.ndarray] = None

    @property
    @abstractmethod
    def action_space(self) -> Sequence[Any]:
        """有序的行动描述序列（仅用于标注）。"""
        pass

    @abstractmethod
    def get_ev(self, a: int, b: int) -> float:
        """行玩家以行动 a 对抗列玩家行动 b 时的收益。

        Args:
            a: 行玩家行动索引
            b: 列玩家行动索引

        Returns:
            行玩家的收益
        """
        pass

    @property
    def num_actions(self) -> int:
        return len(self.action_space)

    def action_label(self, index: int) -> str:
        """返回行动的显示标签。"""
        self.check_action(index)
        return str(self.action_space[index])

    def action_labels(self) -> List[str]:
        return [self.action_label(i) for i in range(self.num_actions)]

    def check_action(self, index: int) -> None:
        """检查行动索引是否在行动空间范围内。

        Raises:
            IllegalActionError: 索引越界
        """
        if not 0 <= index < self.num_actions:
            raise IllegalActionError(
                index, f"行动索引必须在 [0, {self.num_actions}) 范围内"
            )

    def payoff_matrix(self) -> np.ndarray:
        """返回收益矩阵，元素 [a, b] 等于 get_ev(a, b)。

        get_ev 抛出的任何异常都会原样向上传播。

        Returns:
            只读的 num_actions x num_actions 浮点矩阵
        """
        if self._payoff_matrix is None:
            n = self.num_actions
            matrix = np.zeros((n, n), dtype=np.float64)
            for a in range(n):
                for b in range(n):
                    matrix[a, b] = self.get_ev(a, b)
            matrix.setflags(write=False)
            self._payoff_matrix = matrix
        return self._payoff_matrix

    def validate(self) -> None:
        """验证博弈定义。

        检查行动空间非空、所有收益为有限数，以及零和性质
        get_ev(a, b) == -get_ev(b, a)（由此 get_ev(a, a) == 0）。

        Raises:
            InvalidGameDefinitionError: 博弈定义无效
        """
        if self.num_actions <= 0:
            raise InvalidGameDefinitionError(self.name, "行动空间不能为空")

        matrix = self.payoff_matrix()

        if not np.all(np.isfinite(matrix)):
            raise InvalidGameDefinitionError(self.name, "收益必须为有限数")

        violation = np.abs(matrix + matrix.T)
        if np.any(violation > ZERO_SUM_TOLERANCE):
            a, b = np.unravel_index(int(np.argmax(violation)), violation.shape)
            raise InvalidGameDefinitionError(
                self.name,
                f"收益函数不满足零和: get_ev({a}, {b})={matrix[a, b]}, "
                f"get_ev({b}, {a})={matrix[b, a]}"
            )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, num_actions={self.num_actions})"


class MatrixGame(GameModel):
    """由显式收益表定义的矩阵博弈。

    收益表按行玩家视角给出，payoffs[a][b] 即 get_ev(a, b)。
    构造时立即验证，非零和或形状错误的表会导致构造失败。
    """

    def __init__(self, actions: Sequence[Any], payoffs: Sequence[Sequence[float]],
                 name: str = "matrix"):
        """初始化矩阵博弈。

        Args:
            actions: 行动描述序列
            payoffs: 收益表（行玩家视角）
            name: 博弈名称

        Raises:
            InvalidGameDefinitionError: 收益表形状错误或违反零和
        """
        super().__init__()
        self.name = name
        self._actions = tuple(actions)

        table = np.asarray(payoffs, dtype=np.float64)
        n = len(self._actions)
        if table.shape != (n, n):
            raise InvalidGameDefinitionError(
                name, f"收益表形状应为 ({n}, {n})，实际为 {table.shape}"
            )
        self._table = table
        self.validate()

    @property
    def action_space(self) -> Sequence[Any]:
        return self._actions

    def get_ev(self, a: int, b: int) -> float:
        return float(self._table[a, b])
