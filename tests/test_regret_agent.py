"""遗憾匹配智能体的单元测试和属性测试。

测试以下功能：
- 初始策略为均匀分布
- 反事实遗憾值更新
- 正遗憾值归一化与均匀回退
- 策略累积与平均策略
"""

import numpy as np
import pytest
from hypothesis import given, strategies as st, settings

from environment.game_model import GameModel
from environment.rock_paper_scissors import RockPaperScissorsVariant, ROCK, PAPER, SCISSORS
from environment.colonel_blotto import ColonelBlotto
from training.action_sampler import ActionSampler
from training.regret_agent import RegretMatchingAgent
from utils.exceptions import InvalidParameterError, IllegalActionError


class _EmptyGame(GameModel):
    @property
    def action_space(self):
        return ()

    def get_ev(self, a, b):
        return 0.0


class _FaultyGame(GameModel):
    @property
    def action_space(self):
        return ("a", "b")

    def get_ev(self, a, b):
        raise KeyError(a)


class TestRegretMatchingAgent:
    """测试遗憾匹配智能体。"""

    def setup_method(self):
        self.game = RockPaperScissorsVariant()
        self.agent = RegretMatchingAgent(self.game, ActionSampler(seed=0))

    def test_initial_strategy_is_uniform(self):
        """测试初始策略为均匀分布。"""
        np.testing.assert_array_equal(self.agent.get_strategy(), np.full(3, 1.0 / 3))
        blotto_agent = RegretMatchingAgent(ColonelBlotto([1, 2], 5))
        np.testing.assert_array_equal(blotto_agent.get_strategy(), np.full(6, 1.0 / 6))

    def test_get_strategy_is_pure(self):
        """测试 get_strategy 不修改任何状态。"""
        self.agent.regret_sum[:] = [1.0, 2.0, 3.0]
        self.agent.get_strategy()
        self.agent.get_strategy()
        np.testing.assert_array_equal(self.agent.regret_sum, [1.0, 2.0, 3.0])
        np.testing.assert_array_equal(self.agent.strategy_sum, np.zeros(3))
        assert self.agent.iterations == 0

    def test_get_action_accumulates_strategy(self):
        """测试 get_action 将当前策略累加到策略表。"""
        action = self.agent.get_action()
        assert 0 <= action < 3
        np.testing.assert_array_almost_equal(self.agent.strategy_sum, np.full(3, 1.0 / 3))
        assert self.agent.iterations == 1

        self.agent.get_action()
        np.testing.assert_array_almost_equal(self.agent.strategy_sum, np.full(3, 2.0 / 3))
        assert self.agent.iterations == 2

    def test_regret_update(self):
        """测试反事实遗憾值更新。

        本方出石头、对手出布时实际收益为-2：
        改出石头的遗憾为0，改出布为2，改出剪刀为3。
        """
        self.agent.update_regrets(ROCK, PAPER)
        np.testing.assert_array_almost_equal(self.agent.regret_sum, [0.0, 2.0, 3.0])
        np.testing.assert_array_almost_equal(self.agent.get_strategy(), [0.0, 0.4, 0.6])

    def test_regret_update_accumulates(self):
        """测试遗憾值跨迭代累积。"""
        self.agent.update_regrets(ROCK, PAPER)
        # 本方出剪刀、对手出布时实际收益为1：遗憾为 [-3, -1, 0]
        self.agent.update_regrets(SCISSORS, PAPER)
        np.testing.assert_array_almost_equal(self.agent.regret_sum, [-3.0, 1.0, 3.0])
        np.testing.assert_array_almost_equal(self.agent.get_strategy(), [0.0, 0.25, 0.75])

    def test_non_positive_regrets_fall_back_to_uniform(self):
        """测试所有遗憾值非正时退回均匀分布。"""
        self.agent.regret_sum[:] = [-1.0, 0.0, -5.0]
        np.testing.assert_array_equal(self.agent.get_strategy(), np.full(3, 1.0 / 3))

    def test_own_action_regret_unchanged(self):
        """测试实际执行行动的遗憾增量总为0。"""
        for my_action in range(3):
            for opp_action in range(3):
                agent = RegretMatchingAgent(self.game)
                agent.update_regrets(my_action, opp_action)
                assert agent.regret_sum[my_action] == 0.0

    def test_illegal_action_rejected(self):
        """测试越界行动索引被拒绝。"""
        with pytest.raises(IllegalActionError):
            self.agent.update_regrets(3, 0)
        with pytest.raises(IllegalActionError):
            self.agent.update_regrets(0, -1)

    def test_average_strategy_before_training(self):
        """测试没有任何迭代时平均策略为均匀分布。"""
        np.testing.assert_array_equal(self.agent.get_average_strategy(), np.full(3, 1.0 / 3))

    def test_average_strategy(self):
        """测试平均策略为累积策略的归一化。"""
        self.agent.strategy_sum[:] = [1.0, 1.0, 2.0]
        np.testing.assert_array_almost_equal(self.agent.get_average_strategy(), [0.25, 0.25, 0.5])

    def test_reset(self):
        """测试重置状态。"""
        self.agent.get_action()
        self.agent.update_regrets(ROCK, PAPER)
        self.agent.reset()
        np.testing.assert_array_equal(self.agent.regret_sum, np.zeros(3))
        np.testing.assert_array_equal(self.agent.strategy_sum, np.zeros(3))
        assert self.agent.iterations == 0

    def test_empty_action_space_rejected(self):
        """测试行动数量为0时构造失败。"""
        with pytest.raises(InvalidParameterError):
            RegretMatchingAgent(_EmptyGame())

    def test_payoff_errors_propagate(self):
        """测试收益函数的异常在构造时直接传播。"""
        with pytest.raises(KeyError):
            RegretMatchingAgent(_FaultyGame())

    @given(
        updates=st.lists(
            st.tuples(st.integers(min_value=0, max_value=2), st.integers(min_value=0, max_value=2)),
            min_size=0, max_size=50
        )
    )
    @settings(max_examples=100)
    def test_strategy_is_distribution(self, updates):
        """属性测试：任意遗憾值更新序列后，当前策略都是有效概率分布。"""
        agent = RegretMatchingAgent(self.game)
        for my_action, opp_action in updates:
            agent.update_regrets(my_action, opp_action)
            agent.get_action()

        strategy = agent.get_strategy()
        assert np.all(strategy >= 0)
        assert np.sum(strategy) == pytest.approx(1.0)
        average = agent.get_average_strategy()
        assert np.all(average >= 0)
        assert np.sum(average) == pytest.approx(1.0)
