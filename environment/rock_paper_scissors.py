"""Rock-paper-scissors variant with asymmetric payoffs.

Winning with paper pays double, so losing with rock against paper costs
double. The other two match-ups pay 1. The resulting equilibrium is not
uniform: rock 1/4, paper 1/4, scissors 1/2.
"""

from environment.game_model import MatrixGame


ROCK = 0
PAPER = 1
SCISSORS = 2

RPS_ACTIONS = ("rock", "paper", "scissors")

# 行玩家视角的收益表
RPS_PAYOFFS = (
    # rock  paper  scissors
    (0.0, -2.0, 1.0),    # rock
    (2.0, 0.0, -1.0),    # paper
    (-1.0, 1.0, 0.0),    # scissors
)

# 解析推导的均衡策略
RPS_EQUILIBRIUM = (0.25, 0.25, 0.5)


class RockPaperScissorsVariant(MatrixGame):
    """非对称收益的石头剪刀布。"""

    def __init__(self):
        super().__init__(RPS_ACTIONS, RPS_PAYOFFS, name="rps")
