"""根据求解配置创建博弈实例。"""

from typing import Dict

from models.core import SolverConfig, GameType
from environment.game_model import GameModel, MatrixGame
from environment.rock_paper_scissors import RockPaperScissorsVariant
from environment.colonel_blotto import ColonelBlotto
from utils.exceptions import MissingParameterError
from utils.logger import get_environment_logger


# 博弈类型 -> 简要说明（供CLI列出）
GAME_DESCRIPTIONS: Dict[str, str] = {
    GameType.RPS.value: "石头剪刀布变体（布赢石头收益翻倍）",
    GameType.BLOTTO.value: "布洛托上校兵力分配博弈（阵地价值与总兵力可配置）",
    GameType.MATRIX.value: "自定义零和矩阵博弈（需在配置中给出 actions 与 payoffs）",
}


def create_game(config: SolverConfig) -> GameModel:
    """根据配置创建博弈。

    Args:
        config: 求解配置

    Returns:
        已验证的博弈实例

    Raises:
        MissingParameterError: 矩阵博弈缺少收益表
        InvalidGameDefinitionError: 博弈定义无效
    """
    logger = get_environment_logger()
    game_type = config.game_type

    if game_type == GameType.RPS:
        game: GameModel = RockPaperScissorsVariant()
    elif game_type == GameType.BLOTTO:
        game = ColonelBlotto(config.tower_values, config.num_troops)
    else:
        if not config.actions:
            raise MissingParameterError("actions")
        if not config.payoffs:
            raise MissingParameterError("payoffs")
        game = MatrixGame(config.actions, config.payoffs)

    game.validate()
    logger.info(f"已创建博弈 {game.name}，行动数量: {game.num_actions}")
    return game
