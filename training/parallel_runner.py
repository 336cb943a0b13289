"""多种子并行训练模块 - 在多个进程中运行相互独立的自我对弈训练。

同一次训练内部的迭代必须串行执行（遗憾值与策略逐次累加），
但不同种子的训练之间不共享任何状态，可以直接并行。
每个种子的结果与串行执行同一种子的结果逐位相同。
"""

import multiprocessing as mp
import traceback
from dataclasses import dataclass
from typing import List, Optional, Sequence

from environment.game_factory import create_game
from models.core import SolverConfig, TrainingSummary
from training.self_play_trainer import SelfPlayTrainer
from utils.exceptions import WorkerProcessError, InvalidParameterError
from utils.logger import get_training_logger


@dataclass
class SeedRunResult:
    """单个种子的训练结果。

    Attributes:
        seed: 随机种子
        summary: 训练摘要，失败时为 None
        error: 如果发生错误，包含错误信息
    """
    seed: int
    summary: Optional[TrainingSummary] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def train_single_seed(config: SolverConfig, seed: int) -> TrainingSummary:
    """按配置以指定种子完成一次完整训练。"""
    game = create_game(config)
    trainer = SelfPlayTrainer.from_game(
        game, seed=seed, best_response_floor=config.best_response_floor
    )
    trainer.train(config.iterations)
    return trainer.summarize()


def _seed_worker(args) -> SeedRunResult:
    """工作进程函数 - 失败时把错误信息带回主进程。"""
    config, seed = args
    try:
        return SeedRunResult(seed=seed, summary=train_single_seed(config, seed))
    except Exception as e:
        error_msg = f"{type(e).__name__}: {e}\n{traceback.format_exc()}"
        return SeedRunResult(seed=seed, error=error_msg)


def run_seeds(config: SolverConfig, seeds: Sequence[int],
              num_workers: Optional[int] = None,
              raise_on_error: bool = True) -> List[SeedRunResult]:
    """为每个种子运行一次独立训练。

    Args:
        config: 求解配置（其中的 seed 被忽略）
        seeds: 随机种子列表
        num_workers: 工作进程数，None 时使用 config.num_workers；为1时在当前进程内串行执行
        raise_on_error: 任一种子失败时是否抛出 WorkerProcessError

    Returns:
        按种子顺序排列的结果列表

    Raises:
        InvalidParameterError: 种子列表为空或工作进程数不为正
        WorkerProcessError: raise_on_error 为真且某个种子训练失败
    """
    logger = get_training_logger()
    seeds = list(seeds)
    if len(seeds) == 0:
        raise InvalidParameterError("seeds", seeds, "至少需要一个种子")
    if num_workers is None:
        num_workers = config.num_workers
    if num_workers <= 0:
        raise InvalidParameterError("num_workers", num_workers, "工作进程数必须为正整数")

    tasks = [(config, seed) for seed in seeds]
    num_workers = min(num_workers, len(seeds))
    logger.info(f"开始多种子训练: 种子数={len(seeds)}, 工作进程数={num_workers}")

    if num_workers == 1:
        results = [_seed_worker(task) for task in tasks]
    else:
        with mp.Pool(processes=num_workers) as pool:
            results = pool.map(_seed_worker, tasks)

    failed = [r for r in results if not r.ok]
    for result in failed:
        logger.error(f"种子 {result.seed} 训练失败: {result.error}")
    if failed and raise_on_error:
        raise WorkerProcessError(failed[0].seed, failed[0].error)

    return results
