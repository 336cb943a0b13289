"""遗憾匹配自我对弈训练组件。

本模块提供求解所需的核心组件：
- ActionSampler: 行动采样器（逆累积分布采样）
- RegretMatchingAgent: 遗憾匹配智能体
- SelfPlayTrainer: 自我对弈训练器
- run_seeds / SeedRunResult: 多种子并行训练
"""

from training.action_sampler import ActionSampler
from training.regret_agent import RegretMatchingAgent
from training.self_play_trainer import SelfPlayTrainer
from training.parallel_runner import run_seeds, train_single_seed, SeedRunResult

__all__ = [
    'ActionSampler',
    'RegretMatchingAgent',
    'SelfPlayTrainer',
    'run_seeds',
    'train_single_seed',
    'SeedRunResult',
]
