#!/usr/bin/env python3
"""遗憾匹配纳什均衡求解器命令行界面。

本模块提供命令行接口，支持以下功能：
- train: 运行自我对弈训练并输出平均策略、期望收益与可剥削度
- games: 列出可求解的博弈
- init-config: 生成默认配置文件

使用示例：
    python cli.py train --game rps --iterations 50000
    python cli.py train --game blotto --tower-values 1 2 --troops 5
    python cli.py train --config config.json --seeds 1 2 3 --workers 3
    python cli.py games
    python cli.py init-config --output config.json
"""

import argparse
import sys
from dataclasses import asdict
from typing import Optional, List

import numpy as np
from tabulate import tabulate

from models.core import SolverConfig
from environment.game_factory import create_game, GAME_DESCRIPTIONS
from environment.game_model import GameModel
from training.self_play_trainer import SelfPlayTrainer
from training.parallel_runner import run_seeds
from utils.config_manager import ConfigManager
from utils.exceptions import SolverError
from utils.logger import configure_logging, LOG_LEVELS


def create_parser() -> argparse.ArgumentParser:
    """创建命令行参数解析器。

    Returns:
        配置好的ArgumentParser对象
    """
    parser = argparse.ArgumentParser(
        prog='regret-solver',
        description='遗憾匹配纳什均衡求解器 - 通过自我对弈求解双人零和同时行动博弈',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
示例:
  %(prog)s train --game rps --iterations 50000
  %(prog)s train --game blotto --tower-values 1 2 --troops 5
  %(prog)s train --config config.json --seeds 1 2 3 --workers 3
  %(prog)s --log-level INFO --log-file logs/solver.log train --game rps
  %(prog)s games
        '''
    )
    parser.add_argument(
        '--log-level',
        type=str.upper,
        default='WARNING',
        choices=list(LOG_LEVELS.keys()),
        help='日志级别（默认: WARNING）'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        help='同时将日志写入该文件（按大小轮转）'
    )
    parser.add_argument(
        '--detailed-log',
        action='store_true',
        help='日志格式中包含源文件名和行号'
    )

    subparsers = parser.add_subparsers(dest='command', help='可用命令')

    # train 子命令
    train_parser = subparsers.add_parser(
        'train',
        help='运行自我对弈训练',
        description='运行遗憾匹配自我对弈训练并报告平均策略'
    )
    train_parser.add_argument(
        '--config', '-c',
        type=str,
        help='求解配置文件路径（JSON格式）'
    )
    train_parser.add_argument(
        '--game', '-g',
        type=str,
        choices=sorted(GAME_DESCRIPTIONS.keys()),
        help='博弈类型（覆盖配置文件中的值）'
    )
    train_parser.add_argument(
        '--iterations', '-n',
        type=int,
        help='迭代次数（覆盖配置文件中的值）'
    )
    train_parser.add_argument(
        '--seed', '-s',
        type=int,
        help='随机种子（覆盖配置文件中的值）'
    )
    train_parser.add_argument(
        '--tower-values',
        type=int,
        nargs='+',
        help='布洛托博弈的阵地价值'
    )
    train_parser.add_argument(
        '--troops',
        type=int,
        dest='num_troops',
        help='布洛托博弈的总兵力'
    )
    train_parser.add_argument(
        '--true-best-response',
        action='store_true',
        help='最佳响应从负无穷开始扫描（默认下限为0）'
    )
    train_parser.add_argument(
        '--seeds',
        type=int,
        nargs='+',
        help='以多个种子分别独立训练'
    )
    train_parser.add_argument(
        '--workers', '-w',
        type=int,
        dest='num_workers',
        help='多种子训练的工作进程数'
    )
    train_parser.add_argument(
        '--top',
        type=int,
        default=0,
        help='只显示概率最高的前N个行动（默认显示全部）'
    )

    # games 子命令
    subparsers.add_parser(
        'games',
        help='列出可求解的博弈',
        description='列出可求解的博弈类型'
    )

    # init-config 子命令
    init_parser = subparsers.add_parser(
        'init-config',
        help='生成默认配置文件',
        description='将默认求解配置写入JSON文件'
    )
    init_parser.add_argument(
        '--output', '-o',
        type=str,
        default='config.json',
        help='配置文件输出路径（默认: config.json）'
    )

    return parser


def _build_config(args: argparse.Namespace) -> SolverConfig:
    """由配置文件与命令行覆盖项构建求解配置。"""
    config_manager = ConfigManager()

    if args.config:
        base = asdict(config_manager.load_config(args.config))
    else:
        base = {}

    overrides = {
        'game': args.game,
        'iterations': args.iterations,
        'seed': args.seed,
        'tower_values': args.tower_values,
        'num_troops': args.num_troops,
        'num_workers': args.num_workers,
    }
    merged = config_manager.merge_configs(base, overrides)
    if args.true_best_response:
        merged['best_response_floor'] = None

    return config_manager.from_dict(merged)


def format_strategy_table(game: GameModel, strategy: np.ndarray, top: int = 0) -> str:
    """按概率降序格式化策略表。

    Args:
        game: 博弈模型（用于行动标签）
        strategy: 行动概率分布
        top: 只保留前N行，0表示全部

    Returns:
        表格字符串
    """
    order = sorted(range(len(strategy)), key=lambda i: strategy[i], reverse=True)
    if top > 0:
        order = order[:top]
    rows = [[game.action_label(i), f"{strategy[i]:.2%}"] for i in order]
    return tabulate(rows, headers=['行动', '频率'], tablefmt='simple')


def cmd_train(args: argparse.Namespace) -> int:
    """执行训练命令。

    Args:
        args: 解析后的命令行参数

    Returns:
        退出码（0表示成功）
    """
    try:
        config = _build_config(args)
        game = create_game(config)
    except (FileNotFoundError, SolverError) as e:
        print(f"错误: {e}", file=sys.stderr)
        return 1

    if args.seeds:
        return _train_seeds(config, args.seeds)

    trainer = SelfPlayTrainer.from_game(
        game, seed=config.seed, best_response_floor=config.best_response_floor
    )
    trainer.train(config.iterations)

    print(f"博弈: {game.name}  行动数量: {game.num_actions}  "
          f"迭代次数: {config.iterations}  种子: {config.seed}")
    print("\n行动与策略（频率）:")
    print(format_strategy_table(game, trainer.get_average_strategy_p1(), args.top))

    print(f"\n玩家1 期望收益: {trainer.get_ev(0):.6f}")
    print(f"对手最佳响应收益: {trainer.get_best_response_ev(0):.6f}")
    print(f"玩家1 可剥削度: {trainer.get_exploitability(0):.6f}")
    return 0


def _train_seeds(config: SolverConfig, seeds: List[int]) -> int:
    """多种子训练并输出汇总表。"""
    try:
        results = run_seeds(config, seeds)
    except SolverError as e:
        print(f"错误: {e}", file=sys.stderr)
        return 1

    rows = []
    for result in results:
        summary = result.summary
        rows.append([
            result.seed,
            f"{summary.ev[0]:.6f}",
            f"{summary.exploitability[0]:.6f}",
            f"{summary.nash_conv:.6f}",
        ])
    print(f"博弈: {config.game}  迭代次数: {config.iterations}  种子数: {len(seeds)}")
    print(tabulate(rows, headers=['种子', '玩家1期望收益', '玩家1可剥削度', 'NashConv'],
                   tablefmt='simple'))
    return 0


def cmd_games(args: argparse.Namespace) -> int:
    """列出可求解的博弈。"""
    config_manager = ConfigManager()
    rows = []
    for name, description in sorted(GAME_DESCRIPTIONS.items()):
        if name == 'matrix':
            num_actions = '-'
        else:
            num_actions = create_game(config_manager.from_dict({'game': name})).num_actions
        rows.append([name, num_actions, description])
    print(tabulate(rows, headers=['博弈', '默认行动数', '说明'], tablefmt='simple'))
    return 0


def cmd_init_config(args: argparse.Namespace) -> int:
    """将默认配置写入文件。"""
    config_manager = ConfigManager()
    config_manager.save_config(config_manager.get_default_config(), args.output)
    print(f"默认配置已写入: {args.output}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """CLI主入口点。

    Args:
        argv: 命令行参数列表（如果为None则使用sys.argv）

    Returns:
        退出码
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level, log_file=args.log_file, detailed=args.detailed_log)

    # 如果没有指定命令，显示帮助
    if not args.command:
        parser.print_help()
        return 0

    command_handlers = {
        'train': cmd_train,
        'games': cmd_games,
        'init-config': cmd_init_config,
    }

    handler = command_handlers.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
