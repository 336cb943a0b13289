"""配置管理器模块 - 处理求解配置的加载、保存和验证。"""

import json
import math
from dataclasses import asdict
from pathlib import Path
from typing import List, Dict, Any, Union

from models.core import SolverConfig, GameType
from utils.exceptions import ConfigFileError, ConfigValidationError


# 默认配置值
DEFAULT_CONFIG = {
    'game': 'rps',
    'iterations': 50000,
    'seed': 42,
    'tower_values': [1, 2],
    'num_troops': 5,
    'actions': [],
    'payoffs': [],
    'best_response_floor': 0.0,
    'num_workers': 1,
}

# 可选参数列表（有默认值的参数）
OPTIONAL_PARAMS = list(DEFAULT_CONFIG.keys())


def _is_int(value: Any) -> bool:
    # bool 是 int 的子类，需要排除
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigManager:
    """配置管理器 - 负责求解配置的加载、保存和验证。

    提供以下功能：
    - 从JSON文件加载配置
    - 将配置保存为JSON文件
    - 验证配置参数的有效性
    - 为缺失的可选参数应用默认值
    """

    def load_config(self, path: Union[str, Path]) -> SolverConfig:
        """从JSON文件加载求解配置。

        Args:
            path: JSON配置文件的路径

        Returns:
            SolverConfig: 加载的求解配置对象

        Raises:
            FileNotFoundError: 配置文件不存在
            ConfigFileError: JSON格式无效或顶层不是对象
            ConfigValidationError: 配置参数无效
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"配置文件不存在: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config_dict = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigFileError(str(path), f"配置文件不是有效的JSON: {path} ({e})") from e

        if not isinstance(config_dict, dict):
            raise ConfigFileError(str(path), f"配置文件顶层必须是JSON对象: {path}")

        return self.from_dict(config_dict)

    def from_dict(self, config_dict: Dict[str, Any]) -> SolverConfig:
        """由字典创建配置（先补全默认值，再验证）。

        Raises:
            ConfigValidationError: 配置参数无效
        """
        config_dict = self._apply_defaults(config_dict)

        errors = self.validate_config(config_dict)
        if errors:
            raise ConfigValidationError(errors)

        return SolverConfig(**config_dict)

    def save_config(self, config: SolverConfig, path: Union[str, Path]) -> None:
        """将求解配置保存为JSON文件。

        Args:
            config: 要保存的配置对象
            path: 保存的目标路径
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(asdict(config), f, indent=2, ensure_ascii=False)

    def validate_config(self, config: Union[SolverConfig, Dict[str, Any]]) -> List[str]:
        """验证配置参数的有效性。

        Args:
            config: 要验证的配置（可以是SolverConfig对象或字典）

        Returns:
            List[str]: 错误信息列表，如果配置有效则返回空列表
        """
        errors = []

        if isinstance(config, SolverConfig):
            config_dict = asdict(config)
        else:
            config_dict = config

        unknown = sorted(set(config_dict) - set(OPTIONAL_PARAMS))
        for name in unknown:
            errors.append(f"{name}: 未知的配置参数")

        # 验证game（博弈类型）
        game = config_dict.get('game')
        valid_games = [g.value for g in GameType]
        if 'game' in config_dict and game not in valid_games:
            errors.append(f"game: 必须是 {valid_games} 之一，当前值为 {game!r}")

        # 验证iterations（迭代次数）
        if 'iterations' in config_dict:
            it = config_dict['iterations']
            if not _is_int(it):
                errors.append(f"iterations: 必须是整数类型，当前类型为 {type(it).__name__}")
            elif it <= 0:
                errors.append(f"iterations: 必须为正整数，当前值为 {it}")

        # 验证seed（随机种子）
        if 'seed' in config_dict:
            seed = config_dict['seed']
            if not _is_int(seed):
                errors.append(f"seed: 必须是整数类型，当前类型为 {type(seed).__name__}")
            elif seed < 0:
                errors.append(f"seed: 必须为非负整数，当前值为 {seed}")

        # 验证num_workers（工作进程数）
        if 'num_workers' in config_dict:
            nw = config_dict['num_workers']
            if not _is_int(nw):
                errors.append(f"num_workers: 必须是整数类型，当前类型为 {type(nw).__name__}")
            elif nw <= 0:
                errors.append(f"num_workers: 必须为正整数，当前值为 {nw}")

        # 验证best_response_floor（最佳响应初始最大值）
        if 'best_response_floor' in config_dict:
            floor = config_dict['best_response_floor']
            if floor is not None and not _is_number(floor):
                errors.append(
                    f"best_response_floor: 必须是数值或null，当前类型为 {type(floor).__name__}"
                )
            elif floor is not None and not math.isfinite(floor):
                errors.append(f"best_response_floor: 必须是有限数值，当前值为 {floor}")

        if game == GameType.BLOTTO.value:
            errors.extend(self._validate_blotto_config(config_dict))
        elif game == GameType.MATRIX.value:
            errors.extend(self._validate_matrix_config(config_dict))

        return errors

    def _validate_blotto_config(self, config: Dict[str, Any]) -> List[str]:
        """验证布洛托博弈参数。"""
        errors = []

        tv = config.get('tower_values')
        if not isinstance(tv, list):
            errors.append(f"tower_values: 必须是列表类型，当前类型为 {type(tv).__name__}")
        elif len(tv) == 0:
            errors.append("tower_values: 不能为空列表")
        else:
            for i, value in enumerate(tv):
                if not _is_int(value):
                    errors.append(f"tower_values[{i}]: 必须是整数，当前类型为 {type(value).__name__}")
                elif value <= 0:
                    errors.append(f"tower_values[{i}]: 必须为正整数，当前值为 {value}")

        nt = config.get('num_troops')
        if not _is_int(nt):
            errors.append(f"num_troops: 必须是整数类型，当前类型为 {type(nt).__name__}")
        elif nt < 0:
            errors.append(f"num_troops: 必须为非负整数，当前值为 {nt}")

        return errors

    def _validate_matrix_config(self, config: Dict[str, Any]) -> List[str]:
        """验证矩阵博弈参数（只检查形状与类型，零和性质在创建博弈时检查）。"""
        errors = []

        actions = config.get('actions')
        payoffs = config.get('payoffs')
        if not isinstance(actions, list) or len(actions) == 0:
            errors.append("actions: 矩阵博弈必须提供非空的行动列表")
            return errors
        if not isinstance(payoffs, list) or len(payoffs) != len(actions):
            errors.append(f"payoffs: 必须是 {len(actions)} 行的收益表")
            return errors

        for i, row in enumerate(payoffs):
            if not isinstance(row, list) or len(row) != len(actions):
                errors.append(f"payoffs[{i}]: 必须包含 {len(actions)} 个收益值")
                continue
            for j, value in enumerate(row):
                if not _is_number(value):
                    errors.append(f"payoffs[{i}][{j}]: 必须是数值类型，当前类型为 {type(value).__name__}")

        return errors

    def _apply_defaults(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """为缺失的可选参数应用默认值。"""
        result = dict(config_dict)
        for param, default_value in DEFAULT_CONFIG.items():
            if param not in result:
                # 列表默认值需要复制，避免共享
                result[param] = list(default_value) if isinstance(default_value, list) else default_value
        return result

    def get_default_config(self) -> SolverConfig:
        """获取默认配置。"""
        return self.from_dict({})

    def merge_configs(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """合并两个配置字典，override中值不为None的项会覆盖base中的值。

        Args:
            base: 基础配置字典
            override: 覆盖配置字典

        Returns:
            Dict[str, Any]: 合并后的配置字典
        """
        result = dict(base)
        result.update({k: v for k, v in override.items() if v is not None})
        return result
