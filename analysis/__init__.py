"""策略分析模块。

- EquilibriumAnalyzer: 均衡质量分析器（对战收益、最佳响应、可剥削度）
"""

from analysis.equilibrium_analyzer import EquilibriumAnalyzer

__all__ = ['EquilibriumAnalyzer']
