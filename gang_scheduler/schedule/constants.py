"""
调度插件常量与全局参数
"""
# 插件名（与 kube-scheduler 配置中的 name 对应）
PLUGIN_NAME: str = "CustomScheduler"

# Pod label
GROUP_NAME_LABEL: str = "podGroup"
MIN_AVAILABLE_LABEL: str = "minAvailable"

# 打分模式
LEAST_MODE: str = "Least"
MOST_MODE: str = "Most"
DEFAULT_MODE: str = LEAST_MODE

# Least 模式: score = LEAST_MODE_NUMERATOR // headroom
LEAST_MODE_NUMERATOR: int = 100_000_000_000
# headroom <= 0 时的分数（int64 上限）
MAX_RAW_SCORE: int = 2 ** 63 - 1

# 框架归一化区间
MIN_NODE_SCORE: int = 0
MAX_NODE_SCORE: int = 100
# HTTP extender 的优先级上限
MAX_EXTENDER_PRIORITY: int = 10
