"""
errors.py
~~~~~~~~~
插件内部的异常类型。plugin 层把它们转换成 Status(ERROR)，
与 Unschedulable（正常的拒绝结果）区分开。
"""


class SchedulerPluginError(Exception):
    """所有插件异常的基类"""


class ConfigError(SchedulerPluginError):
    """mode 非法，或 minAvailable label 无法解析"""


class UpstreamUnavailableError(SchedulerPluginError):
    """Pod 列表 / 节点快照查询失败"""


class NodeLookupError(SchedulerPluginError):
    """快照中找不到该节点"""

    def __init__(self, node_name: str, detail: str = ""):
        self.node_name = node_name
        msg = f"node {node_name} not found"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)
