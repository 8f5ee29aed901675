"""
resource_types.py
~~~~~~~~~~~~~~~~~
轻量级 WorkloadUnit / NodeResourceState 抽象，只保留插件所需字段。
"""
from __future__ import annotations
from typing import Dict


class WorkloadUnit:
    """Kubernetes Pod 的极简描述（只读 name / namespace / labels）"""
    __slots__ = ("name", "namespace", "labels")

    def __init__(self,
                 name: str,
                 namespace: str = "default",
                 labels: Dict[str, str] | None = None):
        self.name = name
        self.namespace = namespace
        self.labels = dict(labels or {})

    @property
    def full_name(self) -> str:
        return f"{self.namespace}/{self.name}"

    def __hash__(self):
        return hash(self.full_name)

    def __eq__(self, other):
        if not isinstance(other, WorkloadUnit):
            return NotImplemented
        return self.full_name == other.full_name

    def __repr__(self):
        return f"WorkloadUnit({self.full_name}, labels={self.labels})"


class NodeResourceState:
    """节点内存快照：allocatable / requested，单位 byte"""
    __slots__ = ("name", "allocatable_memory", "requested_memory")

    def __init__(self,
                 name: str,
                 allocatable_memory: int,
                 requested_memory: int = 0):
        self.name = name
        self.allocatable_memory = int(allocatable_memory)
        self.requested_memory = int(requested_memory)

    # —— 余量 —— #
    @property
    def headroom(self) -> int:
        """allocatable - requested；不做截断，可能为 0 或负数"""
        return self.allocatable_memory - self.requested_memory

    def __repr__(self):
        return (f"NodeResourceState({self.name}, "
                f"mem={self.requested_memory}/{self.allocatable_memory})")
