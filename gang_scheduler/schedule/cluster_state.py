"""
cluster_state.py
~~~~~~~~~~~~~~~~
把 ClusterMonitor 提供的实时信息转换成 WorkloadUnit / NodeResourceState，
实现 lister_interface 中的两个接口；另提供内存版实现，
用于回放快照和测试。
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, Iterable, List

from kubernetes.utils import parse_quantity

from ..cluster.ClusterMonitor import ClusterMonitor
from .errors import NodeLookupError
from .lister_interface import (NodeInfoLister, PodLister, format_selector,
                               selector_matches)
from .resource_types import NodeResourceState, WorkloadUnit

logger = logging.getLogger(__name__)


# —— 基础解析 —— #
def _parse_mem(quantity) -> Decimal:
    """"512Mi" / "1Gi" / "1e9" → byte 数；None 视为 0"""
    if quantity is None:
        return Decimal(0)
    return parse_quantity(quantity)


def _memory_request(resources) -> Decimal:
    if resources is None or not resources.requests:
        return Decimal(0)
    return _parse_mem(resources.requests.get("memory"))


def pod_memory_request(pod) -> int:
    """
    与 NodeInfo 相同的计算方式：
        max(Σ containers, max(init containers)) + overhead
    """
    spec = pod.spec
    containers = sum((_memory_request(c.resources) for c in spec.containers or []),
                     Decimal(0))
    init_max = max((_memory_request(c.resources) for c in spec.init_containers or []),
                   default=Decimal(0))
    total = max(containers, init_max)
    if spec.overhead:
        total += _parse_mem(spec.overhead.get("memory"))
    return int(total)


def to_workload_unit(pod) -> WorkloadUnit:
    meta = pod.metadata
    return WorkloadUnit(meta.name, meta.namespace or "default", meta.labels or {})


# —— K8s 实现 —— #
class KubePodLister(PodLister):
    def __init__(self, monitor: ClusterMonitor):
        self.monitor = monitor

    def list(self, selector: Dict[str, str]) -> List[WorkloadUnit]:
        return [to_workload_unit(p)
                for p in self.monitor.list_pods(format_selector(selector))]


class KubeNodeInfoLister(NodeInfoLister):
    """
    每次 get() 直接读 API Server：
      allocatable = node.status.allocatable["memory"]
      requested   = Σ pod_memory_request(非结束 Pod)
    """

    def __init__(self, monitor: ClusterMonitor):
        self.monitor = monitor

    def get(self, node_name: str) -> NodeResourceState:
        node = self.monitor.read_node(node_name)
        allocatable = (node.status.allocatable or {}) if node.status else {}
        if "memory" not in allocatable:
            raise NodeLookupError(node_name, "node reports no allocatable memory")
        requested = sum(pod_memory_request(p)
                        for p in self.monitor.list_pods_on_node(node_name))
        state = NodeResourceState(node_name,
                                  int(_parse_mem(allocatable["memory"])),
                                  requested)
        logger.debug(f"snapshot {state}")
        return state


# —— 内存实现 —— #
class StaticPodLister(PodLister):
    """固定的 Pod 列表"""

    def __init__(self, units: Iterable[WorkloadUnit] = ()):
        self.units: List[WorkloadUnit] = list(units)

    def list(self, selector: Dict[str, str]) -> List[WorkloadUnit]:
        return [u for u in self.units if selector_matches(u.labels, selector)]


class SnapshotNodeInfoLister(NodeInfoLister):
    """一次调度周期内不变的节点快照"""

    def __init__(self, nodes: Iterable[NodeResourceState] = ()):
        self.nodes: Dict[str, NodeResourceState] = {n.name: n for n in nodes}

    def get(self, node_name: str) -> NodeResourceState:
        try:
            return self.nodes[node_name]
        except KeyError:
            raise NodeLookupError(node_name) from None
