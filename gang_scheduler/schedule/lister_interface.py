"""
lister_interface.py
~~~~~~~~~~~~~~~~~~~
宿主调度器提供给插件的两个查询接口。
插件**只依赖这两个接口**，不直接访问 K8s API。
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Mapping

from .resource_types import NodeResourceState, WorkloadUnit


def format_selector(selector: Mapping[str, str]) -> str:
    """{"podGroup": "A"} → "podGroup=A" """
    return ",".join(f"{k}={v}" for k, v in sorted(selector.items()))


def selector_matches(labels: Mapping[str, str], selector: Mapping[str, str]) -> bool:
    """精确匹配：selector 的每个 key 都必须存在且值相等"""
    return all(k in labels and labels[k] == v for k, v in selector.items())


class PodLister(ABC):
    """
    实时 Pod 列表（宿主的 informer / lister）
    """

    @abstractmethod
    def list(self, selector: Dict[str, str]) -> List[WorkloadUnit]:
        """
        Parameters
        ----------
        selector : Dict[str, str]
            精确匹配的 label selector。

        Returns
        -------
        units : List[WorkloadUnit]
            当前可见的匹配 Pod；查询失败抛 UpstreamUnavailableError。
        """
        raise NotImplementedError


class NodeInfoLister(ABC):
    """
    节点快照（宿主的 SnapshotSharedLister().NodeInfos()）
    """

    @abstractmethod
    def get(self, node_name: str) -> NodeResourceState:
        """未知节点抛 NodeLookupError"""
        raise NotImplementedError


@dataclass(frozen=True)
class Handle:
    """插件构造时拿到的宿主句柄"""
    pod_lister: PodLister
    node_lister: NodeInfoLister
