"""
admission.py
~~~~~~~~~~~~
Gang 准入：同组 Pod 数 < minAvailable 时拒绝进入打分阶段。

注意：minAvailable 读自**当前被调度的 Pod**，而不是组级别的配置；
同组不同 Pod 可能声明不同阈值，判定以当前 Pod 为准。
"""
from __future__ import annotations

import logging

from .lister_interface import PodLister
from .model import GangRequest, Status
from .resource_types import WorkloadUnit

logger = logging.getLogger(__name__)


def admit(unit: WorkloadUnit, pod_lister: PodLister) -> Status:
    """
    只读判定，不修改任何共享状态。
    label 非法抛 ConfigError；列表查询失败抛 UpstreamUnavailableError。
    """
    request = GangRequest.from_labels(unit.labels)
    logger.debug(f"groupLabel: {request.group!r}, minAvailable: {request.min_available}")
    if not request.group:
        # 空组名会匹配所有 podGroup="" 的 Pod
        logger.warning(f"Pod {unit.full_name} has an empty podGroup label")

    group_size = len(pod_lister.list(request.selector))
    if group_size < request.min_available:
        logger.info(f"Pod {unit.full_name}: group {request.group!r} not available "
                    f"({group_size}/{request.min_available})")
        return Status.unschedulable(
            f"Pod cannot be scheduled because the group '{request.group}' "
            f"has only {group_size} pods, but needs {request.min_available}")
    return Status.success()
