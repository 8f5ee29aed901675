"""
plugin.py
~~~~~~~~~
调度插件主模块，挂在宿主调度流程的两个扩展点：
  • PreFilter：gang 准入（admission.admit）
  • Score    ：按内存余量打分（scorer.score_node），随后 NormalizeScore 归一化
异常在这里统一转换成 Status(ERROR)，不重试、不吞掉。
"""
from __future__ import annotations

import logging
from typing import Any, List, Mapping, Tuple

from . import admission, normalizer, scorer
from .constants import MAX_NODE_SCORE, MIN_NODE_SCORE, PLUGIN_NAME
from .errors import SchedulerPluginError
from .lister_interface import Handle
from .model import NodeScore, SchedulerArgs, Status, load_args
from .resource_types import WorkloadUnit


class CustomScheduler:
    """
    Parameters
    ----------
    handle : Handle
        宿主提供的 Pod lister + 节点快照。
    args : SchedulerArgs
        构造参数（mode），之后不可变。
    """

    def __init__(self, handle: Handle, args: SchedulerArgs | None = None):
        self.handle = handle
        self.args = args or SchedulerArgs()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.logger.info(f"Custom scheduler runs with the mode: {self.args.mode.value}.")

    @classmethod
    def new(cls, raw_args: bytes | str | Mapping[str, Any] | None,
            handle: Handle) -> "CustomScheduler":
        """按宿主传入的原始 args 构造；mode 非法时抛 ConfigError，插件拒绝初始化"""
        return cls(handle, load_args(raw_args))

    def name(self) -> str:
        return PLUGIN_NAME

    @property
    def mode(self):
        return self.args.mode

    # ──────────────────────────────────────────────
    # PreFilter
    # ──────────────────────────────────────────────
    def pre_filter(self, unit: WorkloadUnit) -> Status:
        self.logger.info(f"Pod {unit.name} is in Prefilter phase.")
        try:
            return admission.admit(unit, self.handle.pod_lister)
        except SchedulerPluginError as e:
            self.logger.error(f"Pod {unit.name} prefilter failed: {e}")
            return Status.error(str(e))

    def pre_filter_extensions(self):
        return None

    # ──────────────────────────────────────────────
    # Score
    # ──────────────────────────────────────────────
    def score(self, unit: WorkloadUnit, node_name: str) -> Tuple[int, Status]:
        self.logger.info(f"Pod {unit.name} is in Score phase. "
                         f"Calculate the score of Node {node_name}.")
        try:
            state = self.handle.node_lister.get(node_name)
        except SchedulerPluginError as e:
            self.logger.error(f"Failed to get node info for node {node_name}: {e}")
            return 0, Status.error(str(e))
        return scorer.score_node(state, self.args.mode), Status.success()

    def normalize_score(self, unit: WorkloadUnit, scores: List[NodeScore],
                        min_out: int = MIN_NODE_SCORE,
                        max_out: int = MAX_NODE_SCORE) -> Status:
        normalizer.normalize(scores, min_out, max_out)
        self.logger.debug(f"Pod {unit.name} normalized scores: "
                          f"{[(s.name, s.score) for s in scores]}")
        return Status.success()

    def score_extensions(self) -> "CustomScheduler":
        return self
