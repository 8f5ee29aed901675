"""
scorer.py
~~~~~~~~~
按节点内存余量打分；无状态、可重入，可被多线程同时调用。
  • Least：LEAST_MODE_NUMERATOR // headroom，余量越小分越高（bin-packing）
  • Most ：headroom，余量越大分越高（spreading）
"""
from __future__ import annotations

import logging

from .constants import LEAST_MODE_NUMERATOR, MAX_RAW_SCORE
from .model import ScoreMode
from .resource_types import NodeResourceState

logger = logging.getLogger(__name__)


def raw_score(headroom: int, mode: ScoreMode) -> int:
    if mode is ScoreMode.MOST:
        return headroom
    if headroom <= 0:
        return MAX_RAW_SCORE
    return LEAST_MODE_NUMERATOR // headroom


def score_node(state: NodeResourceState, mode: ScoreMode) -> int:
    headroom = state.headroom
    logger.debug(f"node {state.name}: allocatable={state.allocatable_memory}, "
                 f"requested={state.requested_memory}, headroom={headroom}")
    if headroom <= 0:
        logger.warning(f"node {state.name} has non-positive memory headroom {headroom}")
    score = raw_score(headroom, mode)
    logger.debug(f"Node {state.name} score is {score} (mode={mode.value}).")
    return score
