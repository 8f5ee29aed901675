"""
normalizer.py
~~~~~~~~~~~~~
把原始分线性映射到 [min_out, max_out]，原地修改。
"""
from __future__ import annotations

from typing import List

from .constants import MAX_NODE_SCORE, MIN_NODE_SCORE
from .model import NodeScore


def normalize(scores: List[NodeScore],
              min_out: int = MIN_NODE_SCORE,
              max_out: int = MAX_NODE_SCORE) -> None:
    if not scores:
        return

    min_score = max_score = scores[0].score
    for ns in scores[1:]:
        if ns.score < min_score:
            min_score = ns.score
        if ns.score > max_score:
            max_score = ns.score

    # 全部相等（含单节点）：一律给最高分
    if min_score == max_score:
        for ns in scores:
            ns.score = max_out
        return

    score_range = max_score - min_score
    frame_range = max_out - min_out
    for ns in scores:
        # 分子非负，// 与截断除法一致
        ns.score = (ns.score - min_score) * frame_range // score_range + min_out
