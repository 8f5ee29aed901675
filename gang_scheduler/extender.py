"""
extender.py
~~~~~~~~~~~
把 CustomScheduler 以 kube-scheduler HTTP extender 的形式暴露：
  POST /filter      → PreFilter（gang 准入）
  POST /prioritize  → Score + NormalizeScore，区间 [0, MAX_EXTENDER_PRIORITY]
  GET  /healthz
"""
from __future__ import annotations

import atexit
import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Dict, List

from flask import Flask, jsonify, request

from .schedule.constants import MAX_EXTENDER_PRIORITY, MIN_NODE_SCORE
from .schedule.model import Code, NodeScore
from .schedule.plugin import CustomScheduler
from .schedule.resource_types import WorkloadUnit

logger = logging.getLogger(__name__)


def _unit_from_args(body: Dict[str, Any]) -> WorkloadUnit:
    meta = (body.get("pod") or {}).get("metadata") or {}
    return WorkloadUnit(meta.get("name", ""),
                        meta.get("namespace") or "default",
                        meta.get("labels") or {})


def _uses_node_names(body: Dict[str, Any]) -> bool:
    # nodeCacheCapable 的 extender 只收到 nodenames；null 视为未提供
    return body.get("nodenames") is not None


def _node_names(body: Dict[str, Any]) -> List[str]:
    if _uses_node_names(body):
        return list(body["nodenames"])
    items = (body.get("nodes") or {}).get("items") or []
    return [n["metadata"]["name"] for n in items]


def _read_args():
    """返回 (ExtenderArgs, None) 或 (None, 400 响应)"""
    body = request.get_json(force=True, silent=True)
    if not isinstance(body, dict):
        logger.warning(f"rejecting extender request with a non-object body: {body!r:.80}")
        return None, (jsonify({"error": "extender args must be a JSON object"}), 400)
    return body, None


def create_app(plugin: CustomScheduler,
               pool: Executor | None = None,
               max_workers: int = 16) -> Flask:
    """
    pool 由调用方传入时，生命周期归调用方；否则自建并在进程退出时关闭。
    """
    if pool is None:
        pool = ThreadPoolExecutor(max_workers=max_workers,
                                  thread_name_prefix="score")
        atexit.register(pool.shutdown, wait=False)

    app = Flask(__name__)

    @app.get("/healthz")
    def healthz():
        return "ok"

    @app.post("/filter")
    def filter_nodes():
        body, error = _read_args()
        if error:
            return error
        unit = _unit_from_args(body)
        status = plugin.pre_filter(unit)
        result: Dict[str, Any] = {"failedNodes": {}, "error": ""}

        if status.code is Code.UNSCHEDULABLE:
            result["failedNodes"] = {n: status.reason for n in _node_names(body)}
            return jsonify(result)
        if status.code is Code.ERROR:
            result["error"] = status.reason
        if _uses_node_names(body):
            result["nodenames"] = body["nodenames"]
        else:
            result["nodes"] = body.get("nodes")
        return jsonify(result)

    @app.post("/prioritize")
    def prioritize_nodes():
        body, error = _read_args()
        if error:
            return error
        unit = _unit_from_args(body)
        names = _node_names(body)

        # 各节点独立打分，可并行
        results = list(pool.map(lambda n: (n, plugin.score(unit, n)), names))
        scores = [NodeScore(n, s) for n, (s, st) in results if st.is_success]
        failed = [n for n, (_, st) in results if not st.is_success]
        if failed:
            logger.warning(f"Pod {unit.full_name}: nodes excluded from ranking {failed}")

        plugin.normalize_score(unit, scores, MIN_NODE_SCORE, MAX_EXTENDER_PRIORITY)
        return jsonify([{"host": s.name, "score": s.score} for s in scores])

    return app
