import argparse
import logging
import os
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from .cluster.ClusterMonitor import DEFAULT_KUBECONFIG, ClusterMonitor
from .extender import create_app
from .schedule.cluster_state import KubeNodeInfoLister, KubePodLister
from .schedule.errors import ConfigError
from .schedule.lister_interface import Handle
from .schedule.model import load_args
from .schedule.plugin import CustomScheduler

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Gang scheduler extender")
    parser.add_argument("--mode", type=str, default=None, help="打分模式: Least / Most")
    parser.add_argument("--args-file", type=str, default=None,
                        help='plugin args JSON 文件，格式 {"mode": "Least"}')
    parser.add_argument("--kubeconfig", type=str, default=DEFAULT_KUBECONFIG, help="kubeconfig 路径")
    parser.add_argument("--host", type=str, default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8888)
    parser.add_argument("--workers", type=int, default=16, help="并行打分线程数")
    parser.add_argument("--log", action="store_true", help="启用日志记录到文件")
    return parser.parse_args(argv)


def setup_logging(to_file: bool):
    if to_file:
        os.makedirs("logs", exist_ok=True)
        log_file = time.strftime("logs/%Y%m%d-%H%M%S.log")
        logging.basicConfig(filename=log_file, level=logging.INFO,
                            encoding="utf-8", format=LOG_FORMAT)
    else:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)


def raw_plugin_args(args):
    """--mode 优先于 --args-file；都没有时返回 None（默认 Least）"""
    if args.mode is not None:
        return {"mode": args.mode}
    if args.args_file:
        return Path(args.args_file).read_text(encoding="utf-8")
    return None


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log)

    # 先校验 args，再连接集群
    try:
        plugin_args = load_args(raw_plugin_args(args))
    except ConfigError as e:
        logging.error(f"plugin 初始化失败: {e}")
        return 1

    monitor = ClusterMonitor(args.kubeconfig)
    plugin = CustomScheduler(Handle(KubePodLister(monitor), KubeNodeInfoLister(monitor)),
                             plugin_args)

    logging.info(f"Starting extender on {args.host}:{args.port}")
    with ThreadPoolExecutor(max_workers=args.workers, thread_name_prefix="score") as pool:
        create_app(plugin, pool=pool).run(host=args.host, port=args.port, threaded=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
