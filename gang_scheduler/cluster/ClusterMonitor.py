import logging

import urllib3
from kubernetes import client, config
from kubernetes.client.rest import ApiException

from ..schedule.errors import NodeLookupError, UpstreamUnavailableError

urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

DEFAULT_KUBECONFIG = "./config/config"

# 已结束的 Pod 不再占用节点资源
NON_TERMINATED_SELECTOR = "status.phase!=Succeeded,status.phase!=Failed"


class ClusterMonitor:
    """通过Kubernetes API与集群交互，只读"""
    def __init__(self, kubeconfig: str = DEFAULT_KUBECONFIG):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        try:
            config.load_incluster_config()
            self.logger.info("使用 in-cluster 配置连接集群")
        except config.ConfigException:
            config.load_kube_config(kubeconfig)
            self.logger.info(f"在本地连接到远程集群, kubeconfig={kubeconfig}")

        self.core_v1 = client.CoreV1Api()

    def list_pods(self, label_selector: str):
        """
        列出所有命名空间下匹配 label_selector 的 Pod（V1Pod 列表）

        被 KubePodLister 调用；查询失败抛 UpstreamUnavailableError
        """
        try:
            resp = self.core_v1.list_pod_for_all_namespaces(label_selector=label_selector)
        except (ApiException, urllib3.exceptions.HTTPError) as e:
            self.logger.error(f"按 label {label_selector!r} 列出 Pod 失败: {e}")
            raise UpstreamUnavailableError(f"Failed to list pods: {e}") from e
        return resp.items

    def read_node(self, node_name: str):
        """
        读取单个 V1Node；404 → NodeLookupError，其他错误 → UpstreamUnavailableError
        """
        try:
            return self.core_v1.read_node(node_name)
        except ApiException as e:
            if e.status == 404:
                raise NodeLookupError(node_name) from e
            self.logger.error(f"读取节点 {node_name} 失败: {e}")
            raise UpstreamUnavailableError(f"Failed to read node {node_name}: {e}") from e
        except urllib3.exceptions.HTTPError as e:
            self.logger.error(f"读取节点 {node_name} 失败: {e}")
            raise UpstreamUnavailableError(f"Failed to read node {node_name}: {e}") from e

    def list_pods_on_node(self, node_name: str):
        """
        返回绑定在该节点上、尚未结束的 Pod 列表

        被 KubeNodeInfoLister 调用，用来累计 requested memory
        """
        field = f"spec.nodeName={node_name},{NON_TERMINATED_SELECTOR}"
        try:
            resp = self.core_v1.list_pod_for_all_namespaces(field_selector=field)
        except (ApiException, urllib3.exceptions.HTTPError) as e:
            self.logger.error(f"获取节点 {node_name} 上的 Pod 失败: {e}")
            raise UpstreamUnavailableError(f"Failed to list pods on node {node_name}: {e}") from e
        return resp.items
