import pytest

from gang_scheduler.schedule.cluster_state import SnapshotNodeInfoLister, StaticPodLister
from gang_scheduler.schedule.lister_interface import Handle
from gang_scheduler.schedule.resource_types import NodeResourceState, WorkloadUnit

GiB = 1024 ** 3


def make_unit(name, group="A", min_available="3", **extra):
    labels = dict(extra)
    if group is not None:
        labels["podGroup"] = group
    if min_available is not None:
        labels["minAvailable"] = min_available
    return WorkloadUnit(name, "default", labels)


@pytest.fixture
def nodes():
    # headroom: node-a 1GiB, node-b 2GiB, node-c 4GiB
    return [
        NodeResourceState("node-a", 8 * GiB, 7 * GiB),
        NodeResourceState("node-b", 8 * GiB, 6 * GiB),
        NodeResourceState("node-c", 8 * GiB, 4 * GiB),
    ]


@pytest.fixture
def handle(nodes):
    units = [make_unit(f"a-{i}", "A") for i in range(3)] + [make_unit("b-0", "B")]
    return Handle(StaticPodLister(units), SnapshotNodeInfoLister(nodes))
