from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock, patch

import pytest

from gang_scheduler.extender import create_app
from gang_scheduler.schedule.errors import UpstreamUnavailableError
from gang_scheduler.schedule.lister_interface import Handle
from gang_scheduler.schedule.plugin import CustomScheduler


def _args(group="A", minimum="3", nodes=("node-a", "node-b", "node-c")):
    return {
        "pod": {"metadata": {"name": "p", "namespace": "default",
                             "labels": {"podGroup": group, "minAvailable": minimum}}},
        "nodes": {"items": [{"metadata": {"name": n}} for n in nodes]},
    }


@pytest.fixture
def pool():
    with ThreadPoolExecutor(max_workers=2) as executor:
        yield executor


@pytest.fixture
def make_client(handle, pool):
    def _make(mode="Least", h=None):
        plugin = CustomScheduler.new({"mode": mode}, h or handle)
        return create_app(plugin, pool=pool).test_client()
    return _make


def test_healthz(make_client):
    assert make_client().get("/healthz").data == b"ok"


def test_filter_admits(make_client):
    body = make_client().post("/filter", json=_args()).get_json()
    assert body["failedNodes"] == {}
    assert body["error"] == ""
    assert len(body["nodes"]["items"]) == 3


def test_filter_rejects_incomplete_group(make_client):
    body = make_client().post("/filter", json=_args(group="B")).get_json()
    assert set(body["failedNodes"]) == {"node-a", "node-b", "node-c"}
    assert "'B'" in body["failedNodes"]["node-a"]
    assert "nodes" not in body


def test_filter_reports_error(make_client):
    body = make_client().post("/filter", json=_args(minimum="abc")).get_json()
    assert "minAvailable" in body["error"]


def test_filter_with_node_names(make_client):
    args = _args()
    del args["nodes"]
    args["nodenames"] = ["node-a"]
    body = make_client().post("/filter", json=args).get_json()
    assert body["nodenames"] == ["node-a"]


@pytest.mark.parametrize("mode, expected", [
    ("Most", {"node-a": 0, "node-b": 3, "node-c": 10}),
    ("Least", {"node-a": 10, "node-b": 3, "node-c": 0}),
])
def test_prioritize(make_client, mode, expected):
    body = make_client(mode).post("/prioritize", json=_args()).get_json()
    assert {p["host"]: p["score"] for p in body} == expected


def test_prioritize_skips_unknown_nodes(make_client):
    body = make_client("Most").post("/prioritize",
                                    json=_args(nodes=("node-a", "ghost"))).get_json()
    assert body == [{"host": "node-a", "score": 10}]


def test_filter_listing_failure(pool):
    pods = MagicMock()
    pods.list.side_effect = UpstreamUnavailableError("Failed to list pods: down")
    plugin = CustomScheduler(Handle(pods, MagicMock()))
    body = create_app(plugin, pool=pool).test_client().post("/filter", json=_args()).get_json()
    assert body["error"] == "Failed to list pods: down"


def _args_with_names(names=("node-a", "node-b", "node-c"), **kw):
    args = _args(**kw)
    del args["nodes"]
    args["nodenames"] = list(names)
    return args


def test_filter_null_node_names_falls_back_to_nodes(make_client):
    args = _args()
    args["nodenames"] = None
    body = make_client().post("/filter", json=args).get_json()
    assert body["failedNodes"] == {}
    assert [n["metadata"]["name"] for n in body["nodes"]["items"]] == ["node-a", "node-b", "node-c"]
    assert "nodenames" not in body


@pytest.mark.parametrize("args", [
    _args(group="B"),
    _args_with_names(group="B"),
])
def test_filter_unschedulable_fails_every_candidate(make_client, args):
    body = make_client().post("/filter", json=args).get_json()
    assert set(body["failedNodes"]) == {"node-a", "node-b", "node-c"}
    assert "nodes" not in body and "nodenames" not in body


@pytest.mark.parametrize("args", [_args(), _args_with_names()])
def test_prioritize_accepts_nodes_or_node_names(make_client, args):
    body = make_client("Most").post("/prioritize", json=args).get_json()
    assert {p["host"]: p["score"] for p in body} == {"node-a": 0, "node-b": 3, "node-c": 10}


@pytest.mark.parametrize("path", ["/filter", "/prioritize"])
@pytest.mark.parametrize("payload", [b"[1]", b'"pod"', b"not json"])
def test_non_object_body_is_rejected(make_client, path, payload):
    resp = make_client().post(path, data=payload, content_type="application/json")
    assert resp.status_code == 400
    assert "JSON object" in resp.get_json()["error"]


def test_owned_pool_is_registered_for_shutdown(handle):
    plugin = CustomScheduler(handle)
    with patch("gang_scheduler.extender.atexit.register") as register:
        create_app(plugin, max_workers=1)
    register.assert_called_once()
    pool = register.call_args.args[0].__self__
    assert register.call_args.kwargs == {"wait": False}
    pool.shutdown(wait=False)


def test_caller_pool_is_left_to_caller(handle, pool):
    with patch("gang_scheduler.extender.atexit.register") as register:
        create_app(CustomScheduler(handle), pool=pool)
    register.assert_not_called()
