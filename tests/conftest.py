"""
Pytest configuration and shared fixtures for call tree analyzer tests.
"""
import json
import pytest
from call_tree_analyzer.processors.tree_converter import TreeConverter

DEEP_CHAIN_LENGTH = 1500


def make_node(node_id, duration, children=None, **fields):
    """Helper to build a call node with sensible timing defaults."""
    node = {
        "id": node_id,
        "name": fields.pop("name", node_id),
        "duration": duration,
        "startTime": fields.pop("startTime", 1000),
        "endTime": fields.pop("endTime", 1000 + duration),
        "children": children if children is not None else [],
    }
    node.update(fields)
    return node


def strip_annotations(node):
    """Drop flatten annotations so rebuilt trees compare with hand-built ones."""
    stripped = {k: v for k, v in node.items() if k not in ("depth", "parentCallId")}
    stripped["children"] = [strip_annotations(c) for c in node.get("children") or []]
    return stripped


@pytest.fixture
def critical_path_tree():
    """root(10) -> [child1(50), child2(5) -> [grandchild(100)]]"""
    grandchild = make_node("grandchild", 100)
    child1 = make_node("child1", 50)
    child2 = make_node("child2", 5, [grandchild])
    return make_node("root", 10, [child1, child2])


@pytest.fixture
def sample_tree():
    """Checkout request with a failed payment call and rich metadata."""
    return {
        "id": "req-1",
        "name": "POST /checkout",
        "type": "serviceCall",
        "duration": 420,
        "startTime": 1_700_000_000_000,
        "endTime": 1_700_000_000_420,
        "status": "failure",
        "metadata": {
            "serviceName": "gateway",
            "requestId": "abc-123",
            "userId": "user-42",
            "email": "jane@example.com",
            "cpuUsage": 12,
            "memoryUsageKB": 2048,
            "networkBytesTransferred": 5000,
        },
        "children": [
            {
                "id": "auth",
                "name": "authenticate",
                "type": "function",
                "duration": 40,
                "startTime": 1_700_000_000_005,
                "endTime": 1_700_000_000_045,
                "status": "success",
                "metadata": {
                    "serviceName": "auth-service",
                    "accessToken": "tok-secret",
                    "arguments": {"user": "user-42"},
                    "cpuUsage": 3,
                },
                "children": [],
            },
            {
                "id": "pay",
                "name": "processPayment",
                "type": "externalAPI",
                "duration": 300,
                "startTime": 1_700_000_000_050,
                "endTime": 1_700_000_000_350,
                "status": "failure",
                "error": {
                    "message": "Card declined",
                    "code": 402,
                    "stackTrace": "at charge (payments.js:10)",
                    "severity": "high",
                    "category": "external",
                },
                "metadata": {
                    "serviceName": "payments",
                    "creditCardNumber": "4111111111111111",
                    "returnValue": {"ok": False},
                    "httpStatusCode": 402,
                    "memoryUsageKB": 512,
                    "networkBytesTransferred": 1200,
                },
                "children": [
                    {
                        "id": "db",
                        "name": "insertPaymentAttempt",
                        "type": "databaseQuery",
                        "duration": 25,
                        "startTime": 1_700_000_000_060,
                        "endTime": 1_700_000_000_085,
                        "status": "success",
                        "metadata": {
                            "serviceName": "payments-db",
                            "databaseQuery": "INSERT INTO attempts",
                        },
                        "children": [],
                    }
                ],
            },
        ],
    }


def chain_ids(node):
    """Ids along a single-child chain, walked without recursion."""
    ids = []
    while node is not None:
        ids.append(node["id"])
        children = node.get("children") or []
        node = children[0] if children else None
    return ids


@pytest.fixture
def deep_chain():
    """One call nested DEEP_CHAIN_LENGTH levels deep, past the default recursion limit."""
    nodes = []
    for i in range(DEEP_CHAIN_LENGTH):
        node = {
            "id": f"n{i}",
            "name": f"step{i}",
            "duration": 2,
            "startTime": i,
            "endTime": i + 2,
            "metadata": {"email": f"user{i}@example.com", "cpuUsage": 1},
        }
        if i:
            node["parentCallId"] = f"n{i - 1}"
        nodes.append(node)
    return TreeConverter.build_tree(nodes)


@pytest.fixture
def multi_root_nodes():
    """Flat list with two disconnected roots and one child."""
    return [
        {"id": "a", "name": "jobA", "duration": 30, "startTime": 100, "endTime": 130},
        {"id": "b", "name": "jobB", "duration": 20, "startTime": 90, "endTime": 150},
        {"id": "a1", "name": "stepA1", "duration": 10, "startTime": 105, "endTime": 115,
         "parentCallId": "a"},
    ]


@pytest.fixture
def temp_json_file(tmp_path):
    """Create a temporary JSON file and return a helper function."""
    def _create_file(data, name="trace.json"):
        file_path = tmp_path / name
        with open(file_path, "w") as f:
            json.dump(data, f)
        return str(file_path)

    return _create_file
