import dataclasses
from datetime import datetime, timezone

import pytest

from pixokit.argo import (
    Archive,
    NodeNotFoundError,
    NodePhase,
    NodeStatus,
    NodeType,
    Template,
    Workflow,
    WorkflowClient,
    WorkflowPhase,
    format_pod_name,
)
from pixokit.errors import NotFoundError

NAMESPACE = "test"


class InMemoryBackend:
    def __init__(self):
        self.workflows = {}

    def list_workflows(self, namespace):
        return [w for (ns, _), w in self.workflows.items() if ns == namespace]

    def get_workflow(self, namespace, name):
        try:
            return self.workflows[(namespace, name)]
        except KeyError:
            raise LookupError(f"workflow {name} not found") from None

    def create_workflow(self, namespace, workflow):
        stored = dataclasses.replace(workflow, namespace=namespace)
        self.workflows[(namespace, workflow.name)] = stored
        return stored

    def delete_workflow(self, namespace, name):
        try:
            del self.workflows[(namespace, name)]
        except KeyError:
            raise LookupError(f"workflow {name} not found") from None


def _ts(day):
    return datetime(2024, 1, day, tzinfo=timezone.utc)


@pytest.fixture
def backend():
    store = InMemoryBackend()
    nodes = {
        "whalesay-abc": NodeStatus(id="whalesay-abc", name="whalesay-abc", template_name="main", type=NodeType.DAG),
        "whalesay-abc-111": NodeStatus(
            id="whalesay-abc-111",
            name="whalesay-abc.one",
            template_name="step-one",
            boundary_id="whalesay-abc",
            phase=NodePhase.RUNNING,
        ),
    }
    store.create_workflow(
        NAMESPACE,
        Workflow(
            name="whalesay-abc",
            phase=WorkflowPhase.RUNNING,
            templates=[Template("main", NodeType.DAG), Template("step-one")],
            nodes=nodes,
            creation_timestamp=_ts(2),
        ),
    )
    store.create_workflow(NAMESPACE, Workflow(name="older", creation_timestamp=_ts(1)))
    store.create_workflow(NAMESPACE, Workflow(name="newest", creation_timestamp=_ts(3)))
    store.create_workflow("other", Workflow(name="elsewhere", creation_timestamp=_ts(4)))
    return store


@pytest.fixture
def client(backend):
    return WorkflowClient(backend)


def test_can_get_the_list_of_workflows(client):
    workflows = client.list_workflows(NAMESPACE)
    assert len(workflows) > 0
    assert [w.name for w in workflows] == ["newest", "whalesay-abc", "older"]


def test_list_of_unknown_namespace_is_empty(client):
    assert client.list_workflows("missing") == []


def test_can_get_the_whalesay_workflow(client):
    retrieved = client.get_workflow(NAMESPACE, "whalesay-abc")
    assert retrieved.name == "whalesay-abc"
    assert retrieved.namespace == NAMESPACE


def test_get_missing_workflow_raises(client):
    with pytest.raises(LookupError):
        client.get_workflow(NAMESPACE, "nonexistent-workflow")


def test_create_then_delete_workflow(client):
    created = client.create_workflow("fresh", Workflow(name="made"))
    assert created.namespace == "fresh"
    assert client.get_workflow("fresh", "made").name == "made"
    client.delete_workflow("fresh", "made")
    with pytest.raises(LookupError):
        client.get_workflow("fresh", "made")


def test_delete_missing_workflow_raises(client):
    with pytest.raises(LookupError):
        client.delete_workflow(NAMESPACE, "absent")


def test_get_node_finds_pod_node_for_template(client):
    workflow = client.get_workflow(NAMESPACE, "whalesay-abc")
    node = client.get_node(workflow, "step-one")
    assert node.id == "whalesay-abc-111"
    assert node.template_name == "step-one"


def test_get_node_skips_non_pod_nodes(client):
    workflow = client.get_workflow(NAMESPACE, "whalesay-abc")
    with pytest.raises(NodeNotFoundError) as info:
        client.get_node(workflow, "main")
    assert str(info.value) == "node not found"
    assert isinstance(info.value, NotFoundError)


def test_get_node_reads_the_current_state(client, backend):
    stale = client.get_workflow(NAMESPACE, "whalesay-abc")
    current = backend.workflows[(NAMESPACE, "whalesay-abc")]
    node = current.nodes["whalesay-abc-111"]
    current.nodes["whalesay-abc-111"] = dataclasses.replace(node, phase=NodePhase.SUCCEEDED)
    backend.workflows[(NAMESPACE, "whalesay-abc")] = dataclasses.replace(current, nodes=dict(current.nodes))
    assert client.get_node(stale, "step-one").phase == NodePhase.SUCCEEDED


def test_get_node_of_missing_workflow_raises(client):
    with pytest.raises(LookupError):
        client.get_node(Workflow(name="ghost", namespace=NAMESPACE), "step-one")


def test_format_pod_name_uses_last_id_part():
    node = NodeStatus(id="whalesay-abc-111", template_name="step-one", boundary_id="whalesay-abc")
    assert format_pod_name(node) == "whalesay-abc-step-one-111"


def test_format_pod_name_without_node():
    assert format_pod_name(None) == ""


@pytest.mark.parametrize(
    ("phase", "pending", "done"),
    [
        (NodePhase.PENDING, True, False),
        (NodePhase.RUNNING, False, False),
        (NodePhase.SUCCEEDED, False, True),
        (NodePhase.FAILED, False, True),
        (NodePhase.ERROR, False, False),
    ],
)
def test_node_phase_checks(phase, pending, done):
    node = NodeStatus(id="n-1", phase=phase)
    assert node.pending() is pending
    assert node.is_done() is done


def test_archive_location():
    archive = Archive(workflow_name="wf", pod_name="pod", bucket_name="logs")
    assert archive.file_location() == "wf/pod/main.log"
    assert archive.bucket_name_value() == "logs"
    assert archive.timestamp_value() == 0
    assert archive.to_dict() == {"workflowName": "wf", "podName": "pod"}