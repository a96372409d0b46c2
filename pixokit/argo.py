"""Workflow and node models, log archive locations and a workflow client."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Protocol, runtime_checkable

from pixokit.errors import NotFoundError

logger = logging.getLogger(__name__)


class WorkflowPhase(str, Enum):
    """Lifecycle phase of a workflow."""

    UNKNOWN = ""
    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    ERROR = "Error"


class NodePhase(str, Enum):
    """Lifecycle phase of a workflow node."""

    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    SKIPPED = "Skipped"
    FAILED = "Failed"
    ERROR = "Error"
    OMITTED = "Omitted"


class NodeType(str, Enum):
    """Kind of a workflow node."""

    POD = "Pod"
    CONTAINER = "Container"
    STEPS = "Steps"
    STEP_GROUP = "StepGroup"
    DAG = "DAG"
    TASK_GROUP = "TaskGroup"
    RETRY = "Retry"
    SKIPPED = "Skipped"
    SUSPEND = "Suspend"
    HTTP = "HTTP"
    PLUGIN = "Plugin"


class NodeNotFoundError(NotFoundError):
    """Raised when a workflow has no pod node for a template."""

    def __init__(self) -> None:
        super().__init__("node")


@dataclass(frozen=True)
class NodeStatus:
    """The state of one node of a workflow."""

    id: str
    name: str = ""
    template_name: str = ""
    boundary_id: str = ""
    type: NodeType = NodeType.POD
    phase: NodePhase = NodePhase.PENDING

    def pending(self) -> bool:
        """Return True while the node has not started."""
        return self.phase == NodePhase.PENDING

    def is_done(self) -> bool:
        """Return True once the node has succeeded or failed."""
        return self.phase in (NodePhase.SUCCEEDED, NodePhase.FAILED)


@dataclass(frozen=True)
class Template:
    """A template of a workflow and the kind of node it runs as."""

    name: str
    node_type: NodeType = NodeType.POD


@dataclass
class Workflow:
    """A workflow with its templates and the status of its nodes."""

    name: str
    namespace: str = ""
    phase: WorkflowPhase = WorkflowPhase.UNKNOWN
    templates: list[Template] = field(default_factory=list)
    nodes: dict[str, NodeStatus] = field(default_factory=dict)
    creation_timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def format_pod_name(node: NodeStatus | None) -> str:
    """Return the pod name of ``node``, or "" when there is no node."""
    if node is None:
        logger.debug("Node is None")
        return ""
    suffix = node.id.split("-")[-1]
    return f"{node.boundary_id}-{node.template_name}-{suffix}"


@dataclass(frozen=True)
class Archive:
    """The stored main log of one pod of a workflow."""

    workflow_name: str = ""
    pod_name: str = ""
    bucket_name: str = ""

    def bucket_name_value(self) -> str:
        return self.bucket_name

    def file_location(self) -> str:
        return f"{self.workflow_name}/{self.pod_name}/main.log"

    def timestamp_value(self) -> int:
        return 0

    def to_dict(self) -> dict[str, str]:
        """Return the archive in its JSON form; the bucket is not included."""
        return {"workflowName": self.workflow_name, "podName": self.pod_name}


@runtime_checkable
class WorkflowBackend(Protocol):
    """Storage of workflows, such as a cluster API."""

    def list_workflows(self, namespace: str) -> list[Workflow]:
        ...

    def get_workflow(self, namespace: str, name: str) -> Workflow:
        ...

    def create_workflow(self, namespace: str, workflow: Workflow) -> Workflow:
        ...

    def delete_workflow(self, namespace: str, name: str) -> None:
        ...


class WorkflowClient:
    """Queries and manages workflows through a backend."""

    def __init__(self, backend: WorkflowBackend) -> None:
        self.backend = backend

    def list_workflows(self, namespace: str) -> list[Workflow]:
        """Return the workflows in ``namespace``, newest first."""
        try:
            workflows = self.backend.list_workflows(namespace)
        except Exception as err:
            logger.error("Error fetching workflows: %s", err)
            raise
        result = sorted(workflows, key=lambda w: w.creation_timestamp, reverse=True)
        logger.debug("Fetched %d workflows", len(result))
        return result

    def get_workflow(self, namespace: str, name: str) -> Workflow:
        """Return the workflow ``name`` in ``namespace``."""
        try:
            workflow = self.backend.get_workflow(namespace, name)
        except Exception as err:
            logger.error("Error fetching workflows: %s", err)
            raise
        logger.debug("Fetched workflow %s", workflow.name)
        return workflow

    def create_workflow(self, namespace: str, workflow: Workflow) -> Workflow:
        """Create ``workflow`` in ``namespace`` and return what was stored."""
        try:
            created = self.backend.create_workflow(namespace, workflow)
        except Exception as err:
            logger.error("Error creating workflow: %s", err)
            raise
        logger.debug("Created workflow %s", created.name)
        return created

    def delete_workflow(self, namespace: str, name: str) -> None:
        """Delete the workflow ``name`` in ``namespace``."""
        try:
            self.backend.delete_workflow(namespace, name)
        except Exception as err:
            logger.error("Error deleting workflow: %s", err)
            raise
        logger.debug("Deleted workflow %s", name)

    def get_node(self, workflow: Workflow, name: str) -> NodeStatus:
        """Return the current pod node of ``workflow`` that runs template ``name``."""
        current = self.get_workflow(workflow.namespace, workflow.name)
        for node in current.nodes.values():
            if node.type == NodeType.POD and node.template_name == name:
                logger.debug("Node %s found in workflow %s", node.name, current.name)
                return node
        logger.debug("Node not found in workflow %s", current.name)
        raise NodeNotFoundError()