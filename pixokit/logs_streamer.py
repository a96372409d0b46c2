"""Streaming the logs of a workflow's pods, live or from their archives."""

from __future__ import annotations

import contextlib
import logging
import queue
import threading
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, BinaryIO, Protocol, runtime_checkable

from pixokit.argo import Archive, NodeType, Template, Workflow, WorkflowClient, WorkflowPhase, format_pod_name
from pixokit.errors import error_not_found
from pixokit.storage import StorageClient

logger = logging.getLogger(__name__)

_CONTAINER_NAME = "main"
_DONE = object()


@dataclass(frozen=True)
class Log:
    """A chunk of log output from one step of a workflow."""

    step: str
    lines: str

    def to_dict(self) -> dict[str, str]:
        return {"step": self.step, "lines": self.lines}


@runtime_checkable
class PodLogSource(Protocol):
    """Something that opens the log stream of a pod's container."""

    def stream_logs(self, namespace: str, pod_name: str, container: str, follow: bool) -> BinaryIO:
        ...


@dataclass
class StreamerConfig:
    """Everything a logs streamer needs."""

    k8s_client: PodLogSource | None = None
    argo_client: WorkflowClient | None = None
    storage_client: StorageClient | None = None
    logs_cache: Any = None
    namespace: str = ""
    workflow_name: str = ""
    poll_interval: float = 1.0

    def validate(self) -> None:
        """Raise ValueError for the first missing setting."""
        if not self.namespace:
            raise ValueError("namespace may not be empty")
        if not self.workflow_name:
            raise ValueError("workflowName may not be empty")
        if self.storage_client is None:
            raise ValueError("storage client may not be None")
        if self.k8s_client is None:
            raise ValueError("k8s client may not be None")
        if self.argo_client is None:
            raise ValueError("argo client may not be None")


def _has_logs(template: Template) -> bool:
    return template.node_type == NodeType.POD


class LogsStreamer:
    """Combines the logs of every pod step of a workflow into one stream."""

    def __init__(self, config: StreamerConfig) -> None:
        config.validate()
        self._k8s = config.k8s_client
        self._argo = config.argo_client
        self._storage = config.storage_client
        self.logs_cache = config.logs_cache
        self.namespace = config.namespace
        self.workflow_name = config.workflow_name
        self.bucket_name = ""
        self._interval = config.poll_interval
        self._lock = threading.Lock()
        self._streams: set[str] = set()
        self._open_streams: set[str] = set()
        self._num_done = 0
        self._combined: queue.Queue[Any] = queue.Queue()
        self._finished = threading.Event()

    def start(self) -> Iterator[Log]:
        """Begin streaming and return an iterator that ends once every step is done."""
        try:
            workflow = self._argo.get_workflow(self.namespace, self.workflow_name)
        except Exception:
            raise error_not_found("workflow") from None

        for template in workflow.templates:
            if _has_logs(template):
                self._add_stream(template.name)

        with self._lock:
            if not self._streams:
                self._complete()

        self._start_streaming(workflow)
        return self._drain()

    def is_done(self) -> bool:
        with self._lock:
            done = len(self._streams) == self._num_done
        logger.debug("is completely done: %s", done)
        return done

    def num_nodes(self) -> int:
        with self._lock:
            return len(self._streams)

    def num_done(self) -> int:
        with self._lock:
            return self._num_done

    def archived_logs_for_template(self, template_name: str) -> BinaryIO:
        """Open the archived main log of the pod that ran ``template_name``; the caller closes it."""
        try:
            workflow = self._argo.get_workflow(self.namespace, self.workflow_name)
        except Exception as err:
            raise RuntimeError("unable to get workflow") from err

        try:
            node = self._argo.get_node(workflow, template_name)
        except Exception as err:
            raise RuntimeError("unable to get node") from err

        archive = Archive(
            workflow_name=self.workflow_name,
            pod_name=format_pod_name(node),
            bucket_name=self.bucket_name,
        )

        if not node.is_done():
            logger.debug("unable to get archives, node %s is not done", node.template_name)
            raise RuntimeError("node is not done")

        try:
            return self._storage.read_file(archive)
        except Exception as err:
            raise RuntimeError("unable to read archived logs") from err

    def _drain(self) -> Iterator[Log]:
        while True:
            item = self._combined.get()
            if item is _DONE:
                return
            yield item

    def _spawn(self, target: Any, *args: Any) -> None:
        threading.Thread(target=target, args=args, daemon=True).start()

    def _start_streaming(self, workflow: Workflow) -> None:
        for template in workflow.templates:
            if workflow.phase in (WorkflowPhase.SUCCEEDED, WorkflowPhase.FAILED):
                self._spawn(self._stream_archive, template.name)
            elif workflow.phase == WorkflowPhase.RUNNING:
                self._spawn(self._wait_for_tail, template.name, workflow)

    def _stream_archive(self, template_name: str) -> None:
        try:
            reader = self.archived_logs_for_template(template_name)
        except Exception as err:
            logger.debug("no archived logs for %s: %s", template_name, err)
            return
        self._read_logs_for_node(template_name, reader)

    def _wait_for_tail(self, template_name: str, workflow: Workflow) -> None:
        while not self._finished.wait(self._interval):
            try:
                self._tail(template_name, workflow)
            except Exception as err:
                logger.debug("unable to tail %s: %s", template_name, err)
                continue
            return

    def _tail(self, template_name: str, workflow: Workflow) -> None:
        if not template_name:
            raise ValueError("templateName may not be empty")

        try:
            node = self._argo.get_node(workflow, template_name)
        except Exception as err:
            raise LookupError("unable to find node from template name") from err

        pod_name = format_pod_name(node)

        while not self._finished.wait(self._interval):
            try:
                node = self._argo.get_node(workflow, template_name)
            except Exception:
                continue
            if node.pending():
                continue
            try:
                reader = self._k8s.stream_logs(self.namespace, pod_name, _CONTAINER_NAME, True)
            except Exception as err:
                logger.debug("unable to get logs for pod %s: %s", pod_name, err)
                continue
            self._spawn(self._read_logs_for_node, node.template_name, reader)
            return

    def _read_logs_for_node(self, node_name: str, reader: BinaryIO | None) -> None:
        if not node_name or reader is None:
            return
        with contextlib.closing(reader):
            with self._lock:
                registered = node_name in self._open_streams
            if not registered:
                logger.debug("no stream for %s", node_name)
                return

            logger.debug("started streaming logs for %s", node_name)
            while True:
                try:
                    data = reader.read()
                except Exception as err:
                    logger.debug("unable to copy logs for %s: %s", node_name, err)
                    self._mark_stream_done(node_name)
                    return

                if not data:
                    if self._node_is_done(node_name):
                        logger.debug("no logs for completed node %s", node_name)
                        self._mark_stream_done(node_name)
                        return
                    logger.debug("no logs for running node %s", node_name)
                    self._finished.wait(self._interval)
                    continue

                lines = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else str(data)
                if lines:
                    self._combined.put(Log(step=node_name, lines=lines))
                    logger.debug("streamed log for %s", node_name)

    def _node_is_done(self, node_name: str) -> bool:
        if not node_name:
            return False
        try:
            workflow = self._argo.get_workflow(self.namespace, self.workflow_name)
            node = self._argo.get_node(workflow, node_name)
        except Exception:
            return False
        return node.is_done()

    def _add_stream(self, name: str) -> None:
        with self._lock:
            if name not in self._streams:
                logger.debug("opening new stream for node %s", name)
                self._streams.add(name)
                self._open_streams.add(name)

    def _mark_stream_done(self, name: str) -> None:
        with self._lock:
            if name not in self._open_streams:
                return
            self._open_streams.discard(name)
            self._num_done += 1
            logger.debug("marked stream done for node %s", name)
            if self._num_done == len(self._streams):
                self._complete()

    def _complete(self) -> None:
        logger.debug("All streams are closed. Closing combined stream")
        self._finished.set()
        self._combined.put(_DONE)