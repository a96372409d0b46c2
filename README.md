# pixokit

Small building blocks for backend services.

## Modules

- `pixokit.config` – environment settings: `get_env_or_return`,
  `get_env_or_crash` (raises `MissingEnvironmentVariableError` when the
  variable is unset), `get_lifecycle` (lower-cased `LIFECYCLE`, `"local"` by
  default), `get_domain` (`DOMAIN`, `"localhost"` by default) and
  `get_region` (`"saudi"` when `REGION` mentions `me-central` or `saudi`,
  otherwise `"us-central1"`). `load_env_vars` loads a `.env` file without
  overriding variables that are already set; it runs once on import.
  `get_project_root` joins the package directory with a relative path.
  Request values are read from a mapping keyed by the `ContextRequest` enum:
  `get_request_context`, `get_ip_address`, `get_current_user_id` (from a
  `User`, 0 when absent) and `get_authorization_enforcer`.
- `pixokit.errors` – `NotFoundError` ("<type> not found") and
  `RequiredError` ("<field> is required"), built by `error_not_found` and
  `error_required`.
- `pixokit.localization` – the 32 supported languages as `Language`
  records: `is_valid_language_code`, and `get_language`, which raises
  `LanguageNotFoundError` for an unknown code. `BASE_LANGUAGE_CODE` is `"en"`.
- `pixokit.storage` – the `UploadableObject` and `StorageClient`
  protocols, `BasicUploadable` (`upload_destination/filename`, current time
  when no timestamp is set), `PathUploadable`, `SignedUrlOption`,
  `SignedUrlPartsRequest` and `ResumableUploadResponse`.
- `pixokit.sanitize` – `sanitize_filename`, `parse_file_location_from_link`
  and `get_filename_from_location`.
- `pixokit.mock_storage` – `MockStorageClient`, an in-memory
  `StorageClient` that records every call and can be told to fail.
- `pixokit.gcs` – `GcsClient` resolves bucket names (object, then
  `GcsConfig.bucket_name`, then `GOOGLE_STORAGE_BUCKET`), builds public URLs
  and signed-URL cache keys; `public_uploadable` returns an object in the
  bucket named by `GOOGLE_STORAGE_PUBLIC`.
- `pixokit.helm` – `Chart`, `ClientConfig`, `resolve_client_config` (fills
  namespace and driver from `NAMESPACE` and `HELM_DRIVER`), the
  `HelmClient` protocol and `MockHelmClient`.
- `pixokit.kubeconfig` – `kubeconfig_path` returns `KUBECONFIG`, or
  `.kube/config` under `HOME` (`/workspace` when `HOME` is unset).
- `pixokit.argo` – workflow models (`Workflow`, `Template`, `NodeStatus`,
  `WorkflowPhase`, `NodePhase`, `NodeType`), `format_pod_name`, `Archive`
  (the `workflow/pod/main.log` location of a pod's stored log) and
  `WorkflowClient`, which works over any `WorkflowBackend`.
- `pixokit.logs_streamer` – `LogsStreamer` merges the logs of every pod
  step of a workflow into one iterator of `Log` records. For a finished
  workflow it reads the archived logs through the storage client; for a
  running one it follows each pod through a `PodLogSource`.

## Install

```
pip install pixokit
```

## Examples

```python
from pixokit.sanitize import sanitize_filename, parse_file_location_from_link

sanitize_filename("images/modules/distributor/file.png", 0)
# 'images/modules/distributor/blob.png'

parse_file_location_from_link("https://bucket.s3.amazonaws.com/images/file.png")
# 'images/file.png'
```

```python
from pixokit.localization import get_language, is_valid_language_code

is_valid_language_code("fr")      # True
get_language("de").display_name   # 'Deutsch'
```

Streaming the archived logs of a finished workflow:

```python
from pixokit.argo import NodePhase, NodeStatus, Template, Workflow, WorkflowClient, WorkflowPhase
from pixokit.logs_streamer import LogsStreamer, StreamerConfig
from pixokit.mock_storage import MockStorageClient


class MemoryBackend:
    def __init__(self, *workflows):
        self.items = {(w.namespace, w.name): w for w in workflows}

    def list_workflows(self, namespace):
        return [w for (ns, _), w in self.items.items() if ns == namespace]

    def get_workflow(self, namespace, name):
        return self.items[(namespace, name)]

    def create_workflow(self, namespace, workflow):
        self.items[(namespace, workflow.name)] = workflow
        return workflow

    def delete_workflow(self, namespace, name):
        del self.items[(namespace, name)]


class NoLiveLogs:
    def stream_logs(self, namespace, pod_name, container, follow):
        raise OSError("no cluster")


workflow = Workflow(
    name="wf",
    namespace="test",
    phase=WorkflowPhase.SUCCEEDED,
    templates=[Template("hello")],
    nodes={"n": NodeStatus(id="wf-123", template_name="hello", boundary_id="wf",
                           phase=NodePhase.SUCCEEDED)},
)
streamer = LogsStreamer(StreamerConfig(
    k8s_client=NoLiveLogs(),
    argo_client=WorkflowClient(MemoryBackend(workflow)),
    storage_client=MockStorageClient(),
    namespace="test",
    workflow_name="wf",
))
list(streamer.start())   # [Log(step='hello', lines='test')]
streamer.is_done()       # True
```

`StreamerConfig.validate` raises `ValueError` for a missing namespace,
workflow name or client, and `LogsStreamer.start` raises `NotFoundError`
("workflow not found") when the workflow cannot be fetched.

## What it does not do

The package holds no network clients of its own. It does not upload to,
download from or sign URLs against a cloud bucket: `GcsClient` only builds
names, public URLs and cache keys, and `MockStorageClient` is the only
`StorageClient` included. It does not install or upgrade charts: `HelmClient`
is a protocol and `MockHelmClient` its only implementation. It does not talk
to a cluster: `WorkflowClient` needs a `WorkflowBackend`, and live log
following needs a `PodLogSource`, both supplied by the caller. There is no
web server and no command-line tool.

## Tests

```
pip install -e ".[test]"
pytest
```