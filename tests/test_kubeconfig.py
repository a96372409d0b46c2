import os

from pixokit.kubeconfig import kubeconfig_path


def test_uses_kubeconfig_variable_when_set(monkeypatch):
    monkeypatch.setenv("KUBECONFIG", "/etc/clusters/dev.yaml")
    monkeypatch.setenv("HOME", "/home/someone")
    assert kubeconfig_path() == "/etc/clusters/dev.yaml"


def test_empty_kubeconfig_variable_is_still_used(monkeypatch):
    monkeypatch.setenv("KUBECONFIG", "")
    assert kubeconfig_path() == ""


def test_falls_back_to_home_directory(monkeypatch, tmp_path):
    monkeypatch.delenv("KUBECONFIG", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    path = kubeconfig_path()
    assert path.startswith(str(tmp_path))
    assert os.path.basename(path) == "config"
    assert os.path.basename(os.path.dirname(path)) == ".kube"


def test_falls_back_to_workspace_without_home(monkeypatch):
    monkeypatch.delenv("KUBECONFIG", raising=False)
    monkeypatch.delenv("HOME", raising=False)
    assert kubeconfig_path() == os.path.join("/workspace", ".kube", "config")