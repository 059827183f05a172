import json
import subprocess
from pathlib import Path

import pytest

from autolinking.cocoapods.platform import Platform
from autolinking.cocoapods.podspec import FilePodspecLoader, Podspec
from autolinking.core.errors import PodspecLoadError


EXPO_CAMERA = {
    "name": "ExpoCamera",
    "version": "15.0.0",
    "platforms": {"ios": "13.4", "tvos": None},
    "dependencies": {"ExpoModulesCore": []},
    "ios": {"dependencies": {"ZXingObjC/PDF417": []}},
    "subspecs": [
        {"name": "Barcode", "dependencies": {"ReactCommon/turbomodule/core": [], "ExpoModulesCore": []}},
    ],
    "testspecs": [
        {"name": "Tests", "test_type": "unit", "dependencies": {"ExpoModulesTestCore": []}},
    ],
}


def _write(tmp_path: Path, name: str, data) -> Path:
    p = tmp_path / f"{name}.podspec.json"
    p.write_text(json.dumps(data), encoding="utf-8")
    return p


def test_from_dict_collects_platforms_tests_and_dependencies():
    spec = Podspec.from_dict(EXPO_CAMERA)

    assert spec.name == "ExpoCamera"
    assert Platform.of("ios", "13.4") in spec.available_platforms
    assert Platform("tvos") in spec.available_platforms
    assert spec.test_specs == ["ExpoCamera/Tests"]
    assert spec.all_dependencies == [
        "ExpoModulesCore",
        "ZXingObjC/PDF417",
        "ReactCommon/turbomodule/core",
        "ExpoModulesTestCore",
    ]


def test_from_dict_without_platforms_means_all_platforms():
    spec = Podspec.from_dict({"name": "Anywhere"})
    names = {p.name for p in spec.available_platforms}
    assert {"ios", "osx", "tvos"} <= names
    assert all(p.deployment_target is None for p in spec.available_platforms)


def test_loader_reads_json_podspec(tmp_path):
    _write(tmp_path, "ExpoCamera", EXPO_CAMERA)

    spec = FilePodspecLoader().load("ExpoCamera", str(tmp_path))
    assert spec.name == "ExpoCamera"


def test_loader_caches_per_path(tmp_path):
    p = _write(tmp_path, "ExpoCamera", EXPO_CAMERA)
    loader = FilePodspecLoader()

    first = loader.load("ExpoCamera", str(tmp_path))
    p.write_text("{ broken", encoding="utf-8")
    second = loader.load("ExpoCamera", str(tmp_path))

    assert first is second


def test_loader_missing_podspec_raises(tmp_path):
    with pytest.raises(PodspecLoadError) as ei:
        FilePodspecLoader().load("Nope", str(tmp_path))
    assert ei.value.pod_name == "Nope"
    assert "file not found" in str(ei.value)


def test_loader_invalid_json_raises(tmp_path):
    (tmp_path / "Bad.podspec.json").write_text("{ not json", encoding="utf-8")
    with pytest.raises(PodspecLoadError, match="invalid JSON"):
        FilePodspecLoader().load("Bad", str(tmp_path))


@pytest.mark.parametrize(
    "data",
    [
        {"name": "U", "testspecs": ["Tests"]},
        {"name": "U", "testspecs": {"name": "Tests"}},
        {"name": "U", "dependencies": ["React-Core"]},
        {"name": "U", "ios": {"dependencies": "React-Core"}},
        {"name": "U", "subspecs": [{"name": "Core", "dependencies": ["Yoga"]}]},
    ],
)
def test_loader_wrong_shape_raises(tmp_path, data):
    _write(tmp_path, "U", data)
    with pytest.raises(PodspecLoadError) as ei:
        FilePodspecLoader().load("U", str(tmp_path))
    assert ei.value.pod_name == "U"


def test_loader_unknown_platform_raises(tmp_path):
    _write(tmp_path, "Droid", {"name": "Droid", "platforms": {"android": "21"}})
    with pytest.raises(PodspecLoadError):
        FilePodspecLoader().load("Droid", str(tmp_path))


def test_loader_converts_ruby_podspec_with_pod_ipc(tmp_path, monkeypatch):
    ruby = tmp_path / "ExpoCamera.podspec"
    ruby.write_text("Pod::Spec.new do |s| end", encoding="utf-8")
    calls = []

    def fake_run(argv, **kwargs):
        calls.append((argv, kwargs))
        return subprocess.CompletedProcess(argv, 0, stdout=json.dumps(EXPO_CAMERA), stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)

    spec = FilePodspecLoader(pod_executable="pod").load("ExpoCamera", str(tmp_path))

    assert spec.name == "ExpoCamera"
    assert calls[0][0] == ["pod", "ipc", "spec", str(ruby)]
    assert calls[0][1]["cwd"] == str(tmp_path)


def test_loader_surfaces_pod_ipc_failure(tmp_path, monkeypatch):
    (tmp_path / "Broken.podspec").write_text("raise 'boom'", encoding="utf-8")

    def fake_run(argv, **kwargs):
        return subprocess.CompletedProcess(argv, 1, stdout="", stderr="[!] Invalid `Broken.podspec` file")

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(PodspecLoadError, match="Invalid `Broken.podspec` file"):
        FilePodspecLoader().load("Broken", str(tmp_path))
