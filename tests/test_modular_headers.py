from autolinking.cocoapods.target_definition import TargetDefinition
from autolinking.core.modular_headers import SpecName, ensure_modular_headers


def test_spec_name_parse():
    assert SpecName.parse("ReactCommon/turbomodule/core") == SpecName("ReactCommon", "turbomodule/core")
    assert SpecName.parse("ExpoModulesCore") == SpecName("ExpoModulesCore", None)
    assert str(SpecName.parse("ReactCommon/turbomodule/core")) == "ReactCommon/turbomodule/core"


def test_marks_each_root_once():
    target = TargetDefinition(name="App")
    calls = []

    def mark(name):
        calls.append(name)
        target.mark_pod_as_modular(name)

    marked = ensure_modular_headers(
        ["ReactCommon/turbomodule/core", "ReactCommon/turbomodule/bridging", "ExpoModulesCore", "React-Core"],
        target.build_pod_as_module,
        mark,
    )

    assert calls == ["ReactCommon", "ExpoModulesCore", "React-Core"]
    assert marked == calls
    assert target.build_pod_as_module("ReactCommon")


def test_second_run_is_a_noop():
    target = TargetDefinition(name="App")
    names = ["ReactCommon/turbomodule/core", "ExpoModulesCore"]
    ensure_modular_headers(names, target.build_pod_as_module, target.mark_pod_as_modular)

    calls = []
    ensure_modular_headers(names, target.build_pod_as_module, calls.append)

    assert calls == []


def test_skips_roots_already_built_as_modules():
    target = TargetDefinition(name="App", modular_headers_for_pods={"ExpoModulesCore"})
    calls = []

    ensure_modular_headers(["ExpoModulesCore", "Yoga"], target.build_pod_as_module, calls.append)

    assert calls == ["Yoga"]


def test_use_modular_headers_for_all_marks_nothing():
    target = TargetDefinition(name="App", use_modular_headers_for_all=True)
    calls = []

    ensure_modular_headers(["Yoga", "React-Core"], target.build_pod_as_module, calls.append)

    assert calls == []


def test_explicit_opt_out_is_overridden():
    target = TargetDefinition(name="App", use_modular_headers_for_all=True, modular_headers_not_for_pods={"Yoga"})

    ensure_modular_headers(["Yoga"], target.build_pod_as_module, target.mark_pod_as_modular)

    assert target.build_pod_as_module("Yoga")
    assert "Yoga" not in target.modular_headers_not_for_pods
