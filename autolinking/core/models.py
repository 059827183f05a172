from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import INTERFACE_POD_SUFFIX


class Pod(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    pod_name: str = Field(alias="podName")
    podspec_dir: str = Field(alias="podspecDir")

    @property
    def is_interface(self) -> bool:
        # Interfaces are always installed, even without test specs in tests-only mode.
        # TODO: drop once the interfaces are moved into the core package.
        return self.pod_name.endswith(INTERFACE_POD_SUFFIX)


class Package(BaseModel):
    """A native module package reported by `expo-modules-autolinking resolve`."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(alias="packageName")
    version: str = Field(default="", alias="packageVersion")
    debug_only: bool = Field(default=False, alias="debugOnly")
    flags: Dict[str, Any] = Field(default_factory=dict)
    pods: List[Pod] = Field(default_factory=list)
    modules: List[Union[str, Dict[str, Any]]] = Field(default_factory=list)
    swift_module_names: List[str] = Field(default_factory=list, alias="swiftModuleNames")
    app_delegate_subscribers: List[str] = Field(default_factory=list, alias="appDelegateSubscribers")
    react_delegate_handlers: List[str] = Field(default_factory=list, alias="reactDelegateHandlers")

    @field_validator("debug_only", mode="before")
    @classmethod
    def _null_debug_only(cls, v: Any) -> Any:
        return False if v is None else v

    @field_validator("flags", "pods", "modules", "swift_module_names", "app_delegate_subscribers", "react_delegate_handlers", mode="before")
    @classmethod
    def _null_collections(cls, v: Any, info) -> Any:
        if v is None:
            return {} if info.field_name == "flags" else []
        return v

    @property
    def has_swift_modules_to_link(self) -> bool:
        return bool(self.swift_module_names)


class ExtraPod(BaseModel):
    """A pod declared directly through `extraDependencies.iosPods`."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    version: Optional[str] = None
    configurations: Optional[List[str]] = None
    modular_headers: Optional[bool] = None
    source: Optional[str] = None
    path: Optional[str] = None
    podspec: Optional[str] = None
    testspecs: Optional[List[str]] = None
    git: Optional[str] = None
    branch: Optional[str] = None
    tag: Optional[str] = None
    commit: Optional[str] = None


class ExtraDependencies(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    ios_pods: List[ExtraPod] = Field(default_factory=list, alias="iosPods")


class ResolveResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    modules: List[Package] = Field(default_factory=list)
    extra_dependencies: ExtraDependencies = Field(default_factory=ExtraDependencies, alias="extraDependencies")
