# comparable/config.py
from __future__ import annotations
import builtins
from dataclasses import dataclass
from importlib import import_module
from typing import Any, Dict, List, Optional

import yaml

from . import logging as clog
from .errors import ComparableError
from .interface import Implementation
from .kinds import kind_named
from .registry import ON_DUPLICATE_POLICIES, Registry

_SUPPORTED_CONFIG_VERSIONS = {"1"}
_BUILTIN_TYPE_NAMES = {"int", "float", "bool", "str", "bytes", "bytearray", "tuple", "list", "dict"}


@dataclass(frozen=True)
class RegistrySettings:
    on_duplicate: str = "error"


def resolve_object(path: str) -> Any:
    """Import ``module:attr.sub`` or ``module.attr``."""
    path = (path or "").strip()
    if ":" in path:
        module_name, _, attr_path = path.partition(":")
    else:
        module_name, _, attr_path = path.rpartition(".")
    if not module_name or not attr_path:
        raise ValueError(f"'{path}' is not a dotted 'module.attr' or 'module:attr' path")
    obj: Any = import_module(module_name)
    for part in attr_path.split("."):
        obj = getattr(obj, part)
    return obj


def resolve_type(name: str) -> Any:
    """Resolve a kind name (``List``), a builtin type name (``int``), ``None`` or a dotted class path."""
    name = (name or "").strip()
    kind = kind_named(name)
    if kind is not None:
        return kind
    if name in ("None", "NoneType"):
        return type(None)
    if name in _BUILTIN_TYPE_NAMES:
        return getattr(builtins, name)
    obj = resolve_object(name)
    if not isinstance(obj, type):
        raise ValueError(f"'{name}' does not name a class")
    return obj


class RegistrationLoader:
    """
    Loads implementation registrations from YAML:
      config_version: "1"
      registry:
        on_duplicate: error | replace
      implementations:
        - types: [TypeA, TypeB]          # canonical order, TypeA <= TypeB
          compare: package.module:function_or_implementation_class

    Notes:
      - Malformed documents always raise ValueError.
      - With strict=False an entry whose names cannot be resolved is skipped
        with a warning; registration errors (order, duplicates) still raise.
    """

    def __init__(self, yaml_path: str, *, strict: bool = True):
        self.yaml_path = yaml_path
        self.strict = strict
        self._raw: Optional[Dict[str, Any]] = None

    def _warn_or_raise(self, msg: str, *, fatal: bool = False) -> None:
        if fatal or self.strict:
            clog.log_err(msg)
            raise ValueError(msg)
        clog.log_warn(msg)

    def _read(self) -> Dict[str, Any]:
        if self._raw is None:
            with open(self.yaml_path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
            if not isinstance(raw, dict):
                self._warn_or_raise(f"{self.yaml_path}: top level must be a mapping.", fatal=True)

            version = str(raw.get("config_version", "")).strip()
            if version not in _SUPPORTED_CONFIG_VERSIONS:
                self._warn_or_raise(
                    f"Unsupported or missing config_version '{version}'. "
                    f"Supported: {sorted(_SUPPORTED_CONFIG_VERSIONS)}",
                    fatal=True,
                )
            self._raw = raw
        return self._raw

    def load_settings(self) -> RegistrySettings:
        reg_cfg = self._read().get("registry") or {}
        if not isinstance(reg_cfg, dict):
            self._warn_or_raise("registry must be a mapping.", fatal=True)

        policy = str(reg_cfg.get("on_duplicate", "error") or "error").strip().lower()
        if policy not in ON_DUPLICATE_POLICIES:
            self._warn_or_raise(
                f"registry.on_duplicate must be one of {list(ON_DUPLICATE_POLICIES)}, got '{policy}'.",
                fatal=True,
            )
        return RegistrySettings(on_duplicate=policy)

    def _entries(self) -> List[Dict[str, Any]]:
        entries = self._read().get("implementations")
        if entries is None:
            return []
        if not isinstance(entries, list):
            self._warn_or_raise("implementations must be a list.", fatal=True)
        return entries

    def _resolve_entry(self, idx: int, entry: Any):
        if not isinstance(entry, dict):
            self._warn_or_raise(f"Implementation #{idx} must be a mapping.", fatal=True)

        type_names = entry.get("types")
        if not isinstance(type_names, list) or len(type_names) != 2:
            self._warn_or_raise(f"Implementation #{idx}: 'types' must list exactly two types.", fatal=True)
        target = entry.get("compare")
        if not target:
            self._warn_or_raise(f"Implementation #{idx}: 'compare' is mandatory.", fatal=True)

        try:
            type_a, type_b = (resolve_type(str(t)) for t in type_names)
            fn = resolve_object(str(target))
        except (ImportError, AttributeError, ValueError) as e:
            self._warn_or_raise(f"Implementation #{idx}: cannot resolve {type_names} / '{target}': {e}")
            return None

        if not callable(fn) and not isinstance(fn, Implementation):
            self._warn_or_raise(f"Implementation #{idx}: '{target}' is not callable.")
            return None

        return type_a, type_b, fn

    def load(self, registry: Optional[Registry] = None) -> Registry:
        """Register every entry into ``registry`` (a new one built from the settings if omitted)."""
        clog.log_step("Loading implementations:", str(self.yaml_path))
        settings = self.load_settings()
        if registry is None:
            registry = Registry(on_duplicate=settings.on_duplicate)

        count = 0
        for idx, entry in enumerate(self._entries()):
            resolved = self._resolve_entry(idx, entry)
            if resolved is None:
                continue
            type_a, type_b, fn = resolved
            try:
                registry.register(type_a, type_b, fn)
            except ComparableError as e:
                clog.log_err(f"Implementation #{idx}: {e}")
                raise
            count += 1

        clog.log_ok(f"Registered {count} implementation(s).")
        return registry
