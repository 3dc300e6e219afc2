"""Helpers for loading case registries from user files and modules."""
from __future__ import annotations

import hashlib
import importlib
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Iterable, List

from casekit.core.registry import CaseRegistry
from casekit.errors import RunnerError

logger = logging.getLogger(__name__)

CASE_FILE_PATTERNS = ("*cases.py", "test_*.py")


def load_registry(target: str) -> CaseRegistry:
    """Load the registry exposed by ``target``.

    ``target`` is a path to a ``.py`` file or a dotted module path. The module
    must define a ``registry`` attribute or a ``register_cases(registry)``
    callable.
    """

    module = _load_module(target)
    registry = getattr(module, "registry", None)
    if isinstance(registry, CaseRegistry):
        return registry
    register_cases = getattr(module, "register_cases", None)
    if callable(register_cases):
        registry = CaseRegistry(module.__name__)
        try:
            register_cases(registry)
        except RunnerError:
            raise
        except Exception as exc:
            raise RunnerError(f"register_cases in '{target}' failed: {type(exc).__name__}: {exc}") from exc
        return registry
    raise RunnerError(
        f"'{target}' defines neither a CaseRegistry named 'registry' nor a register_cases(registry) function"
    )


def load_registries(targets: Iterable[str]) -> CaseRegistry:
    """Merge the registries of several targets, preserving argument order."""

    merged = CaseRegistry("casekit")
    for target in _expand_targets(targets):
        registry = load_registry(target)
        logger.debug("Loaded %d case(s) from %s", len(registry), target)
        merged.extend(registry)
    return merged


def _expand_targets(targets: Iterable[str]) -> List[str]:
    expanded: List[str] = []
    for target in targets:
        path = Path(target)
        if path.is_dir():
            found = sorted({item for pattern in CASE_FILE_PATTERNS for item in path.glob(pattern)})
            if not found:
                raise RunnerError(f"No case files found in directory {path}")
            expanded.extend(str(item) for item in found)
        else:
            expanded.append(target)
    return expanded


def _load_module(target: str) -> ModuleType:
    if target.endswith(".py") or Path(target).exists():
        return _load_from_source(Path(target))
    try:
        return importlib.import_module(target)
    except Exception as exc:
        raise RunnerError(f"Unable to import case module '{target}': {type(exc).__name__}: {exc}") from exc


def _load_from_source(source: Path) -> ModuleType:
    path = source.expanduser().resolve()
    if not path.is_file():
        raise RunnerError(f"Case file not found: {path}")
    module_name = _module_name(path)
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise RunnerError(f"Unable to load module from {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        raise RunnerError(f"Error while importing {path}: {type(exc).__name__}: {exc}") from exc
    return module


def _module_name(path: Path) -> str:
    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:8]
    return f"casekit_cases_{path.stem}_{digest}"
