from __future__ import annotations

"""
Package Tree Reorganizer.

Rebuilds a flat documentation forest into one container module per
workspace package. The pass is planned completely before anything is
mutated: every node is classified and resolved first, so a resolution
failure leaves the host project exactly as it was.
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from lernadocs.core.services.resolver import find_package_for_path, is_path_excluded
from lernadocs.domain.constants import DEFAULT_README_FILE
from lernadocs.domain.doc_models import (
    DocNode,
    NodeFlag,
    NodeKind,
    ProjectTree,
    SourceReference,
)
from lernadocs.domain.errors import ContainerMissingError
from lernadocs.domain.pipeline_models import ReorganizeReport
from lernadocs.domain.package_models import PackageMap
from lernadocs.domain.reflection_registry import ReflectionRegistry
from lernadocs.infra.fs import read_text_if_exists

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Placement:
    """Planned destination of one top-level node. container=None means dropped."""
    node: DocNode
    package_name: Optional[str]
    container: Optional[DocNode]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_containers(
        packages: PackageMap,
        registry: ReflectionRegistry,
        readme_file: str = DEFAULT_README_FILE,
) -> Dict[str, DocNode]:
    """
    Create one empty container module per registered package.

    Containers receive a fresh id but are not registered; only emitted
    containers enter the registry. A README at the package root becomes the
    container's description.

    Args:
        packages: Registered packages.
        registry: Global registry used for id allocation.
        readme_file: Description file name looked up at each package root.

    Returns:
        Dict[str, DocNode]: Containers keyed by package name, in package order.
    """
    containers: Dict[str, DocNode] = {}
    for name, package in packages.items():
        container = DocNode(
            name=name,
            kind=NodeKind.MODULE,
            source_path=package.root_path,
            id=registry.next_id(),
            flags=NodeFlag.EXPORTED,
            sources=[SourceReference(file_name=package.root_path, line=0, character=0)],
        )

        readme = read_text_if_exists(os.path.join(package.root_path, readme_file))
        if readme is not None:
            container.description = readme

        containers[name] = container
    return containers


def reorganize(
        project: ProjectTree,
        packages: PackageMap,
        *,
        path_exclude: Iterable[str] = (),
        lerna_exclude: Iterable[str] = (),
        readme_file: str = DEFAULT_README_FILE,
) -> ReorganizeReport:
    """
    Regroup the project's top-level forest by workspace package.

    Module-shaped nodes are dissolved into their container: their registry
    entry is removed and their children move up one level. Other nodes move
    as they are. Containers are emitted only when non-empty and not listed
    in `lerna_exclude`.

    Args:
        project: Host project; its children are replaced and its registry updated.
        packages: Registered packages.
        path_exclude: Substrings; matching nodes are dropped entirely.
        lerna_exclude: Package names whose container is never emitted.
        readme_file: Description file name looked up at each package root.

    Returns:
        ReorganizeReport: Summary of the emitted and dropped containers.

    Raises:
        ResolutionError: If a node path belongs to no package. Raised before
            any mutation of the project.
    """
    path_rules = [rule for rule in path_exclude if rule]
    excluded_packages = set(lerna_exclude)
    registry = project.registry

    containers = build_containers(packages, registry, readme_file)
    plan = _plan_placements(project.children, packages, containers, path_rules)

    report = ReorganizeReport()
    _commit_placements(project, plan, registry, path_rules, report)
    _emit_containers(project, containers, excluded_packages, registry, report)

    logger.info(
        f"Reorganized {report.moved_nodes} node(s) into {len(report.emitted)} package(s); "
        f"{report.merged_modules} module(s) merged, {report.excluded_nodes} excluded."
    )
    return report

# -----------------------------------------------------------------------------
# PASS STAGES
# -----------------------------------------------------------------------------

def _plan_placements(
        nodes: List[DocNode],
        packages: PackageMap,
        containers: Dict[str, DocNode],
        path_rules: List[str],
) -> List[_Placement]:
    """Resolve every top-level node without touching the tree."""
    plan: List[_Placement] = []
    for node in nodes:
        if is_path_excluded(node.source_path, path_rules):
            plan.append(_Placement(node=node, package_name=None, container=None))
            continue

        package = find_package_for_path(node.source_path, packages)
        container = containers.get(package.name)
        if container is None:
            raise ContainerMissingError(package.name, source_path=node.source_path)

        plan.append(_Placement(node=node, package_name=package.name, container=container))
    return plan


def _commit_placements(
        project: ProjectTree,
        plan: List[_Placement],
        registry: ReflectionRegistry,
        path_rules: List[str],
        report: ReorganizeReport,
) -> None:
    """Detach the old forest and move every node into its container."""
    project.children = []

    for placement in plan:
        node = placement.node
        node.parent = None

        if placement.container is None:
            registry.unregister_tree(node)
            report.excluded_nodes += 1
            logger.debug(f"Excluded '{node.name}' ({node.source_path})")
            continue

        container = placement.container
        if node.kind.is_module_shaped:
            logger.info(f"put {node.name} stuff into {placement.package_name}")
            registry.unregister(node)
            for child in list(node.children):
                if is_path_excluded(child.source_path, path_rules):
                    child.detach()
                    registry.unregister_tree(child)
                    report.excluded_nodes += 1
                    logger.debug(f"Excluded '{child.name}' ({child.source_path})")
                    continue
                container.attach(child)
                report.moved_nodes += 1
            report.merged_modules += 1
        else:
            container.attach(node)
            report.moved_nodes += 1


def _emit_containers(
        project: ProjectTree,
        containers: Dict[str, DocNode],
        excluded_packages: set,
        registry: ReflectionRegistry,
        report: ReorganizeReport,
) -> None:
    """Publish non-empty, non-excluded containers and unregister the rest."""
    for name, container in containers.items():
        if name in excluded_packages:
            registry.unregister_tree(container)
            report.dropped_excluded.append(name)
            continue

        if not container.children:
            report.dropped_empty.append(name)
            continue

        project.children.append(container)
        registry.register(container)
        report.emitted.append(name)
