"""Domain grouping: cohesion of top-level directories.

A domain is the first path segment of a module id (after a leading
``src/``). Modules directly at the root share the domain ``"."``.
Coherence is the fraction of a domain's outgoing import edges that stay
inside the domain.
"""

from collections import Counter
from dataclasses import dataclass, field

from ..graph.models import DependencyGraph
from ..logging_config import get_logger

logger = get_logger(__name__)

ROOT_DOMAIN = "."
COHERENCE_THRESHOLD = 0.8


@dataclass(frozen=True)
class ModuleMove:
    """A module that imports only from another domain."""

    module: str
    suggested_domain: str


@dataclass
class DomainInfo:
    name: str
    path: str
    modules: list[str] = field(default_factory=list)
    internal_edges: int = 0
    outgoing_edges: int = 0
    coherence: float = 1.0
    belongs_here: list[str] = field(default_factory=list)
    should_move: list[ModuleMove] = field(default_factory=list)
    suggestion: str = ""

    @property
    def files(self) -> int:
        return len(self.modules)


def domain_of(module_id: str) -> str:
    parts = [p for p in module_id.split("/") if p]
    if parts and parts[0] == "src":
        parts = parts[1:]
    if len(parts) <= 1:
        return ROOT_DOMAIN
    return parts[0]


def _domain_path(module_id: str, domain: str) -> str:
    if domain == ROOT_DOMAIN:
        return "src" if module_id.startswith("src/") else ROOT_DOMAIN
    return f"src/{domain}" if module_id.startswith("src/") else domain


def analyze_domains(graph: DependencyGraph) -> list[DomainInfo]:
    """Group modules into domains and measure how self-contained each one is."""
    domains: dict[str, DomainInfo] = {}
    for module in sorted(graph.all_nodes):
        name = domain_of(module)
        if name not in domains:
            domains[name] = DomainInfo(name=name, path=_domain_path(module, name))
        domains[name].modules.append(module)

    for name, info in domains.items():
        for module in info.modules:
            deps = graph.dependencies(module)
            external = Counter(domain_of(d) for d in deps if domain_of(d) != name)
            info.outgoing_edges += len(deps)
            info.internal_edges += len(deps) - sum(external.values())

            if deps and sum(external.values()) == len(deps):
                target, count = sorted(external.items(), key=lambda kv: (-kv[1], kv[0]))[0]
                if count * 2 > len(deps):
                    info.should_move.append(ModuleMove(module=module, suggested_domain=target))
                    continue
            info.belongs_here.append(module)

        if info.outgoing_edges:
            info.coherence = round(info.internal_edges / info.outgoing_edges, 4)
        if info.coherence < COHERENCE_THRESHOLD:
            if info.should_move:
                info.suggestion = (
                    f"Move {len(info.should_move)} module(s) that only depend on other domains"
                )
            else:
                info.suggestion = (
                    f"Only {info.coherence:.0%} of imports in '{name}' stay inside the domain"
                )

    result = sorted(domains.values(), key=lambda d: d.name)
    logger.debug(f"Grouped {len(graph)} modules into {len(result)} domain(s)")
    return result
