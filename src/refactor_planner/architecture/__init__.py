"""Architecture health: cycles, layer violations, domains and scoring."""

from .domains import (
    COHERENCE_THRESHOLD,
    ROOT_DOMAIN,
    DomainInfo,
    ModuleMove,
    analyze_domains,
    domain_of,
)
from .health import analyze_architecture, detect_circular_violations, read_modules
from .layers import assign_layers, detect_layer_violations
from .models import ArchHealth, ArchViolation, Severity, ViolationKind
from .policy import HealthPolicy, LayerPolicy

__all__ = [
    "COHERENCE_THRESHOLD",
    "ROOT_DOMAIN",
    "ArchHealth",
    "ArchViolation",
    "DomainInfo",
    "HealthPolicy",
    "LayerPolicy",
    "ModuleMove",
    "Severity",
    "ViolationKind",
    "analyze_architecture",
    "analyze_domains",
    "assign_layers",
    "detect_circular_violations",
    "detect_layer_violations",
    "domain_of",
    "read_modules",
]
