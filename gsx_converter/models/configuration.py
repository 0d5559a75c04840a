"""
Root of the canonical model.

A Configuration owns its gates, de-ice areas and groups. Group membership is
the one non-owning link: groups hold gate identifiers that are looked up when
the configuration is read.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .deice import DeIceArea
from .gate import Gate
from .gate_group import GateGroup
from .validation import ValidationResult, validate_configuration

FORMAT_VERSION = '1.0'


@dataclass
class Configuration:
    """Canonical ground-service layout for one airport."""

    airport: str = ''
    version: str = FORMAT_VERSION
    gates: List[Gate] = field(default_factory=list)
    deices: List[DeIceArea] = field(default_factory=list)
    gate_groups: List[GateGroup] = field(default_factory=list)
    jetway_rootfloor_heights: Dict[str, float] = field(default_factory=dict)
    metadata: Dict[str, str] = field(default_factory=dict)

    def find_gate(self, gate_id: str) -> Optional[Gate]:
        """Look up a gate by identifier, ignoring case."""
        wanted = gate_id.casefold()
        for gate in self.gates:
            if gate.gate_id.casefold() == wanted:
                return gate
        return None

    def find_deice(self, deice_id: str) -> Optional[DeIceArea]:
        wanted = deice_id.casefold()
        return next((d for d in self.deices if d.id.casefold() == wanted), None)

    def find_group(self, group_id: str) -> Optional[GateGroup]:
        wanted = group_id.casefold()
        return next((g for g in self.gate_groups if g.id.casefold() == wanted), None)

    def group_members(self, group: GateGroup) -> List[Gate]:
        """
        Resolve a group's member identifiers to gates.

        Members that do not match any gate are skipped.
        """
        members = []
        for member_id in group.members:
            gate = self.find_gate(member_id)
            if gate is not None:
                members.append(gate)
        return members

    def groups_for_gate(self, gate_id: str) -> List[GateGroup]:
        wanted = gate_id.casefold()
        return [g for g in self.gate_groups if any(m.casefold() == wanted for m in g.members)]

    def validate(self) -> ValidationResult:
        return validate_configuration(self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'airport': self.airport,
            'version': self.version,
            'gates': [g.to_dict() for g in self.gates],
            'deices': [d.to_dict() for d in self.deices],
            'gate_groups': [g.to_dict() for g in self.gate_groups],
            'jetway_rootfloor_heights': dict(self.jetway_rootfloor_heights),
            'metadata': dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Configuration':
        """Create instance from dictionary."""
        return cls(
            airport=data.get('airport', ''),
            version=data.get('version', FORMAT_VERSION),
            gates=[Gate.from_dict(g) for g in data.get('gates') or []],
            deices=[DeIceArea.from_dict(d) for d in data.get('deices') or []],
            gate_groups=[GateGroup.from_dict(g) for g in data.get('gate_groups') or []],
            jetway_rootfloor_heights={
                k: float(v) for k, v in (data.get('jetway_rootfloor_heights') or {}).items()
            },
            metadata=dict(data.get('metadata') or {}),
        )

    def __str__(self) -> str:
        return (f"Configuration({self.airport or 'unknown'}: {len(self.gates)} gates, "
                f"{len(self.deices)} de-ice areas, {len(self.gate_groups)} groups)")
