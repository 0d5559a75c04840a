from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class GateGroup:
    """
    A named collection of gates for display purposes.

    Members are gate identifiers, not gate objects: groups and gates are
    populated independently and are resolved against each other only when
    the configuration is read (see Configuration.group_members).
    """

    id: str
    members: List[str] = field(default_factory=list)
    properties: Dict[str, str] = field(default_factory=dict)

    def add_member(self, gate_id: str) -> None:
        """Add a member once; membership is an ordered set."""
        if gate_id not in self.members:
            self.members.append(gate_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'members': list(self.members),
            'properties': dict(self.properties),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GateGroup':
        group = cls(id=data['id'], properties=dict(data.get('properties') or {}))
        for member in data.get('members') or []:
            group.add_member(member)
        return group
