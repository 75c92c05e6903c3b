from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from models.EntryGate import EntryGate
from models.Event import Event
from repository.entry_gate import get_active_gates

MISCONFIGURED_GATES_MESSAGE = (
    "Entry gate flow is enabled but no active gates are configured for this "
    "event. Activate at least one gate or disable the entry gate flow."
)


class GateInfo(BaseModel):
    id: str
    name: str
    code: Optional[str] = None
    sort_order: int = 0

    @classmethod
    def from_model(cls, gate: EntryGate) -> "GateInfo":
        return cls(
            id=str(gate.id),
            name=gate.name,
            code=gate.code,
            sort_order=gate.sort_order or 0,
        )


class GateScanProgress(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    completed_count: int = 0
    total_count: int = 0
    completed_gate_ids: List[str] = []

    @property
    def is_complete(self) -> bool:
        return self.completed_count >= self.total_count


class GateRoster(BaseModel):
    """Gates a ticket has to pass before it counts as used.

    With the flow disabled the roster requires no gate at all, so the first
    eligible scan completes entry. With the flow enabled it lists the active
    gates in sort order; enabled with none active is a misconfiguration.
    """

    flow_enabled: bool = False
    gates: List[GateInfo] = []

    @property
    def gate_ids(self) -> List[str]:
        return [gate.id for gate in self.gates]

    @property
    def requires_gate(self) -> bool:
        return self.flow_enabled and len(self.gates) > 0

    @property
    def is_misconfigured(self) -> bool:
        return self.flow_enabled and len(self.gates) == 0

    def get_gate(self, gate_id: Optional[str]) -> Optional[GateInfo]:
        if not gate_id:
            return None
        return next((gate for gate in self.gates if gate.id == str(gate_id)), None)

    def progress(self, scanned_gate_ids: Iterable[str]) -> GateScanProgress:
        scanned = {str(gate_id) for gate_id in scanned_gate_ids}
        required = self.gate_ids if self.flow_enabled else []
        completed = [gate_id for gate_id in required if gate_id in scanned]
        return GateScanProgress(
            completed_count=len(completed),
            total_count=len(required),
            completed_gate_ids=completed,
        )


def resolve_gate_roster(db: Session, event: Event) -> GateRoster:
    if not event.enable_entry_gate_flow:
        return GateRoster(flow_enabled=False)

    gates = get_active_gates(db, event.id)
    return GateRoster(
        flow_enabled=True, gates=[GateInfo.from_model(gate) for gate in gates]
    )
