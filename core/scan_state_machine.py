from datetime import datetime
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.eligibility import EligibilityRejection
from core.entry_gate import MISCONFIGURED_GATES_MESSAGE, GateRoster, GateScanProgress
from core.exceptions import ScanBadRequestError
from core.helper import get_current_time_in_timezone
from core.log import logger
from models.Ticket import Ticket, TicketStatus
from repository.ticket import lock_ticket_for_update, transition_ticket_status
from repository.ticket_gate_scan import get_scanned_gate_ids, insert_gate_scan_if_absent
from settings import SCAN_SOURCE


class CurrentGateResult(StrEnum):
    SCANNED = "scanned"
    ALREADY_SCANNED = "already_scanned"
    NOT_APPLICABLE = "not_applicable"


class ScanOutcome(BaseModel):
    current_gate_result: CurrentGateResult
    progress: GateScanProgress
    # every required gate has a scan
    entry_completed: bool
    # this request moved the ticket from active to used
    marked_used: bool
    message: str
    rejection: Optional[EligibilityRejection] = None

    @property
    def success(self) -> bool:
        return self.rejection is None


def validate_target_gate(roster: GateRoster, gate_id: Optional[str]) -> Optional[str]:
    """Gate the scan is recorded at, None when the roster needs no gate

    Raises:
        ScanBadRequestError: misconfigured roster, gate missing, or gate not active
    """
    if roster.is_misconfigured:
        raise ScanBadRequestError("Entry gates not configured", MISCONFIGURED_GATES_MESSAGE)

    if not roster.requires_gate:
        return None

    if not gate_id:
        raise ScanBadRequestError(
            "Gate required", "Select event and gate to start scanning."
        )

    gate = roster.get_gate(gate_id)
    if gate is None:
        raise ScanBadRequestError(
            "Invalid gate", "Selected gate is not active for this event."
        )
    return gate.id


def describe_outcome(
    roster: GateRoster,
    current_gate_result: CurrentGateResult,
    progress: GateScanProgress,
    entry_completed: bool,
    marked_used: bool,
) -> str:
    if not roster.requires_gate:
        return "Ticket verified and marked as used"

    completion_text = (
        f"{progress.completed_count} of {progress.total_count} gates scanned."
    )
    if entry_completed and marked_used:
        return "Entry complete. Ticket marked used."
    if entry_completed:
        return f"Entry already complete. {completion_text}"
    if current_gate_result == CurrentGateResult.ALREADY_SCANNED:
        return f"Already scanned at this gate. {completion_text}"
    return f"Gate scanned successfully. {completion_text}"


def apply_scan(
    db: Session,
    ticket: Ticket,
    roster: GateRoster,
    gate_id: Optional[str],
    admin_id: Optional[str],
    scan_source: str = SCAN_SOURCE,
    now: Optional[datetime] = None,
) -> ScanOutcome:
    """Apply one scan to an eligible ticket.

    A single algorithm covers both modes: the roster decides which gates are
    required (none when the gate flow is disabled). The ticket row is locked
    first, so scans of the same ticket at different gates run one after the
    other and the last one sees every committed gate scan. The gate scan
    insert and the active -> used update commit together; the insert relies
    on the (ticket, gate) unique constraint and the update only applies while
    the ticket is still active, so racing scans neither double count a gate
    nor finalize the ticket twice.

    Args:
        db (Session): Database session
        ticket (Ticket): ticket that passed the eligibility checks
        roster (GateRoster): required gates of the ticket's event
        gate_id (str | None): gate the operator is scanning at
        admin_id (str | None): scanning operator
        scan_source (str): tag stored on the gate scan
        now (datetime | None): scan time, defaults to current time

    Raises:
        ScanBadRequestError: gate selection problems, nothing is written
        SQLAlchemyError: write failed, the transaction is rolled back

    Returns:
        ScanOutcome: gate result, progress and whether the ticket was finalized
    """
    target_gate_id = validate_target_gate(roster, gate_id)
    now = now or get_current_time_in_timezone()
    current_gate_result = CurrentGateResult.NOT_APPLICABLE

    try:
        # scans of this ticket at other gates wait here until we commit
        lock_ticket_for_update(db, ticket.id)

        if target_gate_id is not None:
            inserted = insert_gate_scan_if_absent(
                db=db,
                ticket_id=ticket.id,
                event_id=ticket.event_id,
                gate_id=target_gate_id,
                scanned_by_admin_id=admin_id,
                scanned_at=now,
                scan_source=scan_source,
                is_commit=False,
            )
            current_gate_result = (
                CurrentGateResult.SCANNED
                if inserted
                else CurrentGateResult.ALREADY_SCANNED
            )

        scanned_gate_ids = (
            get_scanned_gate_ids(db, ticket.id) if roster.requires_gate else set()
        )
        progress = roster.progress(scanned_gate_ids)
        entry_completed = progress.is_complete

        marked_used = False
        if entry_completed:
            marked_used = transition_ticket_status(
                db=db,
                ticket_id=ticket.id,
                from_status=TicketStatus.ACTIVE,
                to_status=TicketStatus.USED,
                now=now,
                stamp_scanned_at=True,
                is_commit=False,
            )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info(
        f"Scan applied: ticket_id={ticket.id} gate_id={target_gate_id} "
        f"result={current_gate_result} progress={progress.completed_count}/"
        f"{progress.total_count} marked_used={marked_used}"
    )

    rejection = None
    if not roster.requires_gate and not marked_used:
        # another scan finalized this ticket between the eligibility check and now
        rejection = EligibilityRejection(
            error="Ticket already used",
            message="This ticket has already been scanned and used",
        )

    return ScanOutcome(
        current_gate_result=current_gate_result,
        progress=progress,
        entry_completed=entry_completed,
        marked_used=marked_used,
        message=(
            rejection.message
            if rejection
            else describe_outcome(
                roster, current_gate_result, progress, entry_completed, marked_used
            )
        ),
        rejection=rejection,
    )
