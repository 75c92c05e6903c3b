import traceback
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.access_control import Permission, get_event_access, has_permission
from core.helper import parse_uuid
from core.log import logger
from core.responses import (
    Forbidden,
    InternalServerError,
    NotFound,
    Ok,
    Unauthorized,
    common_response,
)
from core.security import get_current_admin
from models import get_db_sync
from models.AdminUser import AdminUser
from repository import entry_gate as entryGateRepo
from routes.event import EVENT_ACCESS_DENIED, gate_to_response
from schemas.common import (
    ForbiddenResponse,
    InternalServerErrorResponse,
    NotFoundResponse,
    UnauthorizedResponse,
)
from schemas.event import EntryGateResponse, EntryGateUpdateRequest

router = APIRouter(prefix="/gates", tags=["Entry Gate"])


@router.patch(
    "/{gate_id}",
    responses={
        "200": {"model": EntryGateResponse},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "404": {"model": NotFoundResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
def update_entry_gate(
    gate_id: str,
    request: EntryGateUpdateRequest,
    db: Session = Depends(get_db_sync),
    admin: Optional[AdminUser] = Depends(get_current_admin),
):
    """Rename, reorder or (de)activate a gate

    Scans already recorded at a deactivated gate stay, they just stop
    counting towards entry progress.
    """
    if admin is None:
        return common_response(Unauthorized(message="Unauthorized"))
    if not has_permission(admin, Permission.EVENT_EDIT):
        return common_response(Forbidden())

    try:
        gate_uuid = parse_uuid(gate_id)
        gate = entryGateRepo.get_gate_by_id(db, gate_uuid) if gate_uuid else None
        if gate is None:
            return common_response(NotFound(message="Entry gate not found"))

        if get_event_access(db, admin, gate.event_id) is None:
            return common_response(Forbidden(message=EVENT_ACCESS_DENIED))

        gate = entryGateRepo.update_gate(
            db=db,
            gate=gate,
            name=request.name,
            code=request.code,
            sort_order=request.sort_order,
            is_active=request.is_active,
        )
        logger.info(f"Entry gate updated: gate_id={gate.id} is_active={gate.is_active}")
    except Exception as e:
        traceback.print_exc()
        logger.error(f"Error in update_entry_gate: {e}")
        return common_response(InternalServerError(error=str(e)))
    return common_response(Ok(data=gate_to_response(gate).model_dump(mode="json")))
