"""
Templates router.

GET  /templates                   — catalog of reminder packs
POST /templates/{pack_id}/apply   — create every reminder of a pack (best-effort)
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.domain.reminders import format_days, sorted_days
from app.routers.reminders import reminder_to_response
from app.schemas.common import ErrorResponse
from app.schemas.templates import (
    ReminderSpecResponse,
    TemplateApplyResponse,
    TemplateItemResponse,
    TemplatePackListResponse,
    TemplatePackResponse,
)
from app.services.reminder_store import ReminderStore
from app.services.templates import (
    TEMPLATE_PACKS,
    TemplatePack,
    apply_template,
    get_template_pack,
)

router = APIRouter(prefix="/templates", tags=["templates"])


def _pack_to_response(pack: TemplatePack) -> TemplatePackResponse:
    return TemplatePackResponse(
        id=pack.id,
        name=pack.name,
        description=pack.description,
        reminder_count=len(pack.reminder_specs),
        reminders=[
            ReminderSpecResponse(
                type=spec.type.value,
                time=spec.time_of_day,
                days=[d.value for d in sorted_days(spec.active_days)],
                days_label=format_days(spec.active_days),
            )
            for spec in pack.reminder_specs
        ],
    )


@router.get("", response_model=TemplatePackListResponse, summary="List template packs")
def list_templates():
    return TemplatePackListResponse(
        total=len(TEMPLATE_PACKS),
        items=[_pack_to_response(p) for p in TEMPLATE_PACKS],
    )


@router.post(
    "/{pack_id}/apply",
    response_model=TemplateApplyResponse,
    status_code=status.HTTP_207_MULTI_STATUS,
    summary="Apply a template pack",
    responses={
        207: {"description": "Multi-status: check each item's `ok` field."},
        404: {"model": ErrorResponse, "description": "Unknown pack id."},
    },
)
async def apply_template_pack(pack_id: str, db: Session = Depends(get_db)):
    """
    Create every reminder of the pack, one at a time, in pack order.

    A failure on one reminder does not stop the others and earlier reminders
    are not rolled back. Response HTTP status is **207 Multi-Status**: always
    inspect each `item.ok`, so the client can report "N of M reminders created".
    """
    pack = get_template_pack(pack_id)
    result = await apply_template(pack, ReminderStore(db).create)

    return TemplateApplyResponse(
        pack_id=result.pack_id,
        total=result.total,
        succeeded=result.succeeded,
        failed=result.failed,
        items=[
            TemplateItemResponse(
                index=item.index,
                ok=item.ok,
                reminder=reminder_to_response(item.reminder) if item.reminder else None,
                error=item.error,
            )
            for item in result.items
        ],
    )
