"""
Template packs: named bundles of reminder specs applied in one batch.

Public API
----------
TEMPLATE_PACKS                                   static catalog
get_template_pack(pack_id)                       -> TemplatePack
iter_apply_template(pack, create_reminder)       async generator of TemplateItemResult
apply_template(pack, create_reminder, ...)       -> TemplateApplyResult

Batch semantics
---------------
Specs are created one at a time, in catalog order. A failed creation is
logged and recorded on its item but never aborts the batch. There is no
rollback of earlier successes and no cancellation hook: once started, every
spec is attempted. Task cancellation (asyncio.CancelledError) is not an item
failure and propagates.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import AsyncIterator, Awaitable, Callable, Optional

from app.core.errors import TemplatePackNotFoundError
from app.domain.reminders import (
    EVERY_DAY,
    WEEKDAYS,
    Reminder,
    ReminderRequest,
    ReminderSpec,
    ReminderType,
)

logger = logging.getLogger(__name__)

CreateReminder = Callable[[ReminderRequest], Awaitable[Reminder]]
OnItemDone = Callable[[Optional[Reminder], int, int], None]
OnComplete = Callable[[list[Reminder]], None]


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TemplatePack:
    id: str
    name: str
    description: str
    reminder_specs: tuple[ReminderSpec, ...]


def _specs(reminder_type: ReminderType, days, *times: str) -> list[ReminderSpec]:
    return [ReminderSpec(type=reminder_type, time_of_day=t, active_days=days) for t in times]


TEMPLATE_PACKS: tuple[TemplatePack, ...] = (
    TemplatePack(
        id="desk_worker",
        name="Desk Worker",
        description="Eye rest, hydration, and posture reminders for office work",
        reminder_specs=tuple(
            _specs(ReminderType.eye_rest, WEEKDAYS, "10:00", "12:00", "14:00", "16:00")
            + _specs(ReminderType.water, WEEKDAYS, "09:00", "11:00", "13:00", "15:00", "17:00")
            + _specs(ReminderType.posture, WEEKDAYS, "09:30", "13:30", "15:30")
        ),
    ),
    TemplatePack(
        id="mindfulness",
        name="Mindfulness",
        description="Meditation and periodic check-ins for mental wellness",
        reminder_specs=tuple(_specs(ReminderType.meditation, EVERY_DAY, "07:30", "18:00")),
    ),
    TemplatePack(
        id="hydration",
        name="Hydration",
        description="Regular water reminders throughout the day",
        reminder_specs=tuple(
            _specs(
                ReminderType.water, EVERY_DAY,
                "08:00", "10:00", "12:00", "14:00", "16:00", "18:00", "20:00",
            )
        ),
    ),
    TemplatePack(
        id="work_breaks",
        name="Work Breaks",
        description="Structured breaks to reduce strain and increase productivity",
        reminder_specs=tuple(
            _specs(ReminderType.stretch, WEEKDAYS, "10:00", "13:00", "15:00", "17:00")
            + _specs(ReminderType.eye_rest, WEEKDAYS, "11:30", "14:30", "16:30")
        ),
    ),
)

_PACKS_BY_ID = {p.id: p for p in TEMPLATE_PACKS}


def get_template_pack(pack_id: str) -> TemplatePack:
    try:
        return _PACKS_BY_ID[pack_id]
    except KeyError:
        raise TemplatePackNotFoundError(pack_id) from None


def reminder_request_from_spec(spec: ReminderSpec) -> ReminderRequest:
    """Enabled, no message, the type's default sound."""
    return ReminderRequest(spec=spec, enabled=True, message="")


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class TemplateItemResult:
    """Outcome of one spec. `error` holds the first error message on failure."""
    index: int
    ok: bool
    reminder: Optional[Reminder] = None
    error: Optional[str] = None


@dataclass
class TemplateApplyResult:
    pack_id: str
    total: int
    items: list[TemplateItemResult] = field(default_factory=list)

    @property
    def reminders(self) -> list[Reminder]:
        return [i.reminder for i in self.items if i.ok and i.reminder is not None]

    @property
    def succeeded(self) -> int:
        return sum(1 for i in self.items if i.ok)

    @property
    def failed(self) -> int:
        return len(self.items) - self.succeeded

    @property
    def errors(self) -> dict[int, str]:
        return {i.index: i.error for i in self.items if not i.ok and i.error}


# ---------------------------------------------------------------------------
# Public — progress stream
# ---------------------------------------------------------------------------

async def iter_apply_template(
    pack: TemplatePack,
    create_reminder: CreateReminder,
) -> AsyncIterator[TemplateItemResult]:
    """
    Create each spec in order, yielding one TemplateItemResult per attempt.
    Sequential on purpose: progress stays monotonic and the store sees at
    most one write in flight.
    """
    total = len(pack.reminder_specs)
    for i, spec in enumerate(pack.reminder_specs):
        try:
            reminder = await create_reminder(reminder_request_from_spec(spec))
        except Exception as exc:
            logger.warning(
                "Template %s: reminder %d/%d (%s at %s) failed: %s",
                pack.id, i + 1, total, spec.type.value, spec.time_of_day, exc,
            )
            yield TemplateItemResult(index=i, ok=False, error=str(exc) or type(exc).__name__)
        else:
            yield TemplateItemResult(index=i, ok=True, reminder=reminder)


# ---------------------------------------------------------------------------
# Public — batch
# ---------------------------------------------------------------------------

async def apply_template(
    pack: TemplatePack,
    create_reminder: CreateReminder,
    on_item_done: Optional[OnItemDone] = None,
    on_complete: Optional[OnComplete] = None,
) -> TemplateApplyResult:
    """
    Apply every spec of `pack` through `create_reminder`.

    `on_item_done(reminder | None, index, total)` fires after each attempt in
    spec order; `on_complete(reminders)` fires once with only the successful
    reminders. Returns the per-item results; the caller reports failures.
    """
    result = TemplateApplyResult(pack_id=pack.id, total=len(pack.reminder_specs))

    async for item in iter_apply_template(pack, create_reminder):
        result.items.append(item)
        if on_item_done is not None:
            on_item_done(item.reminder, item.index, result.total)

    logger.info(
        "Template %s applied: %d of %d reminders created",
        pack.id, result.succeeded, result.total,
    )
    if on_complete is not None:
        on_complete(result.reminders)
    return result
