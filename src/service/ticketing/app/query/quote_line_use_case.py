from datetime import date
from typing import Optional
from uuid import UUID

from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.types.utc_datetime import museum_today
from src.service.catalog.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.inventory.app.interface.i_time_slot_query_repo import ITimeSlotQueryRepo
from src.service.shared_kernel.domain.value_object.ticket_counts import TicketCounts
from src.service.ticketing.app.dto.line_quote import LineQuote


GENERAL_ADMISSION_NAME = 'General Admission'


class QuoteLineUseCase:
    """
    Validate and price one booking line before capacity is reserved

    Reads only; the reservation writer stays authoritative for capacity and
    for slots deactivated after this check.
    """

    def __init__(
        self,
        *,
        catalog_query_repo: ICatalogQueryRepo,
        time_slot_query_repo: ITimeSlotQueryRepo,
    ) -> None:
        self.catalog_query_repo = catalog_query_repo
        self.time_slot_query_repo = time_slot_query_repo

    @Logger.io
    async def execute(
        self,
        *,
        time_slot_id: UUID,
        booking_date: date,
        counts: TicketCounts,
        exhibition_id: Optional[UUID] = None,
        show_id: Optional[UUID] = None,
    ) -> LineQuote:
        counts.validate_bookable()
        if booking_date < museum_today():
            raise DomainError('Cannot book a date in the past')

        slot = await self.time_slot_query_repo.get_by_id(time_slot_id=time_slot_id)
        if slot is None or not slot.is_active:
            raise NotFoundError('Time slot not found')
        if (exhibition_id is not None and exhibition_id != slot.exhibition_id) or (
            show_id is not None and show_id != slot.show_id
        ):
            raise DomainError('Time slot does not belong to the selected exhibition or show')
        slot.validate_serves_date(booking_date)

        item_name = await self._item_name(slot.exhibition_id, slot.show_id, booking_date)
        price_list = await self.catalog_query_repo.get_price_list(
            exhibition_id=slot.exhibition_id, show_id=slot.show_id
        )
        return LineQuote(
            slot=slot,
            booking_date=booking_date,
            counts=counts,
            subtotal=price_list.subtotal_for(counts),
            item_name=item_name,
            exhibition_id=slot.exhibition_id,
            show_id=slot.show_id,
        )

    async def _item_name(
        self, exhibition_id: Optional[UUID], show_id: Optional[UUID], booking_date: date
    ) -> str:
        if exhibition_id is not None:
            exhibition = await self.catalog_query_repo.get_exhibition(exhibition_id=exhibition_id)
            if exhibition is None or not exhibition.is_bookable:
                raise NotFoundError('Exhibition not found')
            if exhibition.start_date and booking_date < exhibition.start_date:
                raise DomainError('Exhibition has not opened on this date')
            if exhibition.end_date and booking_date > exhibition.end_date:
                raise DomainError('Exhibition has closed on this date')
            return exhibition.name
        if show_id is not None:
            show = await self.catalog_query_repo.get_show(show_id=show_id)
            if show is None or not show.is_active:
                raise NotFoundError('Show not found')
            return show.name
        return GENERAL_ADMISSION_NAME
