"""
Ticket Service.

Support tickets. Client users open tickets for their own client and only
see or change the tickets they created; roles with can_manage_tickets
(other than client) manage every ticket.
"""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.core.exceptions import AuthorizationError, ValidationError
from agencyhub.backend.core.rbac import is_staff
from agencyhub.backend.core.utils import utc_now
from agencyhub.backend.models.ticket import Ticket
from agencyhub.backend.models.user import User
from agencyhub.backend.repositories.client import ClientRepository
from agencyhub.backend.repositories.ticket import TicketRepository
from agencyhub.backend.schemas.ticket import TicketCreate, TicketUpdate
from agencyhub.backend.services.base import BaseService

RESOLVED = "resolved"

# open -> in_progress -> resolved; resolved and closed are terminal for advance.
ADVANCE = {"open": "in_progress", "in_progress": RESOLVED}


def resolved_at_for(status: str, current_status: str, resolved_at: datetime | None) -> datetime | None:
    """resolved_at after moving a ticket from ``current_status`` to ``status``."""
    if status == RESOLVED:
        return resolved_at if current_status == RESOLVED and resolved_at else utc_now()
    if status in ("open", "in_progress"):
        return None
    return resolved_at


class TicketService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = TicketRepository(session)
        self.client_repo = ClientRepository(session)

    def _owner_filter(self, user: User) -> str | None:
        return None if is_staff(user.role) else user.id

    def _check_access(self, ticket: Ticket, user: User) -> None:
        if not is_staff(user.role) and ticket.created_by != user.id:
            raise AuthorizationError("You can only access tickets you created")

    async def list_tickets(
        self,
        user: User,
        status: str | None = None,
        priority: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Ticket], int]:
        created_by = self._owner_filter(user)
        tickets = await self.repo.list_tickets(status, priority, created_by, limit=limit, offset=offset)
        total = await self.repo.count_tickets(status, priority, created_by)
        return tickets, total

    async def get_ticket(self, ticket_id: str, user: User) -> Ticket:
        ticket = await self.repo.get_by_id(ticket_id)
        self._check_access(ticket, user)
        return ticket

    async def create_ticket(self, data: TicketCreate, user: User) -> Ticket:
        values = data.model_dump()
        if not is_staff(user.role):
            values["client_id"] = self._client_scope(user)
            values["assigned_to_id"] = None
        elif values["client_id"]:
            await self.client_repo.get_by_id(values["client_id"])

        self._log_operation(
            "Creating ticket",
            subject=data.subject,
            priority=data.priority,
            client_id=values["client_id"],
        )
        return await self._execute_db_operation(
            "create_ticket",
            self.repo.create(**values, created_by=user.id),
        )

    async def update_ticket(self, ticket_id: str, data: TicketUpdate, user: User) -> Ticket:
        ticket = await self.get_ticket(ticket_id, user)
        update_data = data.model_dump(exclude_unset=True)
        if not is_staff(user.role):
            update_data.pop("assigned_to_id", None)
        if not update_data:
            return ticket

        if "status" in update_data:
            update_data["resolved_at"] = resolved_at_for(
                update_data["status"], ticket.status, ticket.resolved_at,
            )

        self._log_operation("Updating ticket", ticket_id=ticket_id, fields=list(update_data))
        return await self._execute_db_operation(
            "update_ticket",
            self.repo.apply(ticket, **update_data),
        )

    async def advance(self, ticket_id: str, user: User) -> Ticket:
        """
        Step open -> in_progress -> resolved.

        Raises:
            ValidationError: If the ticket is already resolved or closed
        """
        ticket = await self.get_ticket(ticket_id, user)
        new_status = ADVANCE.get(ticket.status)
        if new_status is None:
            raise ValidationError(
                f"Ticket is {ticket.status} and cannot advance",
                details={"status": ticket.status},
            )

        self._log_operation("Advancing ticket", ticket_id=ticket_id, old=ticket.status, new=new_status)
        return await self._execute_db_operation(
            "advance_ticket",
            self.repo.apply(
                ticket,
                status=new_status,
                resolved_at=resolved_at_for(new_status, ticket.status, ticket.resolved_at),
            ),
        )

    async def delete_ticket(self, ticket_id: str, user: User) -> None:
        ticket = await self.get_ticket(ticket_id, user)
        self._log_operation("Deleting ticket", ticket_id=ticket_id)
        await self._execute_db_operation("delete_ticket", self.repo.delete(ticket.id))
