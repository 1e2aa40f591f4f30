"""
Lead Service.

Sales pipeline. Sales agents work only the leads assigned to them; other
roles holding can_manage_leads see every lead. A lead that reaches
closed_won is converted into a Client with a seeded onboarding checklist.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.core.exceptions import AuthorizationError, NotFoundError
from agencyhub.backend.core.rbac import Role
from agencyhub.backend.core.utils import utc_now
from agencyhub.backend.models.lead import Lead, LeadActivity
from agencyhub.backend.models.user import User
from agencyhub.backend.repositories.lead import LeadActivityRepository, LeadRepository
from agencyhub.backend.repositories.user import UserRepository
from agencyhub.backend.schemas.client import ClientCreate
from agencyhub.backend.schemas.lead import LeadActivityCreate, LeadCreate, LeadUpdate
from agencyhub.backend.services.base import BaseService
from agencyhub.backend.services.client import ClientService
from agencyhub.backend.services.notification import NotificationService

WON = "closed_won"

# Activity types that count as reaching out to the lead.
CONTACT_TYPES = frozenset({"call", "email", "sms", "meeting"})


def is_sales_agent(user: User) -> bool:
    return user.role == Role.SALES_AGENT


class LeadService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = LeadRepository(session)
        self.activity_repo = LeadActivityRepository(session)
        self.user_repo = UserRepository(session)

    async def list_leads(
        self,
        user: User,
        stage: str | None = None,
        score: str | None = None,
        source: str | None = None,
        assigned_to_id: str | None = None,
        q: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Lead], int]:
        if is_sales_agent(user):
            assigned_to_id = user.id
        filters = {
            "stage": stage,
            "score": score,
            "source": source,
            "assigned_to_id": assigned_to_id,
            "q": q,
        }
        leads = await self.repo.list_leads(limit=limit, offset=offset, **filters)
        total = await self.repo.count_leads(**filters)
        return leads, total

    async def get_lead(self, lead_id: str, user: User) -> Lead:
        """Raises NotFoundError for leads outside a sales agent's book."""
        lead = await self.repo.get_by_id(lead_id)
        if is_sales_agent(user) and lead.assigned_to_id != user.id:
            raise NotFoundError("Lead not found")
        return lead

    async def _check_assignee(self, assigned_to_id: str | None, user: User) -> None:
        if is_sales_agent(user) and assigned_to_id != user.id:
            raise AuthorizationError("Sales agents can only assign leads to themselves")
        if assigned_to_id and not await self.user_repo.exists(assigned_to_id):
            raise NotFoundError("Assignee not found")

    async def create_lead(self, data: LeadCreate, user: User) -> Lead:
        values = data.model_dump()
        if is_sales_agent(user):
            values["assigned_to_id"] = user.id
        await self._check_assignee(values["assigned_to_id"], user)

        self._log_operation("Creating lead", name=data.name, stage=data.stage, source=data.source)
        lead = await self._execute_db_operation(
            "create_lead",
            self.repo.create(**values, created_by=user.id),
        )

        await self._notify_assignment(lead, user)
        if lead.stage == WON:
            lead, _ = await self._convert(lead, user)
        return lead

    async def update_lead(self, lead_id: str, data: LeadUpdate, user: User) -> Lead:
        """
        Update a lead.

        A stage change is recorded on the timeline and moving into
        closed_won converts the lead.

        Raises:
            AuthorizationError: A sales agent reassigning the lead to someone else
        """
        lead = await self.get_lead(lead_id, user)
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return lead

        previous_assignee = lead.assigned_to_id
        if "assigned_to_id" in update_data:
            await self._check_assignee(update_data["assigned_to_id"], user)
        previous_stage = lead.stage

        self._log_operation("Updating lead", lead_id=lead_id, fields=list(update_data))
        lead = await self._execute_db_operation("update_lead", self.repo.apply(lead, **update_data))

        if lead.stage != previous_stage:
            await self._record_stage_change(lead, previous_stage, user)
        if lead.assigned_to_id != previous_assignee:
            await self._notify_assignment(lead, user)
        if lead.stage == WON and not lead.converted_to_client_id:
            lead, _ = await self._convert(lead, user)
        return lead

    async def delete_lead(self, lead_id: str, user: User) -> None:
        lead = await self.get_lead(lead_id, user)
        self._log_operation("Deleting lead", lead_id=lead_id)
        await self._execute_db_operation("delete_lead", self.repo.delete(lead.id))

    async def convert(self, lead_id: str, user: User) -> tuple[Lead, bool]:
        """
        Convert a lead into a client.

        Returns:
            The lead and whether a client was created. An already converted
            lead is returned unchanged.
        """
        lead = await self.get_lead(lead_id, user)
        return await self._convert(lead, user)

    async def _convert(self, lead: Lead, user: User) -> tuple[Lead, bool]:
        if lead.converted_to_client_id:
            self._log_debug("Lead already converted", lead_id=lead.id, client_id=lead.converted_to_client_id)
            return lead, False

        client = await ClientService(self.session).create_client(ClientCreate(
            name=lead.company or lead.name,
            email=lead.email,
            phone=lead.phone,
            company=lead.company,
            website=lead.website,
            notes=lead.notes,
            assigned_to_id=lead.assigned_to_id,
        ))

        previous_stage = lead.stage
        lead = await self._execute_db_operation(
            "convert_lead",
            self.repo.apply(lead, stage=WON, converted_to_client_id=client.id, converted_at=utc_now()),
        )
        if previous_stage != WON:
            await self._record_stage_change(lead, previous_stage, user)

        self._log_operation("Lead converted", lead_id=lead.id, client_id=client.id)
        return lead, True

    # -------------------------------------------------------------------------
    # Activities
    # -------------------------------------------------------------------------

    async def list_activities(self, lead_id: str, user: User) -> list[LeadActivity]:
        await self.get_lead(lead_id, user)
        return await self.activity_repo.get_for_lead(lead_id)

    async def add_activity(self, lead_id: str, data: LeadActivityCreate, user: User) -> LeadActivity:
        """Log an activity. Contact activities also stamp the lead's last contact."""
        lead = await self.get_lead(lead_id, user)
        activity = await self._execute_db_operation(
            "create_lead_activity",
            self.activity_repo.create(lead_id=lead.id, user_id=user.id, **data.model_dump()),
        )
        self._log_operation("Lead activity added", lead_id=lead.id, type=data.type)

        if data.type in CONTACT_TYPES:
            await self._execute_db_operation(
                "update_lead_contact",
                self.repo.apply(
                    lead,
                    last_contact_method=data.type,
                    last_contact_at=activity.created_at,
                    last_contact_notes=(data.description or "")[:500] or None,
                ),
            )

        if lead.assigned_to_id and lead.assigned_to_id != user.id:
            await NotificationService(self.session).notify(
                user_id=lead.assigned_to_id,
                title="New activity on your lead",
                message=f"{user.display_name} logged a {data.type} on {lead.name}",
                category="lead",
                action_url=f"/leads/{lead.id}",
            )
        return activity

    async def _record_stage_change(self, lead: Lead, from_stage: str, user: User) -> None:
        await self._execute_db_operation(
            "create_lead_activity",
            self.activity_repo.create(
                lead_id=lead.id,
                user_id=user.id,
                type="stage_change",
                subject=f"Stage changed to {lead.stage}",
                details={"from": from_stage, "to": lead.stage},
            ),
        )

    async def _notify_assignment(self, lead: Lead, actor: User) -> None:
        if not lead.assigned_to_id or lead.assigned_to_id == actor.id:
            return
        await NotificationService(self.session).notify(
            user_id=lead.assigned_to_id,
            title="New lead assigned",
            message=f"{actor.display_name} assigned you the lead {lead.name}",
            category="lead",
            action_url=f"/leads/{lead.id}",
        )
