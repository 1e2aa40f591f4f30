"""Unit tests for partial-update schemas refusing null on required columns."""

import pytest
from pydantic import ValidationError

from agencyhub.backend.schemas.blog import BlogPostUpdate
from agencyhub.backend.schemas.client import ClientUpdate
from agencyhub.backend.schemas.lead import LeadUpdate
from agencyhub.backend.schemas.task import TaskSpaceUpdate, TaskUpdate
from agencyhub.backend.schemas.ticket import TicketUpdate
from agencyhub.backend.schemas.user import UserUpdate
from agencyhub.backend.schemas.vault import VaultItemUpdate


@pytest.mark.parametrize(
    ("schema", "field"),
    [
        (ClientUpdate, "name"),
        (ClientUpdate, "status"),
        (TaskUpdate, "title"),
        (TaskUpdate, "checklist"),
        (TaskSpaceUpdate, "color"),
        (TicketUpdate, "subject"),
        (BlogPostUpdate, "tags"),
        (LeadUpdate, "stage"),
        (UserUpdate, "role"),
        (VaultItemUpdate, "name"),
    ],
)
def test_explicit_null_rejected(schema, field):
    with pytest.raises(ValidationError) as exc_info:
        schema.model_validate({field: None})
    assert exc_info.value.errors()[0]["loc"] == (field,)


@pytest.mark.parametrize(
    ("schema", "field"),
    [
        (ClientUpdate, "notes"),
        (TaskUpdate, "due_date"),
        (TicketUpdate, "assigned_to_id"),
        (LeadUpdate, "next_follow_up"),
        (VaultItemUpdate, "notes"),
    ],
)
def test_nullable_fields_accept_null(schema, field):
    update = schema.model_validate({field: None})
    assert update.model_dump(exclude_unset=True) == {field: None}


def test_omitted_fields_are_not_checked():
    assert TaskUpdate().model_dump(exclude_unset=True) == {}
