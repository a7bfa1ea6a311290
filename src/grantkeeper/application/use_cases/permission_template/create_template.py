"""Create a permission template."""

import re
from datetime import UTC, datetime
from uuid import uuid4

from grantkeeper.application.ports import UserSession
from grantkeeper.application.services.permission_request_support import (
    PermissionRequestSupport,
)
from grantkeeper.domain.entities import PermissionTemplate
from grantkeeper.domain.exceptions import ValidationError
from grantkeeper.domain.value_objects import GlobalScope
from grantkeeper.logging import get_logger

log = get_logger(__name__)


def validate_key_pattern(pattern: str | None) -> None:
    if not pattern:
        return
    try:
        re.compile(pattern)
    except re.error:
        raise ValidationError(
            "The 'projectKeyPattern' parameter must be a valid regular expression. "
            f"'{pattern}' was passed"
        ) from None


class CreateTemplateUseCase:
    """Create an empty template. Caller must administer the organization."""

    def __init__(
        self,
        unit_of_work_factory: type,
        support: PermissionRequestSupport | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._support = support or PermissionRequestSupport()

    async def execute(
        self,
        session: UserSession,
        name: str,
        description: str | None = None,
        project_key_pattern: str | None = None,
        organization_key: str | None = None,
    ) -> PermissionTemplate:
        session.check_logged_in()
        async with self._uow_factory() as uow:
            organization = await self._support.find_organization(uow, organization_key)
            await session.check_scope_admin(GlobalScope(organization.uuid))

            name = (name or "").strip()
            if not name:
                raise ValidationError("The template name must not be blank")
            validate_key_pattern(project_key_pattern)
            if await uow.templates.get_by_name(organization.uuid, name) is not None:
                raise ValidationError(
                    f"A template with the name '{name}' already exists (case insensitive)."
                )

            now = datetime.now(UTC)
            template = PermissionTemplate(
                uuid=str(uuid4()),
                organization_uuid=organization.uuid,
                name=name,
                description=description,
                key_pattern=project_key_pattern,
                created_at=now,
                updated_at=now,
            )
            await uow.templates.insert(template)

        log.info("permission_template_created", template_uuid=template.uuid, name=name)
        return template
