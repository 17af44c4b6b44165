from sqlalchemy.ext.asyncio import AsyncSession
from app.models.support.activity_models import ActivityLog
from app.constants.activity_templates import ACTIVITY_TEMPLATES
from app.constants.activity_codes import ActivityCode


async def emit_activity(
    db: AsyncSession,
    *,
    actor_email: str | None,
    code: ActivityCode,
    **context,
):
    """Queue an audit entry on the session; it is persisted with the caller's commit."""
    template = ACTIVITY_TEMPLATES.get(code)
    if not template:
        raise ValueError(f"No activity template for code {code}")

    try:
        message = template.format(actor_email=actor_email or "system", **context)
    except KeyError as e:
        raise ValueError(
            f"Missing activity context key: {e.args[0]} for {code}"
        )

    db.add(
        ActivityLog(
            actor_email=actor_email,
            message=message,
        )
    )
