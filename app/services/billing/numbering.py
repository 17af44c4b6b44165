import uuid
from datetime import datetime, timezone
from typing import Callable, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants.studio import SEQUENCE_PAD
from app.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def sequence_stem(prefix: str, now: datetime | None = None) -> str:
    year = (now or datetime.now(timezone.utc)).strftime("%y")
    return f"{prefix}-{year}-"


def parse_sequence(value: str, stem: str) -> int | None:
    if not value or not value.startswith(stem):
        return None
    digits = value[len(stem):].split("-", 1)[0]
    return int(digits) if digits.isdigit() else None


async def next_sequence_number(
    db: AsyncSession,
    column,
    prefix: str,
    now: datetime | None = None,
) -> str:
    """Scan this year's numbers for the highest suffix and return the next one."""
    stem = sequence_stem(prefix, now)
    result = await db.execute(select(column).where(column.like(f"{stem}%")))

    highest = 0
    for value in result.scalars():
        n = parse_sequence(value, stem)
        if n is not None and n > highest:
            highest = n

    return f"{stem}{highest + 1:0{SEQUENCE_PAD}d}"


def with_random_suffix(number: str) -> str:
    return f"{number}-{uuid.uuid4().hex[:4].upper()}"


async def add_with_sequence(
    db: AsyncSession,
    build: Callable[[str], T],
    column,
    prefix: str,
) -> T:
    """
    Insert the row built for the next sequence number.

    Scan-then-insert races with concurrent creators. When the number is
    taken by the time we insert, the savepoint is rolled back and the insert
    is retried once with a random suffix appended.
    """
    number = await next_sequence_number(db, column, prefix)

    try:
        async with db.begin_nested():
            obj = build(number)
            db.add(obj)
    except IntegrityError:
        retry_number = with_random_suffix(number)
        logger.warning(
            "Sequence number collision, retrying",
            extra={"number": number, "retry_number": retry_number},
        )
        async with db.begin_nested():
            obj = build(retry_number)
            db.add(obj)

    return obj
