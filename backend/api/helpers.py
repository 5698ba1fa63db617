"""Shared API helpers for route handlers.

Request-scoped dependencies and response builders used across route files.
"""

from datetime import date
from typing import Optional

from fastapi import Header, HTTPException, Query, Response

from services.report_service import DateRange

USER_HEADER = "X-User-Id"


def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """Resolve the owning user from the ``X-User-Id`` request header.

    Raises:
        HTTPException: 401 if the header is missing or blank.
    """
    if x_user_id is None or not x_user_id.strip():
        raise HTTPException(status_code=401, detail=f"Missing {USER_HEADER} header")
    return x_user_id.strip()


def get_date_range(
    from_date: Optional[date] = Query(default=None, alias="from", description="Start date (inclusive)"),
    to_date: Optional[date] = Query(default=None, alias="to", description="End date (inclusive)"),
) -> Optional[DateRange]:
    """Build a DateRange from ``?from=&to=``; None when both are absent.

    Raises:
        HTTPException: 400 if ``from`` is after ``to``.
    """
    if from_date is None and to_date is None:
        return None
    if from_date is not None and to_date is not None and from_date > to_date:
        raise HTTPException(status_code=400, detail="'from' must not be after 'to'")
    return DateRange(from_date=from_date, to_date=to_date)


def csv_response(content: str, filename: str) -> Response:
    """Wrap CSV text in a download response."""
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
