# app/routers/dashboard.py
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import Optional
from datetime import datetime
import logging

from app.database import get_db
from app.schemas.dashboard import AnalyticsReport, CountReport, MemberTrendReport
from app.services.analytics import AnalyticsAggregator, AnalyticsError, AnalyticsScope, MemberNotFoundError
from app.utils.task_filter import DateRange

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


def build_scope(
    user_id: Optional[int],
    is_admin: str,
    start_date: Optional[datetime],
    end_date: Optional[datetime]
) -> AnalyticsScope:
    """Turn query parameters into an analytics scope"""
    admin = is_admin == "true"
    if not admin and user_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="userId is required when isAdmin is not true"
        )
    return AnalyticsScope(
        subject_user_id=user_id,
        is_admin=admin,
        date_range=DateRange.from_bounds(start_date, end_date)
    )


def server_error(error: AnalyticsError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"message": "Server error", "error": str(error)}
    )


@router.get("/analytics", response_model=AnalyticsReport)
def get_dashboard_analytics(
    user_id: Optional[int] = Query(None, alias="userId"),
    is_admin: str = Query("false", alias="isAdmin"),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    db: Session = Depends(get_db)
):
    """Get dashboard analytics for a user's own tasks, or all tasks for admins"""
    scope = build_scope(user_id, is_admin, start_date, end_date)
    try:
        return AnalyticsAggregator(db).compute_analytics(scope)
    except AnalyticsError as e:
        raise server_error(e)


@router.get("/counts", response_model=CountReport)
def get_task_counts(
    user_id: Optional[int] = Query(None, alias="userId"),
    is_admin: str = Query("false", alias="isAdmin"),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    db: Session = Depends(get_db)
):
    """Get total/pending/completed counts per task type"""
    scope = build_scope(user_id, is_admin, start_date, end_date)
    try:
        return AnalyticsAggregator(db).compute_counts(scope)
    except AnalyticsError as e:
        raise server_error(e)


@router.get("/member-trend", response_model=MemberTrendReport)
def get_member_trend(
    member_username: str = Query(..., alias="memberUsername"),
    is_admin: str = Query("false", alias="isAdmin"),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    db: Session = Depends(get_db)
):
    """Get trends and performance for a single team member - admin only"""
    if is_admin != "true":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins can view member trends"
        )

    try:
        return AnalyticsAggregator(db).compute_member_trend(
            member_username,
            DateRange.from_bounds(start_date, end_date)
        )
    except MemberNotFoundError as e:
        logger.info(f"Member trend requested for unknown user {e.username}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except AnalyticsError as e:
        raise server_error(e)
