# civic_reports/routers/reports_stats.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List
from civic_reports.db.session import get_db
from civic_reports.schemas.report import StatusSummaryOut, MapPointOut
from civic_reports.services import queries

router = APIRouter(prefix="/reports/stats", tags=["reports:stats"])

@router.get("/summary", response_model=StatusSummaryOut)
def summary(range: str = Query("all"), db: Session = Depends(get_db)):
    reports = queries.reports_created_since(queries.list_reports(db), queries.range_to_dt(range))
    counts = queries.count_by_status(reports)
    return {
        "total": len(reports),
        "unresolved": counts["unresolved"],
        "assigned": counts["assigned"],
        "resolved": counts["resolved"],
        "community": sum(1 for r in reports if r.community),
    }

@router.get("/by-department")
def by_department(db: Session = Depends(get_db)):
    return [{"department": d, "count": n} for d, n in queries.count_by_department(queries.list_reports(db))]

@router.get("/map", response_model=List[MapPointOut])
def map_points(db: Session = Depends(get_db)):
    return [
        MapPointOut.model_validate({
            "id": r.id,
            "caption": r.caption,
            "address": r.address or "",
            "status": r.status.value,
            "latitude": r.latitude,
            "longitude": r.longitude,
        })
        for r in queries.reports_with_coordinates(queries.list_reports(db))
    ]
