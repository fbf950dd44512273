import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ....infrastructure.db import get_db
from ....infrastructure.metrics import report_batches_total
from ....infrastructure.repositories import ReportRepository
from ....application.use_cases.save_report import SaveReport
from ....domain.entities import Claims
from ..authz import get_claims, require_admin_or_teacher
from ..schemas import BoletinReq, BoletinResp, MessageResp
from .users import server_error

logger = structlog.get_logger()

router = APIRouter(prefix="/api/boletin", tags=["boletin"])


def _report(db: Session, alumno_id: int) -> BoletinResp:
    try:
        rows = ReportRepository(db).report_for(alumno_id)
    except SQLAlchemyError as e:
        raise server_error(e)
    return BoletinResp(boletin=rows)


@router.get("/me", response_model=BoletinResp)
def my_report(claims: Claims = Depends(get_claims), db: Session = Depends(get_db)):
    return _report(db, claims.id)


@router.get("/{alumno_id}", response_model=BoletinResp, dependencies=[Depends(require_admin_or_teacher)])
def student_report(alumno_id: int, db: Session = Depends(get_db)):
    return _report(db, alumno_id)


@router.post("", response_model=MessageResp)
def save_report(payload: BoletinReq, claims: Claims = Depends(require_admin_or_teacher),
                db: Session = Depends(get_db)):
    if not payload.alumnoId or payload.notas is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                            detail='"alumnoId" and a "notas" array are required.')
    notas = [n.model_dump() for n in payload.notas]
    try:
        saved = SaveReport(repo=ReportRepository(db)).execute(payload.alumnoId, notas)
    except SQLAlchemyError as e:
        # the repository has already rolled the whole batch back
        report_batches_total.labels(outcome="rolled_back").inc()
        logger.error("report_save_failed", alumno_id=payload.alumnoId, by=claims.id, error=str(e))
        raise HTTPException(status_code=500, detail={"message": "Error saving the report.", "error": str(e)})
    report_batches_total.labels(outcome="committed").inc()
    logger.info("report_saved", alumno_id=payload.alumnoId, entries=saved, by=claims.id)
    return MessageResp(message="Report saved successfully.")
