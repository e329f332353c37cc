"""
Health check da API
"""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from instagram.core.config import settings
from instagram.core.dependencies import get_db

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/health",
    tags=["Health Check"],
)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _database_reachable(db: Session) -> bool:
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error(f"Erro ao conectar com banco de dados: {e}")
        return False


@router.get(
    "/",
    status_code=status.HTTP_200_OK,
    summary="Health Check",
    description="Verifica o status da API e a conectividade com o banco de dados"
)
def health_check(db: Session = Depends(get_db)):
    db_status = "healthy" if _database_reachable(db) else "unhealthy"
    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "timestamp": _timestamp(),
        "environment": settings.ENVIRONMENT,
        "database": {
            "status": db_status
        },
    }


@router.get(
    "/ready",
    summary="Readiness Check",
    description="Verifica se a API está pronta para receber requisições"
)
def readiness_check(db: Session = Depends(get_db)):
    if _database_reachable(db):
        return {"status": "ready", "timestamp": _timestamp()}
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "timestamp": _timestamp()},
    )


@router.get(
    "/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness Check",
)
def liveness_check():
    return {
        "status": "alive",
        "timestamp": _timestamp()
    }
