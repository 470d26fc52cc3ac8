from fastapi import APIRouter

from ticketdesk.config import settings

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok", "version": settings.app.version}
