from fastapi import APIRouter, Depends

from ..deps import get_store
from ..infra.store import DataStore

router = APIRouter()


@router.get("/ready")
def ready(store: DataStore = Depends(get_store)):
    return {"ok": True, "db_ok": store.ping()}
