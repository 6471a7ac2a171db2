from fastapi import APIRouter

from statsync.api import sync

router = APIRouter()
router.include_router(sync.router)
