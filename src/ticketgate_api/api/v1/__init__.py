from fastapi import APIRouter

from .endpoints import health, tickets

router = APIRouter()
router.include_router(health.router, tags=["Health"])
router.include_router(tickets.router)
