from fastapi import APIRouter

from rollcall.api import categories, events, students, summary, system

api_router = APIRouter()
api_router.include_router(system.router)
api_router.include_router(students.router)
api_router.include_router(categories.router)
api_router.include_router(events.router)
api_router.include_router(summary.router)
