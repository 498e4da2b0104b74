# app/api/v1/router.py
from fastapi import APIRouter
from app.api.v1 import (
    auth,
    users,
    students,
    slots,
    attendance,
    documents,
    reports,
)

api_router = APIRouter()

api_router.include_router(auth.router,       prefix="/auth",       tags=["auth"])
api_router.include_router(users.router,      prefix="/users",      tags=["users"])
api_router.include_router(students.router,   prefix="/students",   tags=["students"])
# GET /schedules e GET /slots/occupancy
api_router.include_router(slots.router,                            tags=["slots"])
api_router.include_router(attendance.router, prefix="/attendance", tags=["attendance"])
api_router.include_router(documents.router,  prefix="/documents",  tags=["documents"])
api_router.include_router(reports.router,    prefix="/reports",    tags=["reports"])
