"""API V1 Router"""

from fastapi import APIRouter

from seiva.api.v1.endpoints import students, transactions, events, employees, dashboard

api_router = APIRouter()

api_router.include_router(students.router, prefix="/students", tags=["Students"])
api_router.include_router(transactions.router, prefix="/transactions", tags=["Finance"])
api_router.include_router(events.router, prefix="/events", tags=["Calendar"])
api_router.include_router(employees.router, prefix="/employees", tags=["Human Resources"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
