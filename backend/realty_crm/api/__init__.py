from fastapi import APIRouter
from realty_crm.api import auth, users, properties, clients, leads

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/api")
api_router.include_router(users.router, prefix="/api")
api_router.include_router(properties.router, prefix="/api")
api_router.include_router(clients.router, prefix="/api")
api_router.include_router(leads.router, prefix="/api")
