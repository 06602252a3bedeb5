from fastapi import APIRouter
from endpoints.tasks import router as tasks_router
from endpoints.chat_ws import router as chat_ws_router

api_router = APIRouter()
api_router.include_router(tasks_router)
api_router.include_router(chat_ws_router, tags=["chat"])
