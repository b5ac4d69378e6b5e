# homework_helper/main.py

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

# Роутер, который собирает все API-эндпоинты
from homework_helper.api.v1.api import api_router

from homework_helper.core.config import settings
from homework_helper.core.exceptions import (
    ActionError,
    action_error_handler,
    global_exception_handler,
    request_validation_exception_handler,
)
from homework_helper.db.session import engine, init_models

# Настраиваем логирование для API процесса
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("APIProcess")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Жизненный цикл API: при необходимости создаем таблицы, при остановке закрываем пул.
    """
    logger.info("API process starting up...")
    if settings.CREATE_TABLES_ON_STARTUP:
        await init_models(engine)

    yield

    logger.info("API process shutting down...")
    await engine.dispose()
    logger.info("Database engine has been disposed.")


app = FastAPI(
    title="Homework Helper API",
    version="1.0.0",
    description="Homework questions, answers and AI generation job records.",
    lifespan=lifespan
)

# --- Обработчики ошибок ---
app.add_exception_handler(ActionError, action_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# --- Настройка CORS ---
origins = [
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:4321",  # для Astro
    "http://localhost:5173",  # для Vite
    *settings.cors_origins_list,
]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


# --- Корневой эндпоинт для проверки работы ---
@app.get("/", include_in_schema=False)
def read_root():
    return {"status": "ok", "message": "Homework Helper API is running."}
