from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

import models  # noqa: F401  註冊資料表到 Base.metadata
from database import Base, engine, SessionLocal, get_settings
from core.context import create_context
from api import teachers, rooms, requests, chat, notifications


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: 建立資料表與同步層（EventBus 由這裡擁有）
    Base.metadata.create_all(bind=engine)
    app.state.context = create_context(SessionLocal, get_settings())
    yield
    # Shutdown: 如果需要清理資源可以加在這裡


app = FastAPI(
    title="TopChess Sync API",
    description="Local state-synchronization layer for the TopChess student/teacher marketplace",
    version="1.0.0",
    lifespan=lifespan
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure this properly in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(teachers.router)
app.include_router(rooms.router)
app.include_router(requests.router)
app.include_router(chat.router)
app.include_router(notifications.router)


@app.get("/")
def root():
    return {"message": "TopChess Sync API", "status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
