"""FastAPI application - serves the tempo and rhythm API."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from beatpulse.api.patterns import router as patterns_router
from beatpulse.api.websocket import router as ws_router

app = FastAPI(title="Beatpulse", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(patterns_router, prefix="/api")
app.include_router(ws_router, prefix="/api")


@app.get("/api/health")
async def health():
    return {"status": "ok"}


def run():
    import uvicorn
    from beatpulse.config import settings
    uvicorn.run(
        "beatpulse.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
    )
