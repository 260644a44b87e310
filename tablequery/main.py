import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tablequery.app.config import settings
from tablequery.app.routers import query as query_router
from tablequery.app.routers import upload as upload_router

# All tablequery.* loggers inherit this
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(name)s] %(levelname)s  %(message)s",
    datefmt="%H:%M:%S",
)

app = FastAPI(title="Table Query API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(upload_router.router, prefix="/api", tags=["upload"])
app.include_router(query_router.router, prefix="/api", tags=["query"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
