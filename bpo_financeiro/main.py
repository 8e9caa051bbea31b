import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bpo_financeiro.api import auth, charts, dashboard, patterns, profile, transactions
from bpo_financeiro.core.config import CORS_ORIGINS, LOG_LEVEL
from bpo_financeiro.database import create_db_and_tables

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    yield

app = FastAPI(title="BPO Financeiro", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    # Detalhes técnicos vão para o log, nunca para a resposta
    logger.exception("Erro inesperado em %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Erro interno. Tente novamente mais tarde"})

app.include_router(auth.router)
app.include_router(dashboard.router)
app.include_router(transactions.router)
app.include_router(charts.router)
app.include_router(patterns.router)
app.include_router(profile.router)

@app.get("/")
def root():
    return {"message": "Servidor BPO Financeiro"}
