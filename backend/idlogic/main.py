import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from idlogic.config import settings
from idlogic.api.routes import id_logics

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configurar CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Rota de health check
@app.get("/health")
def health_check():
    """Health check para monitoramento"""
    return {"status": "healthy"}


app.include_router(id_logics.router, prefix=f"{settings.API_V1_STR}/id-logics", tags=["id-logics"])


# Evento de startup
@app.on_event("startup")
def startup_event():
    logger.info(f"[STARTUP] {settings.PROJECT_NAME} iniciado!")
    logger.info(f"[STARTUP] Ambiente: {settings.ENVIRONMENT}")

    if not settings.CREATE_TABLES_ON_STARTUP:
        return

    # Criar tabelas do banco de dados automaticamente
    try:
        from idlogic.database import engine
        from idlogic.models import Base
        Base.metadata.create_all(bind=engine)
        logger.info("[STARTUP] Tabelas do banco de dados criadas/verificadas!")
    except Exception as e:
        logger.error(f"[STARTUP] Erro ao criar tabelas: {e}")


@app.on_event("shutdown")
def shutdown_event():
    logger.info("[SHUTDOWN] Sistema encerrado!")
