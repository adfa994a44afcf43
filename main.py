"""
Aplicação principal da plataforma de análise de CSV.

Inicializa o servidor FastAPI com as rotas de análise.
"""
import logging
import time

from fastapi import FastAPI, Request

from app.config import ANALYSIS_RANDOM_SEED, LOG_LEVEL
from app.routers import analyses_router
from app.services.analysis import AnalysisService
from app.services.randomness import RandomSource
from app.store import AnalysisStore, create_store

logging.basicConfig(level=LOG_LEVEL)

logger = logging.getLogger("csv_analysis")


def create_app(store: AnalysisStore | None = None, rng: RandomSource | None = None) -> FastAPI:
    """
    Cria a aplicação com o armazenamento e a fonte de aleatoriedade informados.

    Parâmetros:
        store: Armazenamento das análises (padrão: o configurado em ANALYSIS_STORE_BACKEND).
        rng: Fonte de aleatoriedade (padrão: semeada por ANALYSIS_RANDOM_SEED).
    """
    app = FastAPI(
        title="CSV Analysis Platform",
        description="Análise simulada de arquivos CSV: tipos, mapeamentos, correlações e insights",
        version="1.0.0"
    )

    app.state.store = store if store is not None else create_store()
    app.state.analysis_service = AnalysisService(
        app.state.store,
        rng=rng or RandomSource(ANALYSIS_RANDOM_SEED)
    )

    @app.middleware("http")
    async def request_logging(request: Request, call_next):
        start = time.time()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            duration_ms = int((time.time() - start) * 1000)
            logger.info(
                "method=%s path=%s status=%s duration_ms=%d",
                request.method, request.url.path, status, duration_ms
            )

    app.include_router(analyses_router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
