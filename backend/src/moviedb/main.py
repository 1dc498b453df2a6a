from __future__ import annotations

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from mangum import Mangum

from .config import Settings, load_dotenv_file
from .domain import Envelope
from .logger import get_logger, setup_logging
from .service import MovieService, build_service

logger = get_logger(__name__)


def create_app(settings: Settings | None = None, service: MovieService | None = None) -> FastAPI:
    if settings is None:
        load_dotenv_file()
        settings = Settings.from_env()
    setup_logging(settings.log_level)

    if service is None:
        service = build_service(settings)

    app = FastAPI(title="Movie Table Service")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    web_dir = settings.web_dir
    if web_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(web_dir)), name="static")

    @app.get("/")
    def index():
        index_path = web_dir / "index.html"
        if not index_path.exists():
            raise HTTPException(status_code=500, detail="index.html not found")
        return FileResponse(str(index_path))

    @app.get("/health")
    def health():
        return {"ok": True}

    @app.get("/create", response_model=Envelope)
    def create_table():
        return service.setup_table()

    @app.get("/delete", response_model=Envelope)
    def delete_table():
        return service.delete_table()

    @app.get("/query", response_model=Envelope)
    def query_without_year():
        return service.query(None)

    @app.get("/query/{year}", response_model=Envelope)
    def query_by_year(year: str):
        return service.query(year)

    @app.get("/query/{year}/{rating}", response_model=Envelope)
    def query_by_rating(year: str, rating: str):
        return service.query(year, rating)

    @app.get("/query/{year}/{rating}/{prefix}", response_model=Envelope)
    def query_by_prefix(year: str, rating: str, prefix: str):
        return service.query(year, rating, prefix)

    logger.info(
        "Serving table %s (store=%s, seed=%s)",
        settings.table_name,
        settings.store_backend,
        settings.seed_backend,
    )
    return app


app = create_app()
handler = Mangum(app)
