import asyncio
import logging
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from playground.api.deps import get_executor, get_profiles
from playground.api.routers import run as r_run
from playground.core.config import Settings, get_settings
from playground.core.errors import ExecutionError
from playground.core.logging import setup_logging
from playground.languages import LanguageProfile, build_profiles
from playground.schemas.run import CompileResponse
from playground.services.run import Executor

logger = logging.getLogger(__name__)

GREETING = "Hello, World! Welcome to the Solana Playground Service (Rust + TypeScript)"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info("Starting %s", settings.APP_NAME)
    logger.info(
        "Configuration: host=%s port=%s solana_url=%s solana_ws_url=%s "
        "timeout=%ss workspace_mode=%s",
        settings.HOST,
        settings.PORT,
        settings.SOLANA_URL,
        settings.SOLANA_WS_URL,
        settings.EXECUTION_TIMEOUT_S,
        settings.WORKSPACE_MODE,
    )
    for profile in app.state.profiles.values():
        logger.info("%s workspace: %s", profile.name, profile.workspace)
        if not profile.workspace.exists():
            logger.warning(
                "%s workspace directory does not exist: %s",
                profile.name,
                profile.workspace,
            )
    yield


def create_app(
    settings: Settings | None = None,
    profiles: dict[str, LanguageProfile] | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.settings = settings
    app.state.profiles = profiles or build_profiles(settings)
    app.state.executor = Executor(settings)

    app.add_middleware(
        CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"]
    )
    app.include_router(r_run.router)

    @app.exception_handler(ExecutionError)
    async def execution_error(request: Request, exc: ExecutionError):
        body = CompileResponse(success=False, output="", error=exc.message)
        return JSONResponse(status_code=exc.status_code, content=body.model_dump())

    @app.get("/", response_class=PlainTextResponse)
    async def hello():
        return GREETING

    @app.get("/health")
    async def health(
        executor: Executor = Depends(get_executor),
        profiles: dict[str, LanguageProfile] = Depends(get_profiles),
    ):
        names = list(profiles)
        results = await asyncio.gather(
            *(executor.check_toolchain(profiles[n]) for n in names)
        )
        status = dict(zip(names, results))
        if all(results):
            logger.info("Health check succeeded: %s", status)
            return JSONResponse(status_code=200, content=status)
        logger.warning("Health check failed: %s", status)
        return JSONResponse(status_code=503, content=status)

    return app


app = create_app()
