import logging
from fastapi import APIRouter, Depends
from playground.api.deps import get_executor, get_profiles
from playground.core.errors import ExecutionError, RuntimeFailure
from playground.languages import LanguageProfile
from playground.schemas.run import CompileRequest, CompileResponse
from playground.services.run import Executor

router = APIRouter(tags=["run"])
logger = logging.getLogger(__name__)


async def run_snippet(
    profile: LanguageProfile, payload: CompileRequest, executor: Executor
) -> CompileResponse:
    logger.info(
        "Received %s compilation request", profile.name, extra={"language": profile.name}
    )
    try:
        outcome = await executor.execute(profile, payload.code)
    except ExecutionError:
        raise
    except Exception as e:
        # anything else is a bug on our side; report it to the caller as a failed run
        logger.exception("Unexpected failure running %s code", profile.name)
        raise RuntimeFailure(f"Task panic: {e}") from e
    return CompileResponse(success=True, output=outcome.stdout, error=None)


@router.post("/rust", response_model=CompileResponse)
async def compile_rust(
    payload: CompileRequest,
    executor: Executor = Depends(get_executor),
    profiles: dict[str, LanguageProfile] = Depends(get_profiles),
):
    """Compile and run Rust code with ``cargo run`` in the Rust workspace."""
    return await run_snippet(profiles["rust"], payload, executor)


@router.post("/typescript", response_model=CompileResponse)
async def compile_typescript(
    payload: CompileRequest,
    executor: Executor = Depends(get_executor),
    profiles: dict[str, LanguageProfile] = Depends(get_profiles),
):
    """Run TypeScript code through the template's ``pnpm run start`` script."""
    return await run_snippet(profiles["typescript"], payload, executor)
