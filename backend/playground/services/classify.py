from playground.core.errors import CompileFailure, ExecutionError, RuntimeFailure
from playground.languages import LanguageProfile


def is_compile_error(profile: LanguageProfile, stderr: str) -> bool:
    return any(marker in stderr for marker in profile.compile_markers)


def classify(profile: LanguageProfile, stderr: str) -> ExecutionError:
    """Best-effort split of a failed run into compile vs runtime failure.

    This is substring matching against the profile's markers, not a parse of
    the toolchain's diagnostics, so misclassification is possible.
    """
    if is_compile_error(profile, stderr):
        return CompileFailure(stderr)
    return RuntimeFailure(stderr)
