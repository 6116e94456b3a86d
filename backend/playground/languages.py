from dataclasses import dataclass
from pathlib import Path
from playground.core.config import Settings


@dataclass(frozen=True)
class LanguageProfile:
    """Static description of how one language's workspace is built and run."""

    name: str
    workspace: Path
    source_file: str
    command: tuple[str, ...]
    version_command: tuple[str, ...]
    # stderr substrings that mark a failure as a compile-time one
    compile_markers: tuple[str, ...]

    @property
    def source_path(self) -> Path:
        return self.workspace / self.source_file


RUST_COMPILE_MARKERS = (
    "error[E",
    "could not compile",
    "error: aborting due to",
)

TYPESCRIPT_COMPILE_MARKERS = (
    "TypeScript error",
    "TypeError",
    "SyntaxError",
)


def rust_profile(workspace: str | Path) -> LanguageProfile:
    return LanguageProfile(
        name="rust",
        workspace=Path(workspace),
        source_file="src/main.rs",
        command=("cargo", "run", "--verbose"),
        version_command=("cargo", "--version"),
        compile_markers=RUST_COMPILE_MARKERS,
    )


def typescript_profile(workspace: str | Path) -> LanguageProfile:
    return LanguageProfile(
        name="typescript",
        workspace=Path(workspace),
        source_file="src/index.ts",
        command=("pnpm", "run", "start"),
        version_command=("pnpm", "--version"),
        compile_markers=TYPESCRIPT_COMPILE_MARKERS,
    )


def build_profiles(settings: Settings) -> dict[str, LanguageProfile]:
    return {
        "rust": rust_profile(settings.TEMPLATE_RS),
        "typescript": typescript_profile(settings.TEMPLATE_TS),
    }
