from pathlib import Path
import pytest
from fastapi.testclient import TestClient
from playground.core.config import Settings
from playground.languages import (
    LanguageProfile,
    RUST_COMPILE_MARKERS,
    TYPESCRIPT_COMPILE_MARKERS,
)
from playground.main import create_app

SKELETON_SOURCE = "# skeleton\n"


def _skeleton(root: Path, source_file: str) -> Path:
    src = root / source_file
    src.parent.mkdir(parents=True, exist_ok=True)
    if not src.exists():
        src.write_text(SKELETON_SOURCE)
    (root / "Manifest.toml").write_text("[package]\n")
    return root


def fake_profiles(
    settings: Settings,
    rust_command=("sh", "src/main.rs"),
    ts_command=("sh", "src/index.ts"),
    rust_version=("true",),
    ts_version=("true",),
) -> dict[str, LanguageProfile]:
    """Profiles whose "toolchain" runs the submitted code as a shell script."""
    return {
        "rust": LanguageProfile(
            name="rust",
            workspace=_skeleton(Path(settings.TEMPLATE_RS), "src/main.rs"),
            source_file="src/main.rs",
            command=tuple(rust_command),
            version_command=tuple(rust_version),
            compile_markers=RUST_COMPILE_MARKERS,
        ),
        "typescript": LanguageProfile(
            name="typescript",
            workspace=_skeleton(Path(settings.TEMPLATE_TS), "src/index.ts"),
            source_file="src/index.ts",
            command=tuple(ts_command),
            version_command=tuple(ts_version),
            compile_markers=TYPESCRIPT_COMPILE_MARKERS,
        ),
    }


@pytest.fixture
def settings(tmp_path):
    copies = tmp_path / "copies"
    copies.mkdir()
    return Settings(
        TEMPLATE_RS=str(tmp_path / "template-rs"),
        TEMPLATE_TS=str(tmp_path / "template-ts"),
        SOLANA_URL="http://validator.test:8899",
        SOLANA_WS_URL="ws://validator.test:8900",
        EXECUTION_TIMEOUT_S=2,
        HEALTH_TIMEOUT_S=2,
        WORKSPACE_MODE="serialized",
        WORKSPACE_TMP_DIR=str(copies),
    )


@pytest.fixture
def profiles(settings):
    return fake_profiles(settings)


@pytest.fixture
def client(settings, profiles):
    with TestClient(create_app(settings, profiles)) as c:
        yield c
