import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog():
    """CLI tests reconfigure structlog onto CliRunner's streams; undo that."""
    yield
    structlog.reset_defaults()
