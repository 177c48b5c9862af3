"""Root-level pytest fixtures for gifhub test suite.

Provides shared configuration fixtures following Pydantic-based architecture.
All tests must use these fixtures instead of creating raw dict configs.
"""

import logging
import pytest
from pathlib import Path
import tempfile
import shutil

from gifhub.schemas import ParamConfig, UserConfig, resolve_config
from gifhub.setup_directories import setup_output_directories


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults.

    Use this as the base for all test configs. Override specific values
    using user_config or by creating custom UserConfig instances.
    """
    return ParamConfig()


@pytest.fixture
def internal_config(param_config, temp_dir):
    """Fully validated runtime configuration writing into ``temp_dir``.

    Examples
    --------
    >>> def test_renderer_init(internal_config):
    ...     renderer = ActivityRenderer(internal_config)
    ...     assert renderer.dpi == 100
    """
    return resolve_config(param_config, UserConfig(out_dir=str(temp_dir)), None)


@pytest.fixture
def make_config(param_config, temp_dir):
    """Factory fixture for creating custom test configs.

    Returns a callable that accepts UserConfig-compatible kwargs. Output goes
    to ``temp_dir`` unless ``out_dir`` is given.

    Examples
    --------
    >>> def test_custom_threshold(make_config):
    ...     config = make_config(threshold=0.9)
    ...     assert config.layout.threshold == 0.9
    """
    def _make(**user_overrides):
        """Create InternalConfig with user overrides."""
        user_overrides.setdefault("out_dir", str(temp_dir))
        user = UserConfig(**user_overrides)
        return resolve_config(param_config, user, None)

    return _make


# =============================================================================
# Directory Fixtures
# =============================================================================

@pytest.fixture
def temp_dir():
    """Temporary directory that is cleaned up after test."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def output_dirs(temp_dir):
    """Standard gifhub output directory structure.

    Returns dict with keys: base, logs, tmp
    """
    return setup_output_directories(temp_dir)


# =============================================================================
# Logging Fixtures
# =============================================================================

@pytest.fixture
def restore_root_logging():
    """Undo PipelineOrchestrator._setup_logging after a test.

    Closes every handler installed during the test and puts back the
    original root handlers and level.
    """
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in saved_handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in saved_handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(saved_level)
