"""Core gifhub pipeline execution logic.

This module contains the actual pipeline runner, separated from argument parsing.
Scripts are thin wrappers; this is the real implementation.
"""

import json
import logging
import importlib.util
from pathlib import Path
from typing import Optional, Dict, Any

from gifhub.setup_directories import setup_output_directories
from gifhub.pipeline.orchestrator import PipelineOrchestrator
from gifhub.schemas import resolve_config, ParamConfig, UserConfig, CLIConfig


logger = logging.getLogger(__name__)


def load_user_config_dict(config_path: str) -> dict:
    """Load user config dict from Python file.

    Returns the raw dict before Pydantic validation.

    Parameters
    ----------
    config_path : str
        Path to user config Python file containing CONFIG dict.

    Returns
    -------
    dict
        Raw user configuration dictionary.

    Raises
    ------
    FileNotFoundError
        If config file does not exist.
    ValueError
        If no CONFIG dict found in file.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    spec = importlib.util.spec_from_file_location("config_module", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                return obj

    raise ValueError(f"No CONFIG dict found in {path}")


def run_gifhub_pipeline(
    user_config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None,
    verbose: bool = False,
) -> Path:
    """Execute the activity GIF pipeline.

    This is the core pipeline execution function. It:
    1. Loads and resolves configuration (Param < User < CLI)
    2. Sets up output directories
    3. Instantiates the orchestrator and runs it for the configured subject

    Parameters
    ----------
    user_config_path : str, optional
        Path to user config file (Python file with CONFIG dict). If None,
        only expert defaults and CLI overrides are used.

    cli_args : dict, optional
        CLI argument overrides. Keys: subject, periods, out_dir, duration_ms,
        scale, backend, keep_artifacts, log_level. All optional.

    verbose : bool, optional
        If True, enable DEBUG logging and print full resolved config.

    Returns
    -------
    Path
        The written GIF.

    Raises
    ------
    FileNotFoundError
        If user_config_path does not exist.
    ValueError
        If configuration validation fails or no subject is configured.
    GifhubError
        If a pipeline stage fails.

    Examples
    --------
    Run with CLI overrides only::

        run_gifhub_pipeline(cli_args={"subject": "octocat", "periods": "2019,2020"})

    Run with a user config::

        run_gifhub_pipeline("scripts/user_config.py", verbose=True)
    """
    param_cfg = ParamConfig()

    if user_config_path is not None:
        user_cfg = UserConfig.model_validate(load_user_config_dict(user_config_path))
    else:
        user_cfg = UserConfig()

    cli_args = dict(cli_args or {})
    if verbose and "log_level" not in cli_args:
        cli_args["log_level"] = "DEBUG"

    cli_dict = {k: v for k, v in cli_args.items() if v is not None}
    cli_cfg = CLIConfig.model_validate(cli_dict) if cli_dict else CLIConfig()

    # Param < User < CLI
    config = resolve_config(param_cfg, user_cfg, cli_cfg)

    if not config.subject:
        raise ValueError("No subject given (positional argument or SUBJECT in config)")

    output_dirs = setup_output_directories(config.output.out_dir)

    print(f"\n{'='*60}")
    print("gifhub Activity GIF Pipeline")
    print('='*60)
    print(f"Config:  {user_config_path or '(defaults)'}")
    print(f"Subject: {config.subject}")
    print(f"Periods: {', '.join(config.periods) if config.periods else 'all'}")
    print(f"Backend: {config.encoder.backend}")
    print(f"Output:  {output_dirs['base']}")
    print('='*60)

    if verbose:
        print("\nFull Internal Configuration:")
        print(json.dumps(config.model_dump(), indent=2))
        print('='*60)

    orchestrator = PipelineOrchestrator(config, output_dirs)
    return orchestrator.start(config.subject)
