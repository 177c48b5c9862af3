"""
Directory setup for the gifhub pipeline.

Flat layout under one output directory:
- GIFs and activity summaries at the top level
- logs/ for pipeline log files
- tmp/ for intermediate frames of the subprocess encoder
"""

from pathlib import Path


def setup_output_directories(base_output_dir):
    """
    Set up the output directory structure.

    Parameters
    ----------
    base_output_dir : str or Path
        Base output directory; ``~`` is expanded.

    Returns
    -------
    dict
        Dictionary with paths: 'base', 'logs', 'tmp'
    """
    base_output_dir = Path(base_output_dir).expanduser().resolve()

    directories = {
        "base": base_output_dir,
        "logs": base_output_dir / "logs",
        "tmp": base_output_dir / "tmp",
    }

    for path in directories.values():
        path.mkdir(parents=True, exist_ok=True)

    return directories


def get_output_path(output_dirs, subject, filename_pattern="{subject}.gif"):
    """
    Get the path of the animated GIF for a subject.

    Example
    -------
    >>> get_output_path(dirs, 'octocat')
    Path('out/octocat.gif')
    """
    return output_dirs["base"] / filename_pattern.format(subject=subject)


def get_summary_path(output_dirs, subject):
    """
    Get the path of the per-period activity summary.

    Example
    -------
    >>> get_summary_path(dirs, 'octocat')
    Path('out/octocat_activity.csv')
    """
    return output_dirs["base"] / f"{subject}_activity.csv"


def get_log_path(output_dirs, subject=None):
    """
    Get the pipeline log file path.

    Parameters
    ----------
    output_dirs : dict
        Output directories from setup_output_directories()
    subject : str, optional
        Account name; ``latest`` when not given.

    Returns
    -------
    Path
        Full path to log file
    """
    log_dir = output_dirs["logs"]
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / f"gifhub_{subject or 'latest'}.log"
