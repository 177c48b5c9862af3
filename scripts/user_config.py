"""gifhub User Configuration.

This is the user-facing configuration file. Modify settings here to customize
the pipeline behavior. Advanced settings are in src/gifhub/schemas/param.py

Usage:
    python scripts/run_gifhub.py -c scripts/user_config.py
    python scripts/run_gifhub.py octocat -c scripts/user_config.py
    python scripts/run_gifhub.py octocat -c scripts/user_config.py --years all
"""

CONFIG = {
    # ========================================================================
    # TARGET
    # ========================================================================
    "SUBJECT": "octocat",     # GitHub user name (positional CLI argument wins)
    "PERIODS": "all",         # "all" or a comma separated list: "2016,2017,2018"

    # ========================================================================
    # OUTPUT
    # ========================================================================
    "OUT_DIR": "./out",       # GIF, activity CSV, logs/ and tmp/ go here
    "SAVE_SUMMARY": True,     # Write <subject>_activity.csv next to the GIF

    # ========================================================================
    # ANIMATION
    # ========================================================================
    "DURATION_MS": 1000,      # Display time of each frame
    "SCALE": 1.0,             # Resize factor (0.5 = half size)
    "BACKEND": "pillow",      # "pillow" or "subprocess" (rsvg-convert + ImageMagick)

    # ========================================================================
    # GRAPH
    # ========================================================================
    "THRESHOLD": 0.8,         # Offsets above this ratio snap to the axis end

    "LOG_LEVEL": "INFO",

    # ========================================================================
    # ADVANCED (nested overrides of the expert defaults)
    # ========================================================================
    # "style": {"poly_color": "#7bc96f", "dpi": 100},
    # "encoder": {"keep_artifacts": True},
}
