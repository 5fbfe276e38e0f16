"""imgfreq User Configuration.

This is the user-facing configuration file. Modify settings here to customize
the explorer. Advanced settings are the ParamConfig defaults in
src/imgfreq/schemas/param.py; nested "sources", "window", "filter" and
"display" dicts below override them directly.

Usage:
    python scripts/run_viewer.py scripts/user_config.py --view
    python scripts/run_viewer.py scripts/user_config.py --image photo.jpg --export out.png
    imgfreq scripts/user_config.py --source Landscape --low 10 --high 40 --figure fig.png
"""

CONFIG = {
    # ========================================================================
    # IMAGE
    # ========================================================================
    "IMAGE_SIZE": 512,        # Working side length N (even)
    "IMAGE_DIR": "images",    # Folder holding joe.jpg, landscape.jpg, ocean.jpg
    "IMAGE_SOURCE": "Dog (Joe)",
    "IMAGE_PATH": None,       # File or http(s) URL loaded as "Custom"
    "CAMERA_INDEX": 0,

    # ========================================================================
    # INITIAL CONTROLS
    # ========================================================================
    "APPLY_WINDOW": False,    # Circular aperture, outside filled with mid-grey
    "LOW_CUTOFF": 0,          # Raw slider values, 0-100
    "HIGH_CUTOFF": 100,
    "ZOOM": 1,                # 1, 2, 4 or 8 (Cartesian spectrum and filter)
    "AXES": "Cartesian",      # "Cartesian" or "Log-polar"
    "SHOW_PROFILE": False,    # Radial amplitude profile (log-polar only)

    # ========================================================================
    # OUTPUT
    # ========================================================================
    "EXPORT_FILENAME": "img_freq_export.png",
    "LOG_LEVEL": "INFO",

    # ========================================================================
    # ADVANCED
    # ========================================================================
    # "filter": {"exponent": 4.0, "outer_scale": 1.5},
    # "display": {"amp_mean_max": 0.75, "profile_color": "orange"},
}
