"""Core execution logic for the image frequency explorer.

This module contains the actual runner, separated from argument parsing.
Scripts are thin wrappers; this is the real implementation.
"""

import sys
import json
import logging
import argparse
import importlib.util
from pathlib import Path
from typing import Optional, Dict, Any, List

from imgfreq.schemas import resolve_config, ParamConfig, UserConfig, CLIConfig, InternalConfig
from imgfreq.pipeline.session import ViewerSession
from imgfreq.visualization.plotter import FrequencyPlotter


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

    # Find CONFIG dict
    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                return obj

    raise ValueError(f"No CONFIG dict found in {path}")


def build_config(user_config_path: Optional[str] = None,
                 cli_args: Optional[Dict[str, Any]] = None) -> InternalConfig:
    """Resolve configuration (Param < User < CLI).

    Parameters
    ----------
    user_config_path : str, optional
        Python file with a CONFIG dict. Expert defaults only when omitted.
    cli_args : dict, optional
        CLIConfig fields; None values are dropped.
    """
    param_cfg = ParamConfig()

    if user_config_path:
        user_cfg = UserConfig.model_validate(load_user_config_dict(user_config_path))
    else:
        user_cfg = UserConfig()

    cli_dict = {k: v for k, v in (cli_args or {}).items() if v is not None}
    cli_cfg = CLIConfig.model_validate(cli_dict) if cli_dict else CLIConfig()

    return resolve_config(param_cfg, user_cfg, cli_cfg)


def setup_logging(config: InternalConfig) -> None:
    """Configure the root logger once: console handler, optional file handler."""
    log_level = getattr(logging, config.logging.level, logging.INFO)

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Clear existing handlers and add new ones
    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    if config.logging.log_file:
        log_path = Path(config.logging.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path)
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        root.addHandler(fh)

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    root.addHandler(ch)


def run_viewer(
    user_config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None,
    export: Optional[str] = None,
    figure: Optional[str] = None,
    view: bool = False,
    verbose: bool = False,
) -> ViewerSession:
    """Resolve configuration, run the pipeline once, then export or view.

    Parameters
    ----------
    user_config_path : str, optional
        Path to user config file (Python file with CONFIG dict).
    cli_args : dict, optional
        CLI overrides. Keys: image, source, image_dir, low, high, window,
        log_level, log_file. All optional.
    export : str, optional
        Write the filtered image to this PNG path.
    figure : str, optional
        Write the four-panel figure to this PNG path.
    view : bool, optional
        Open the interactive window (blocks until it is closed).
    verbose : bool, optional
        DEBUG logging and print the full resolved config.

    Returns
    -------
    ViewerSession
        The session after the initial run (and after the window closes
        when ``view`` is set).

    Raises
    ------
    FileNotFoundError
        If user_config_path does not exist.
    pydantic.ValidationError
        If configuration validation fails.

    Examples
    --------
    Filter a photo and save the result::

        run_viewer(cli_args={"image": "photo.jpg", "low": 10, "high": 40},
                   export="filtered.png")
    """
    cli_args = dict(cli_args or {})
    if verbose and "log_level" not in cli_args:
        cli_args["log_level"] = "DEBUG"

    config = build_config(user_config_path, cli_args)
    setup_logging(config)

    if verbose:
        print("\nFull Internal Configuration:")
        print(json.dumps(config.model_dump(), indent=2))
        print('=' * 60)

    if view:
        # pyplot is only imported when a window is wanted
        from imgfreq.visualization.viewer import FrequencyViewer

        session = ViewerSession(config)
        FrequencyViewer(session).run()
        return session

    plotter = FrequencyPlotter(config)
    session = ViewerSession(config, sink=plotter)
    computed = session.start()

    logger.info("=" * 60)
    logger.info("Source: %s", session.controls.image_source)
    logger.info("Cutoffs: low=%d high=%d, window=%s",
                session.controls.low_cutoff, session.controls.high_cutoff,
                session.controls.apply_window)
    logger.info("Stages computed: %s", ", ".join(computed) or "none")
    logger.info("=" * 60)

    if not session.state.has_image:
        return session

    if export:
        session.export(export)
    if figure:
        plotter.save(figure, title=session.controls.image_source)

    return session


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="imgfreq",
        description="Explore an image in the frequency domain with a radial band-pass filter",
    )
    parser.add_argument("config", nargs="?", help="Path to user config file")
    parser.add_argument("--image", help="Image file or http(s) URL to load as the custom source")
    parser.add_argument("--source", help="Image source name (e.g. 'Astronaut')")
    parser.add_argument("--image-dir", help="Directory holding the bundled images")
    parser.add_argument("--low", type=int, help="Low cutoff (raw slider value)")
    parser.add_argument("--high", type=int, help="High cutoff (raw slider value)")
    parser.add_argument("--window", dest="window", action="store_true", default=None,
                        help="Apply the circular aperture window")
    parser.add_argument("--no-window", dest="window", action="store_false",
                        help="Do not apply the aperture window")
    parser.add_argument("--export", help="Write the filtered image to this PNG")
    parser.add_argument("--figure", help="Write the four-panel figure to this PNG")
    parser.add_argument("--view", action="store_true", help="Open the interactive viewer")
    parser.add_argument("--log-file", help="Also log to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    cli_args = {
        "image": args.image,
        "source": args.source,
        "image_dir": args.image_dir,
        "low": args.low,
        "high": args.high,
        "window": args.window,
        "log_file": args.log_file,
    }

    session = run_viewer(
        args.config,
        cli_args=cli_args,
        export=args.export,
        figure=args.figure,
        view=args.view,
        verbose=args.verbose,
    )

    if not session.state.has_image:
        logger.error("No image could be loaded for source '%s'", session.controls.image_source)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
