# -*- coding: utf-8 -*-
"""
src/fontpair/config.py

Module for handling application configuration.

This module defines the analysis and scoring constants used by FontPair and
the settings of the command line and HTTP front ends. User overrides are read
from a configuration file (config.ini), which is created with default values
on the first run.

The analysis core never reads the INI file itself. It receives the frozen
`AnalysisSettings` and `ScoringWeights` dataclasses, whose defaults are the
reference values; `Config` only builds them from whatever the user edited.
"""

import configparser
import logging
import math
import os
import platform
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

# --- Constants ---
APP_NAME = "FontPair"
DEFAULT_CONFIG_FILENAME = "config.ini"
DEFAULT_BACKEND = "fonttools"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5000
HOME_ENV_VAR = "FONTPAIR_HOME"

# Characters probed during analysis.
X_HEIGHT_CHAR = "x"
CAP_HEIGHT_CHAR = "H"
WIDTH_SAMPLE_TEXT = "abcdefghijklmnopqrstuvwxyz"
CONTRAST_PROBE_CHARS = ("O", "H", "B", "o", "e", "g", "D", "G", "Q", "p", "q")

# Container formats accepted when discovering fonts on disk.
FONT_EXTENSIONS = (".ttf", ".otf", ".woff", ".woff2")


@dataclass(frozen=True)
class AnalysisSettings:
    """Constants for metric extraction and stroke-contrast analysis."""

    font_size: float = 300.0  # nominal size, all measurements are divided by it
    cubic_samples: int = 10
    quadratic_samples: int = 8
    min_segment_ratio: float = 0.03  # of font_size
    max_segment_ratio: float = 0.5  # of font_size
    angle_tolerance_degrees: float = 20.0
    trim_fraction: float = 0.2  # dropped from each end for the trimmed mean
    contrast_cap: float = 10.0
    outlier_factor: float = 3.0  # contrast values above factor x median are dropped
    min_segments_per_orientation: int = 2

    @property
    def angle_tolerance(self) -> float:
        """Classification window in radians (pi/9 by default)."""
        return math.radians(self.angle_tolerance_degrees)

    @property
    def min_segment_length(self) -> float:
        return self.font_size * self.min_segment_ratio

    @property
    def max_segment_length(self) -> float:
        return self.font_size * self.max_segment_ratio


@dataclass(frozen=True)
class ScoringWeights:
    """Linear weights and defaults of the compatibility formula."""

    x_height: float = 0.35
    stroke_contrast: float = 0.25
    width: float = 0.20
    feature_distance: float = 0.20
    neutral_contrast_score: float = 0.5  # used when either contrast is missing
    feature_distance_scale: float = 10.0
    null_contrast_point: float = 0.1  # triangle coordinate for a missing contrast
    contrast_point_scale: float = 10.0  # contrast is divided by this for the triangle


DEFAULT_ANALYSIS_SETTINGS = AnalysisSettings()
DEFAULT_SCORING_WEIGHTS = ScoringWeights()


def get_app_dir() -> Path:
    """
    Gets the application's data directory in a cross-platform way.

    The FONTPAIR_HOME environment variable takes precedence, otherwise:

    - Windows: %APPDATA%/FontPair
    - macOS: ~/Library/Application Support/FontPair
    - Linux: ~/.config/FontPair

    Returns:
        Path: A Path object to the application's data directory.
    """
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        app_dir = Path(override)
    elif platform.system() == "Windows":
        app_dir = Path.home() / "AppData" / "Roaming" / APP_NAME
    elif platform.system() == "Darwin":  # macOS
        app_dir = Path.home() / "Library" / "Application Support" / APP_NAME
    else:  # Linux and other Unix-like
        app_dir = Path.home() / ".config" / APP_NAME

    try:
        app_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        # Read-only homes still get the built-in defaults.
        logger.warning(f"Could not create application directory {app_dir}: {e}")
    return app_dir


class Config:
    """
    Manages application configuration by loading defaults and overriding
    them with settings from a user-specific config file.
    """

    def __init__(self, config_file_path: Path = None):
        """
        Initializes the configuration manager.

        Args:
            config_file_path (Path, optional): Explicit INI path. Defaults to
                config.ini inside the application directory.
        """
        self.parser = configparser.ConfigParser()
        if config_file_path is None:
            self.app_dir = get_app_dir()
            self.config_file_path = self.app_dir / DEFAULT_CONFIG_FILENAME
        else:
            self.config_file_path = Path(config_file_path)
            self.app_dir = self.config_file_path.parent

        self._load_defaults()
        self._load_from_file()

    def _load_defaults(self):
        """Sets the default configuration values in the parser object."""
        analysis = DEFAULT_ANALYSIS_SETTINGS
        weights = DEFAULT_SCORING_WEIGHTS
        self.parser["Analysis"] = {
            "font_size": str(analysis.font_size),
            "cubic_samples": str(analysis.cubic_samples),
            "quadratic_samples": str(analysis.quadratic_samples),
            "min_segment_ratio": str(analysis.min_segment_ratio),
            "max_segment_ratio": str(analysis.max_segment_ratio),
            "angle_tolerance_degrees": str(analysis.angle_tolerance_degrees),
            "trim_fraction": str(analysis.trim_fraction),
            "contrast_cap": str(analysis.contrast_cap),
            "outlier_factor": str(analysis.outlier_factor),
            "min_segments_per_orientation": str(analysis.min_segments_per_orientation),
        }
        self.parser["Scoring"] = {
            "x_height_weight": str(weights.x_height),
            "stroke_contrast_weight": str(weights.stroke_contrast),
            "width_weight": str(weights.width),
            "feature_distance_weight": str(weights.feature_distance),
            "neutral_contrast_score": str(weights.neutral_contrast_score),
            "feature_distance_scale": str(weights.feature_distance_scale),
            "null_contrast_point": str(weights.null_contrast_point),
            "contrast_point_scale": str(weights.contrast_point_scale),
        }
        self.parser["Provider"] = {
            "backend": DEFAULT_BACKEND
        }
        self.parser["Server"] = {
            "host": DEFAULT_HOST,
            "port": str(DEFAULT_PORT),
            "max_upload_mb": "32"
        }
        self.parser["Display"] = {
            "results_count": "5"
        }

    def _load_from_file(self):
        """
        Loads settings from the config.ini file, overriding defaults.
        If the file doesn't exist, it will be created with default values.
        """
        if not self.config_file_path.exists():
            self._save_defaults()
        else:
            self.parser.read(self.config_file_path)

    def _save_defaults(self):
        """Saves the current (default) configuration to the config file."""
        try:
            with open(self.config_file_path, 'w') as configfile:
                configfile.write(f"# {APP_NAME} Configuration File\n")
                configfile.write("# Weights and thresholds are empirical; edit with care.\n\n")
                self.parser.write(configfile)
        except OSError as e:
            # Non-critical, the defaults stay in memory.
            logger.warning(f"Could not write config file at {self.config_file_path}: {e}")

    # --- Properties to access settings easily and with correct types ---

    @property
    def analysis_settings(self) -> AnalysisSettings:
        """Extraction constants as read from the [Analysis] section."""
        section = "Analysis"
        d = DEFAULT_ANALYSIS_SETTINGS
        return AnalysisSettings(
            font_size=self.parser.getfloat(section, "font_size", fallback=d.font_size),
            cubic_samples=self.parser.getint(section, "cubic_samples", fallback=d.cubic_samples),
            quadratic_samples=self.parser.getint(section, "quadratic_samples", fallback=d.quadratic_samples),
            min_segment_ratio=self.parser.getfloat(section, "min_segment_ratio", fallback=d.min_segment_ratio),
            max_segment_ratio=self.parser.getfloat(section, "max_segment_ratio", fallback=d.max_segment_ratio),
            angle_tolerance_degrees=self.parser.getfloat(
                section, "angle_tolerance_degrees", fallback=d.angle_tolerance_degrees
            ),
            trim_fraction=self.parser.getfloat(section, "trim_fraction", fallback=d.trim_fraction),
            contrast_cap=self.parser.getfloat(section, "contrast_cap", fallback=d.contrast_cap),
            outlier_factor=self.parser.getfloat(section, "outlier_factor", fallback=d.outlier_factor),
            min_segments_per_orientation=self.parser.getint(
                section, "min_segments_per_orientation", fallback=d.min_segments_per_orientation
            ),
        )

    @property
    def scoring_weights(self) -> ScoringWeights:
        """Compatibility formula constants from the [Scoring] section."""
        section = "Scoring"
        d = DEFAULT_SCORING_WEIGHTS
        return ScoringWeights(
            x_height=self.parser.getfloat(section, "x_height_weight", fallback=d.x_height),
            stroke_contrast=self.parser.getfloat(section, "stroke_contrast_weight", fallback=d.stroke_contrast),
            width=self.parser.getfloat(section, "width_weight", fallback=d.width),
            feature_distance=self.parser.getfloat(section, "feature_distance_weight", fallback=d.feature_distance),
            neutral_contrast_score=self.parser.getfloat(
                section, "neutral_contrast_score", fallback=d.neutral_contrast_score
            ),
            feature_distance_scale=self.parser.getfloat(
                section, "feature_distance_scale", fallback=d.feature_distance_scale
            ),
            null_contrast_point=self.parser.getfloat(section, "null_contrast_point", fallback=d.null_contrast_point),
            contrast_point_scale=self.parser.getfloat(
                section, "contrast_point_scale", fallback=d.contrast_point_scale
            ),
        )

    @property
    def backend(self) -> str:
        """Name of the glyph outline provider backend."""
        return self.parser.get("Provider", "backend", fallback=DEFAULT_BACKEND)

    @property
    def host(self) -> str:
        return self.parser.get("Server", "host", fallback=DEFAULT_HOST)

    @property
    def port(self) -> int:
        return self.parser.getint("Server", "port", fallback=DEFAULT_PORT)

    @property
    def max_upload_bytes(self) -> int:
        """Upper bound on a multipart upload, in bytes."""
        return self.parser.getint("Server", "max_upload_mb", fallback=32) * 1024 * 1024

    @property
    def results_count(self) -> int:
        """The number of top font pairs shown by the rank command."""
        return self.parser.getint("Display", "results_count", fallback=5)


# --- Singleton Instance ---
# Other modules can import this instance directly:
# from fontpair.config import config
config = Config()


if __name__ == '__main__':
    print(f"--- {APP_NAME} Configuration ---")
    print(f"Application Data Directory: {config.app_dir}")
    print(f"Config file path: {config.config_file_path}")
    print(f"Backend: {config.backend}")
    print(f"Analysis: {config.analysis_settings}")
    print(f"Scoring: {config.scoring_weights}")
    print(f"Server: {config.host}:{config.port}")
