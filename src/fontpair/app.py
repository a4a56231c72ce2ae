# -*- coding: utf-8 -*-
"""
src/fontpair/app.py

HTTP front end for FontPair.

`create_app()` builds a Flask application exposing POST /api/analyze, which
accepts a multipart form with `fontA`, `fontB` and an optional `fontC` file
and answers with the JSON form of the analysis result.
"""

import logging

from flask import Flask, jsonify, request

from .config import config, AnalysisSettings, ScoringWeights
from .core.analysis import analyze_fonts
from .exceptions import FontLoadError, InputValidationError
from .providers import get_provider
from .providers.base import GlyphOutlineProvider

logger = logging.getLogger(__name__)

FONT_FIELDS = ("fontA", "fontB", "fontC")


def _read_upload(field: str):
    upload = request.files.get(field)
    if upload is None:
        return None
    data = upload.read()
    return data or None


def create_app(
    provider: GlyphOutlineProvider = None,
    settings: AnalysisSettings = None,
    weights: ScoringWeights = None,
) -> Flask:
    """
    Builds the Flask application.

    Args:
        provider: Outline backend. Defaults to the configured backend.
        settings: Analysis constants. Defaults to the configured values.
        weights: Scoring constants. Defaults to the configured values.
    """
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.max_upload_bytes

    provider = provider or get_provider(config.backend)
    settings = settings or config.analysis_settings
    weights = weights or config.scoring_weights

    @app.route('/api/analyze', methods=['POST'])
    def api_analyze():
        """Analyze two or three uploaded fonts."""
        fonts = [_read_upload(field) for field in FONT_FIELDS]
        try:
            result = analyze_fonts(fonts, provider, settings, weights)
        except InputValidationError as e:
            return jsonify(error=str(e)), 400
        except FontLoadError as e:
            logger.error(f"Font could not be loaded: {e}")
            return jsonify(error=str(e)), 500
        except Exception as e:
            logger.exception("Unexpected error during font analysis")
            return jsonify(error=str(e) or type(e).__name__), 500
        return jsonify(result.to_dict())

    return app
