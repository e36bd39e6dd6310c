"""Analysis thresholds loaded from analysis.yaml.

Supports overriding any AnalysisConfig field, e.g.:

    rsi_period: 14
    rsi_oversold: 25
    rsi_overbought: 75
    trend_sma_periods: [7, 25, 99]

No YAML file = built-in defaults.
"""

import logging
from pathlib import Path

import yaml
from dotenv import load_dotenv

from core.models.config import AnalysisConfig

logger = logging.getLogger(__name__)

_DEFAULT_PATH = Path(__file__).parent.parent / "analysis.yaml"


def load_analysis_config(path: Path | None = None) -> AnalysisConfig:
    """Load analysis config from YAML file.

    Falls back to defaults if the file doesn't exist. Invalid values raise
    pydantic's ValidationError; a document that is not a mapping raises
    ValueError and broken YAML raises yaml.YAMLError.
    """
    config_path = path or _DEFAULT_PATH

    # Load .env next to the config so Settings sees the same environment
    env_path = config_path.parent / ".env"
    load_dotenv(env_path, override=False)

    if not config_path.exists():
        logger.info(f"No analysis.yaml found at {config_path}, using defaults")
        return AnalysisConfig()

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{config_path} must contain a mapping of settings")

    config = AnalysisConfig(**raw)
    logger.info(
        f"Loaded analysis config: trend SMAs={list(config.trend_sma_periods)}, "
        f"RSI({config.rsi_period}) zones {config.rsi_oversold}/{config.rsi_overbought}"
    )
    return config
