import json
import os
from typing import Dict, Any, Optional

from app.core.config import settings
from app.core.logger import logger

def load_dashboard_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Loads dashboard configuration (default restrictions, labels) from JSON file.
    Raises FileNotFoundError if config is missing.
    Returns: Dict containing config.
    """
    config_path = path or settings.DASHBOARD_CONFIG_PATH

    if not os.path.exists(config_path):
        logger.critical(f"❌ Dashboard config '{config_path}' not found! The page cannot start.")
        raise FileNotFoundError(f"Configuration file not found at {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)
            logger.info(f"✅ Dashboard config loaded from {config_path}")
            return config
    except json.JSONDecodeError as e:
        logger.critical(f"❌ Invalid JSON in dashboard config: {e}")
        raise ValueError(f"Invalid JSON in config file: {e}")

def get_default_restrictions(config: Dict[str, Any]) -> Dict[str, Any]:
    """Record used to seed the restrictions form before the first fetch."""
    return dict(config.get("default_restrictions", {}))

def get_label(config: Dict[str, Any], group: str, key: str) -> str:
    """
    Helper to get a display label (e.g. group='level_labels', key='high').
    Falls back to the capitalized key.
    """
    return config.get(group, {}).get(key, key.capitalize())
