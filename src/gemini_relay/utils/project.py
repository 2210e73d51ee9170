"""
Project initialization and management utilities.
"""

import sys
import logging
from typing import Dict, Any, Optional

from gemini_relay import __version__
from gemini_relay.utils.config import Settings

logger = logging.getLogger(__name__)

def setup_logging(level: str = "INFO") -> None:
    """
    Set up logging configuration.

    Args:
        level: Logging level name, e.g. "INFO" or "DEBUG"
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )

def get_system_info(settings: Settings) -> Dict[str, Any]:
    """
    Get system information for diagnostics.

    Args:
        settings: Loaded service settings

    Returns:
        Dictionary of system information
    """
    return {
        "python_version": sys.version,
        "service_version": __version__,
        "model": settings.gemini_model,
        "url": f"http://localhost:{settings.port}",
        "upload_dir": settings.upload_dir or "system temp",
        "static_dir": settings.static_dir,
    }

def print_startup_message(settings: Optional[Settings] = None) -> None:
    """Print a startup message with system information."""
    if settings is None:
        settings = Settings()
    info = get_system_info(settings)

    print("\n" + "=" * 50)
    print("   Gemini Relay")
    print("=" * 50)

    print("\nSystem Information:")
    print(f"- Python: {info['python_version'].split()[0]}")
    print(f"- Version: {info['service_version']}")
    print(f"- Model: {info['model']}")
    print(f"- Uploads: {info['upload_dir']}")

    print(f"\nServer is running on port {info['url']}")
    print("=" * 50 + "\n")
