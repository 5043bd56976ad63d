import os
from typing import Dict, Any

from dotenv import load_dotenv

load_dotenv()


def get_store_config() -> Dict[str, Any]:
    """Get store configuration from environment variables"""
    return {
        "backend": os.getenv("TIMETABLE_STORE", "csv").lower(),
        "data_dir": os.getenv("TIMETABLE_DATA_DIR", "data"),
    }


def get_api_config() -> Dict[str, Any]:
    """Get API server configuration from environment variables"""
    return {
        "host": os.getenv("API_HOST", "0.0.0.0"),
        "port": int(os.getenv("API_PORT", 5000)),
    }


def get_app_config() -> Dict[str, Any]:
    """Get application configuration from environment variables"""
    return {
        "debug": os.getenv("DEBUG", "False").lower() == "true",
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
    }
