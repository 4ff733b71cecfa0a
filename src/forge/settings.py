"""Configuration settings for the Forge image editor."""

from typing import Dict, Any
import os


class EditorSettings:
    """Image editor defaults."""
    
    # Save settings
    DEFAULT_QUALITY: int = 80          # Only honored when 0 < quality < 100
    DEFAULT_FORMAT: str = "PNG"        # Used when the source format is unknown
    OUTPUT_MODE: int = 0o777           # Permissions applied to written files
    
    # Resize settings
    DEFAULT_FILTER: str = "lanczos"
    FALLBACK_FILTER: str = "point"     # Used for unrecognised filter names
    DEFAULT_BLUR: float = 1.0          # 1.0 = no extra blur
    THUMBNAIL_REDUCING_GAP: float = 2.0
    
    # Modulate settings (percentages, 100 = no change)
    MODULATE_BRIGHTNESS: int = 100
    MODULATE_SATURATION: int = 100
    MODULATE_HUE: int = 300            # (300 - 100) * 1.8 = one full turn
    
    # Error handling
    RAISE_ERRORS: bool = False
    UNKNOWN_ERROR: str = "An unknown error has occurred"


class SystemSettings:
    """System and debugging settings."""
    
    # Debugging
    DEBUG_MODE: bool = False
    DISPLAY_PROCESSING_TIME: bool = False
    
    # Logging
    LOG_LEVEL: str = "INFO"


# Environment-specific overrides
def load_environment_settings() -> Dict[str, Any]:
    """Load settings from environment variables."""
    env_settings = {}
    
    # Save quality
    if os.getenv("FORGE_QUALITY"):
        env_settings["DEFAULT_QUALITY"] = int(os.getenv("FORGE_QUALITY"))
    
    # Fallback encoding format
    if os.getenv("FORGE_FORMAT"):
        env_settings["DEFAULT_FORMAT"] = os.getenv("FORGE_FORMAT").upper()
    
    # Raise instead of recording errors
    if os.getenv("FORGE_RAISE_ERRORS"):
        env_settings["RAISE_ERRORS"] = os.getenv("FORGE_RAISE_ERRORS").lower() == "true"
    
    # Logging
    if os.getenv("FORGE_LOG_LEVEL"):
        env_settings["LOG_LEVEL"] = os.getenv("FORGE_LOG_LEVEL").upper()
    
    # Debug mode
    if os.getenv("FORGE_DEBUG"):
        env_settings["DEBUG_MODE"] = os.getenv("FORGE_DEBUG").lower() == "true"
    
    return env_settings


def apply_environment_settings(settings: Dict[str, Any]) -> None:
    """Copy environment overrides onto the matching settings groups."""
    for key, value in settings["env"].items():
        for group in ("editor", "system"):
            if hasattr(settings[group], key):
                setattr(settings[group], key, value)


# Global settings instance
SETTINGS = {
    "editor": EditorSettings(),
    "system": SystemSettings(),
    "env": load_environment_settings()
}

apply_environment_settings(SETTINGS)
