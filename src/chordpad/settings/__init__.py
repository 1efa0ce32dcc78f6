from .loader import default_settings, load_settings
from .models import BindingSpec, LogLevel, Settings

__all__ = ["default_settings", "load_settings", "BindingSpec", "LogLevel", "Settings"]
