from .errors import PyReselectError, ConfigurationError, InputStabilityWarning
from .config import set_input_stability_check_enabled, get_input_stability_check
from .memoize import default_memoize, reference_equality_check, deep_equality_check
from .options import CreateSelectorOptions
from .store_selectors import create_selector, create_selector_creator
from .structured import create_structured_selector

__version__ = "0.1.0"

# 匯出所有公開 API
__all__ = [
    # Errors
    "PyReselectError", "ConfigurationError", "InputStabilityWarning",

    # Config
    "set_input_stability_check_enabled", "get_input_stability_check",

    # Memoize
    "default_memoize", "reference_equality_check", "deep_equality_check",

    # Selectors
    "CreateSelectorOptions", "create_selector", "create_selector_creator",
    "create_structured_selector",
]
