"""
全域設定：輸入穩定性檢查的預設頻率，以及建置模式。

兩者都屬於程序層級的狀態，預期只在啟動時（或測試中）設定一次，不加鎖。
"""
import logging

from .errors import ConfigurationError
from .types import STABILITY_CHECK_FREQUENCIES, StabilityCheckFrequency

logger = logging.getLogger(__name__)

# `python -O` 會把 __debug__ 設為 False，視為正式環境建置
PRODUCTION: bool = not __debug__

_global_stability_check: StabilityCheckFrequency = "once"


def is_production() -> bool:
    """是否為正式環境建置。正式環境中永遠不執行穩定性檢查。"""
    return PRODUCTION


def validate_stability_check(frequency: object, component: str = "input_stability_check") -> StabilityCheckFrequency:
    if frequency not in STABILITY_CHECK_FREQUENCIES:
        raise ConfigurationError(
            f"input_stability_check must be one of {list(STABILITY_CHECK_FREQUENCIES)}, "
            f"but received: {frequency!r}",
            component=component,
            config_key="input_stability_check",
            value=frequency,
        )
    return frequency  # type: ignore[return-value]


def set_input_stability_check_enabled(frequency: StabilityCheckFrequency) -> None:
    """
    覆寫之後建立的所有選擇器的輸入穩定性檢查頻率。

    開發模式下，選擇器會以相同參數額外執行一次輸入選擇器，若結果不同則發出
    InputStabilityWarning。個別選擇器仍可在 create_selector 的選項中覆寫此設定。

    Args:
        frequency: "never"、"once" 或 "always"

    Raises:
        ConfigurationError: 頻率不是上述三者之一
    """
    global _global_stability_check
    _global_stability_check = validate_stability_check(frequency, component="set_input_stability_check_enabled")
    logger.debug("global input stability check set to %s", frequency)


def get_input_stability_check() -> StabilityCheckFrequency:
    """返回目前的全域穩定性檢查頻率。"""
    return _global_stability_check
