"""
PyReselect 錯誤定義模組。

構建選擇器時的設定錯誤會立即拋出；輸入選擇器或組合函數在呼叫時拋出的
異常則原樣傳遞給呼叫者，不在此處包裝。
"""
import traceback
from typing import Any, Dict, Optional


class PyReselectError(Exception):
    """所有 PyReselect 異常的基礎類。"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.traceback = traceback.format_exc()

    def to_dict(self) -> Dict[str, Any]:
        """將錯誤轉換為字典，方便記錄或序列化。"""
        return {
            "type": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return self.message


class ConfigurationError(PyReselectError, TypeError):
    """配置相關的錯誤，例如缺少組合函數或輸入選擇器不可調用。"""

    def __init__(self, message: str, component: str, config_key: Optional[str] = None, **kwargs: Any):
        details = {"component": component, "config_key": config_key}
        details.update(kwargs)
        super().__init__(message, details)
        self.component = component
        self.config_key = config_key


class InputStabilityWarning(UserWarning):
    """輸入選擇器對相同參數返回了不相等的結果。"""
