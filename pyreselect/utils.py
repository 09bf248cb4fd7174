"""
依賴解析與輸入穩定性檢查的輔助函數。
"""
import inspect
import warnings
from types import CodeType
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .errors import ConfigurationError, InputStabilityWarning
from .memoize import reference_equality_check
from .types import EqualityFn, Selector

_PACKAGE_PREFIX = __name__.split(".")[0] + "."


def assert_is_function(value: Any, message: str, config_key: str = "result_func") -> None:
    if not callable(value):
        raise ConfigurationError(message, component="create_selector", config_key=config_key)


def get_dependencies(funcs: Sequence[Any]) -> Tuple[Selector, ...]:
    """
    取得輸入選擇器列表。

    輸入選擇器可以逐一作為位置參數傳入，也可以作為單一列表（或元組）傳入。

    Raises:
        ConfigurationError: 任何一個輸入選擇器不可調用
    """
    if funcs and isinstance(funcs[0], (list, tuple)):
        dependencies = tuple(funcs[0])
    else:
        dependencies = tuple(funcs)

    if not all(callable(dep) for dep in dependencies):
        received = ", ".join(
            type(dep).__name__ if not callable(dep) else getattr(dep, "__name__", "function")
            for dep in dependencies
        )
        raise ConfigurationError(
            f"create_selector expects all input-selectors to be functions, but received the following types: [{received}]",
            component="create_selector",
            config_key="dependencies",
        )
    return dependencies


def collect_input_selector_results(dependencies: Sequence[Selector], args: Sequence[Any]) -> List[Any]:
    """依宣告順序以完整的參數列表呼叫每個輸入選擇器。"""
    results = []
    for dependency in dependencies:
        results.append(dependency(*args))
    return results


def stability_check_comparator(memoized_result_func: Callable[..., Any]) -> EqualityFn:
    """使用記憶化器公開的 equality_check；沒有時退回參考相等比較。"""
    equality_check = getattr(memoized_result_func, "equality_check", None)
    if callable(equality_check):
        return equality_check
    return reference_equality_check


def _caller_location(entry_code: Optional[CodeType]) -> Tuple[str, int, Optional[str], Optional[Dict[str, Any]]]:
    """
    找出呼叫選擇器的程式位置。

    先找到最近一次進入選擇器（entry_code）的框架，再往外略過本套件內部的框架，
    因此不受外層記憶化器實作的影響。
    """
    frame = inspect.currentframe()
    if entry_code is not None:
        entry_frame = frame
        while entry_frame is not None and entry_frame.f_code is not entry_code:
            entry_frame = entry_frame.f_back
        if entry_frame is not None:
            frame = entry_frame
    while frame is not None and frame.f_globals.get("__name__", "").startswith(_PACKAGE_PREFIX):
        frame = frame.f_back
    if frame is None:
        return "<unknown>", 0, None, None
    return frame.f_code.co_filename, frame.f_lineno, frame.f_globals.get("__name__"), frame.f_globals


def run_stability_check(
    input_selector_results: Sequence[Any],
    input_selector_results_copy: Sequence[Any],
    equality_check: EqualityFn,
    args: Sequence[Any],
    entry_code: Optional[CodeType] = None,
) -> bool:
    """
    比較兩次以相同參數取得的輸入選擇器結果。

    任何位置不相等時發出一個 InputStabilityWarning，列出所有不相等的位置及兩次的值。
    不會拋出異常，也不影響呼叫本身。警告不經過呼叫位置的 __warningregistry__，
    在預設的警告過濾器下每次檢查都會顯示。

    Args:
        entry_code: 選擇器入口函數的 code 物件，用來定位警告的呼叫位置

    Returns:
        是否發現不穩定的輸入選擇器
    """
    mismatches = [
        (index, first, second)
        for index, (first, second) in enumerate(zip(input_selector_results, input_selector_results_copy))
        if not equality_check(first, second)
    ]
    if not mismatches:
        return False

    details = "; ".join(
        f"input selector #{index} returned {first!r} then {second!r}"
        for index, first, second in mismatches
    )
    filename, lineno, module, module_globals = _caller_location(entry_code)
    warnings.warn_explicit(
        "An input selector returned a different result when passed same arguments. "
        "This means your output selector will likely run more frequently than intended. "
        "Avoid returning a new reference inside your input selector, e.g. "
        "`create_selector(lambda state: [todo.id for todo in state.todos], lambda ids: len(ids))`. "
        f"{details} (arguments: {tuple(args)!r})",
        InputStabilityWarning,
        filename,
        lineno,
        module=module,
        registry=None,
        module_globals=module_globals,
    )
    return True
