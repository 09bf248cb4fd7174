"""
預設記憶化器模組。

default_memoize 只保留最近一次呼叫的參數與結果（快取大小為 1），
並以可替換的相等函數逐一比較位置參數。
"""
import functools
from typing import Any, Callable, Tuple

from immutables import Map
from pydantic import BaseModel

from .errors import ConfigurationError
from .types import EqualityFn

_PRIMITIVE_TYPES = (str, bytes, int, float, complex, bool, type(None))

# 尚未有任何呼叫時的參數佔位
_NOT_SET: Any = object()


def reference_equality_check(a: Any, b: Any) -> bool:
    """同一個物件，或同類型且相等的基本值。"""
    if a is b:
        return True
    return type(a) is type(b) and isinstance(a, _PRIMITIVE_TYPES) and a == b


def deep_equality_check(a: Any, b: Any) -> bool:
    """安全的深度比較，出錯時返回 False"""
    try:
        if a is b:
            return True
        if isinstance(a, BaseModel) and isinstance(b, BaseModel):
            return type(a) is type(b) and deep_equality_check(a.model_dump(), b.model_dump())
        if isinstance(a, (dict, Map)) and isinstance(b, (dict, Map)):
            if len(a) != len(b):
                return False
            for key in a:
                if key not in b or not deep_equality_check(a[key], b[key]):
                    return False
            return True
        if type(a) != type(b):
            return False
        if isinstance(a, _PRIMITIVE_TYPES):
            return a == b
        if isinstance(a, (list, tuple)):
            if len(a) != len(b):
                return False
            return all(deep_equality_check(x, y) for x, y in zip(a, b))
        return a == b
    except Exception:
        return False


def default_memoize(func: Callable[..., Any], equality_check: EqualityFn = reference_equality_check) -> Callable[..., Any]:
    """
    以單一快取槽記憶化函數。

    新的呼叫參數與上一次的參數數量相同且逐一通過 equality_check 時，
    直接返回上次的結果；否則重新呼叫 func 並更新快取。func 拋出異常時
    不會寫入快取，上一次的快取保持不變。

    Args:
        func: 要記憶化的函數
        equality_check: 比較兩個參數是否相等的函數，預設為 reference_equality_check

    Returns:
        記憶化後的函數，附帶 clear_cache、last_args、last_result、
        results_count、reset_results_count 與 equality_check
    """
    if not callable(equality_check):
        raise ConfigurationError(
            f"default_memoize expects equality_check to be a function, but received: [{type(equality_check).__name__}]",
            component="default_memoize",
            config_key="equality_check",
        )

    last_args: Tuple[Any, ...] = _NOT_SET
    last_result: Any = None
    results_count = 0

    def are_arguments_equal(prev: Tuple[Any, ...], nxt: Tuple[Any, ...]) -> bool:
        if prev is _NOT_SET or len(prev) != len(nxt):
            return False
        for a, b in zip(prev, nxt):
            if not equality_check(a, b):
                return False
        return True

    @functools.wraps(func)
    def memoized(*args: Any) -> Any:
        nonlocal last_args, last_result, results_count
        if not are_arguments_equal(last_args, args):
            result = func(*args)
            last_args = args
            last_result = result
            results_count += 1
        return last_result

    def clear_cache() -> None:
        nonlocal last_args, last_result
        last_args = _NOT_SET
        last_result = None

    def reset_results_count() -> None:
        nonlocal results_count
        results_count = 0

    memoized.clear_cache = clear_cache  # type: ignore
    memoized.last_args = lambda: None if last_args is _NOT_SET else last_args  # type: ignore
    memoized.last_result = lambda: last_result  # type: ignore
    memoized.results_count = lambda: results_count  # type: ignore
    memoized.reset_results_count = reset_results_count  # type: ignore
    memoized.equality_check = equality_check  # type: ignore
    return memoized
