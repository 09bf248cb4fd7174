"""
PyReselect 共用類型定義模組。

集中定義選擇器、組合函數、記憶化器等協議，供其他模組與類型存根引用。
"""
from typing import Any, Callable, Tuple, TypeVar
from typing_extensions import Literal, Protocol

R = TypeVar("R")
R_co = TypeVar("R_co", covariant=True)

# 選擇器頻率設定：從不、僅首次、每次
StabilityCheckFrequency = Literal["never", "once", "always"]
STABILITY_CHECK_FREQUENCIES: Tuple[str, ...] = ("never", "once", "always")

# 輸入選擇器：接受任意位置參數，返回一個值
Selector = Callable[..., Any]
# 組合函數：依宣告順序接收所有輸入選擇器的結果
Combiner = Callable[..., R]
# 相等比較函數
EqualityFn = Callable[[Any, Any], bool]


class MemoizedFunction(Protocol[R_co]):
    """經記憶化包裝後的函數，至少可以清除快取。"""

    def __call__(self, *args: Any) -> R_co: ...

    def clear_cache(self) -> None: ...


class Memoizer(Protocol):
    """記憶化器能力：包裝函數，額外的設定參數放在函數之後。"""

    def __call__(self, func: Callable[..., Any], *options: Any) -> MemoizedFunction[Any]: ...


class OutputSelector(Protocol[R_co]):
    """由 create_selector 產生的複合選擇器及其元資料。"""

    result_func: Callable[..., Any]
    memoized_result_func: MemoizedFunction[Any]
    dependencies: Tuple[Selector, ...]
    memoize: Memoizer
    args_memoize: Memoizer

    def __call__(self, *args: Any) -> R_co: ...

    def recomputations(self) -> int: ...

    def reset_recomputations(self) -> None: ...

    def last_result(self) -> Any: ...
