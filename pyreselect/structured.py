"""
結構化選擇器：以映射宣告多個輸入選擇器，結果為同樣鍵值的不可變 Map。
"""
from typing import Any, Callable, Mapping

from immutables import Map

from .errors import ConfigurationError
from .store_selectors import create_selector
from .types import Selector


def create_structured_selector(
    input_selectors: Mapping[str, Selector],
    selector_creator: Callable[..., Any] = create_selector,
    **options: Any,
) -> Any:
    """
    將「鍵 -> 輸入選擇器」的映射組合為一個選擇器，返回「鍵 -> 選取值」的 Map。

        select_summary = create_structured_selector({
            "count": lambda state: state["count"],
            "loading": lambda state: state["loading"],
        })
        select_summary(state)  # Map({"count": 1, "loading": False})

    Args:
        input_selectors: 鍵到輸入選擇器的映射
        selector_creator: 用來構建選擇器的 create_selector，預設為 create_selector
        **options: 轉交給 selector_creator 的選項

    Raises:
        ConfigurationError: input_selectors 不是映射
    """
    if not isinstance(input_selectors, Mapping):
        raise ConfigurationError(
            "create_structured_selector expects first argument to be a mapping "
            f"where each property is a selector, instead received a [{type(input_selectors).__name__}]",
            component="create_structured_selector",
            config_key="input_selectors",
        )

    keys = tuple(input_selectors.keys())
    selectors = [input_selectors[key] for key in keys]

    def combine(*values: Any) -> Map:
        return Map(zip(keys, values))

    return selector_creator(selectors, combine, **options)
