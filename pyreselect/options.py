"""
選擇器選項模組。

CreateSelectorOptions 以 pydantic 模型描述 create_selector 的選項，
只有明確設定過的欄位會參與合併，合併規則為逐欄位的淺合併。
"""
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from .config import get_input_stability_check
from .errors import ConfigurationError
from .memoize import default_memoize
from .types import Memoizer, StabilityCheckFrequency


class CreateSelectorOptions(BaseModel):
    """
    create_selector / create_selector_creator 的選項紀錄。

    屬性:
        memoize: 記憶化組合函數的記憶化器
        memoize_options: 傳給 memoize 的額外參數（單一值或列表）
        args_memoize: 記憶化選擇器原始參數的記憶化器
        args_memoize_options: 傳給 args_memoize 的額外參數（單一值或列表）
        input_stability_check: 輸入穩定性檢查頻率
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True, frozen=True)

    memoize: Optional[Callable[..., Any]] = None
    memoize_options: Any = None
    args_memoize: Optional[Callable[..., Any]] = None
    args_memoize_options: Any = None
    input_stability_check: Optional[StabilityCheckFrequency] = None

    def explicit(self) -> Dict[str, Any]:
        """只返回明確設定過的欄位。"""
        return {name: getattr(self, name) for name in self.model_fields_set}


class ResolvedOptions(NamedTuple):
    memoize: Memoizer
    memoize_options: List[Any]
    args_memoize: Memoizer
    args_memoize_options: List[Any]
    input_stability_check: StabilityCheckFrequency


OptionsLike = Union[CreateSelectorOptions, Mapping[str, Any], None]


def _validate(values: Mapping[str, Any], component: str) -> CreateSelectorOptions:
    try:
        return CreateSelectorOptions.model_validate(dict(values))
    except ValidationError as e:
        fields = [".".join(str(loc) for loc in err["loc"]) for err in e.errors()]
        raise ConfigurationError(
            f"{component} received invalid options: {', '.join(fields)}",
            component=component,
            config_key=fields[0] if fields else None,
            errors=e.errors(),
        ) from e


def parse_options(value: OptionsLike, component: str = "create_selector") -> CreateSelectorOptions:
    """
    將 None、映射或 CreateSelectorOptions 統一轉換為 CreateSelectorOptions。

    Raises:
        ConfigurationError: 值不是映射，或包含未知/不合法的欄位
    """
    if value is None:
        return CreateSelectorOptions()
    if isinstance(value, CreateSelectorOptions):
        return value
    if isinstance(value, Mapping):
        return _validate(value, component)
    raise ConfigurationError(
        f"{component} expects an options mapping, but received: [{type(value).__name__}]",
        component=component,
    )


def merge_options(defaults: CreateSelectorOptions, overrides: CreateSelectorOptions) -> CreateSelectorOptions:
    """淺合併：overrides 中明確設定的欄位優先。"""
    merged = defaults.explicit()
    merged.update(overrides.explicit())
    return CreateSelectorOptions.model_validate(merged)


def ensure_is_list(value: Any) -> List[Any]:
    """
    記憶化器的第一個設定參數通常是相等函數或設定物件，而不是列表。
    因此列表/元組視為完整的參數列表，其他值視為單一參數。
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def resolve_options(options: CreateSelectorOptions, component: str = "create_selector") -> ResolvedOptions:
    """
    填入預設值，得到構建選擇器所需的完整選項。

    args_memoize 預設為 default_memoize；input_stability_check 預設為
    當下的全域設定（只在構建時讀取一次）。
    """
    if options.memoize is None:
        raise ConfigurationError(
            f"{component} expects a memoize function, but none was provided",
            component=component,
            config_key="memoize",
        )
    return ResolvedOptions(
        memoize=options.memoize,
        memoize_options=ensure_is_list(options.memoize_options),
        args_memoize=default_memoize if options.args_memoize is None else options.args_memoize,
        args_memoize_options=ensure_is_list(options.args_memoize_options),
        input_stability_check=options.input_stability_check or get_input_stability_check(),
    )
