"""
記憶化選擇器的組合引擎。

create_selector_creator 綁定一組預設的記憶化器與選項，返回可重複使用的
create_selector。每個由 create_selector 產生的選擇器都有兩層記憶化：

    原始參數 -> args_memoize -> 輸入選擇器 -> memoize(組合函數) -> 結果

外層以原始參數為鍵，參數相同時連輸入選擇器都不會執行；內層以輸入選擇器的
結果為鍵，即使參數不同，只要輸入結果相同就不會重新執行組合函數。
"""
import functools
import logging
from typing import Any, Callable, List, Mapping, Sequence, Tuple

from .config import is_production
from .errors import ConfigurationError
from .memoize import default_memoize
from .options import (
    CreateSelectorOptions, ResolvedOptions,
    merge_options, parse_options, resolve_options
)
from .types import StabilityCheckFrequency
from .utils import (
    assert_is_function, collect_input_selector_results, get_dependencies,
    run_stability_check, stability_check_comparator
)

logger = logging.getLogger(__name__)

CreateSelectorFunction = Callable[..., Any]


def _split_create_selector_args(
    funcs: Sequence[Any], keyword_options: Mapping[str, Any]
) -> Tuple[List[Any], Callable[..., Any], CreateSelectorOptions]:
    """
    從參數尾端依序取出：可選的選項紀錄、組合函數，其餘為輸入選擇器。

    關鍵字選項會覆蓋位置傳入的選項紀錄。
    """
    funcs = list(funcs)
    directly_passed = CreateSelectorOptions()

    if funcs and isinstance(funcs[-1], (Mapping, CreateSelectorOptions)):
        directly_passed = parse_options(funcs.pop())
    if keyword_options:
        directly_passed = merge_options(directly_passed, parse_options(keyword_options))

    result_func = funcs.pop() if funcs else None
    assert_is_function(
        result_func,
        f"create_selector expects an output function after the inputs, but received: [{type(result_func).__name__}]",
    )
    return funcs, result_func, directly_passed  # type: ignore[return-value]


def _should_run_stability_check(frequency: StabilityCheckFrequency, first_run: bool) -> bool:
    if is_production():
        return False
    return frequency == "always" or (frequency == "once" and first_run)


def create_selector_creator(memoize_or_options: Any, *memoize_options_from_args: Any) -> CreateSelectorFunction:
    """
    以指定的記憶化器建立自訂的 create_selector。

    兩種呼叫方式：

        create_selector_creator(memoize, option1, option2)
        create_selector_creator({"memoize": memoize, "args_memoize": ..., ...})

    第一個參數可調用時視為記憶化器，其後的參數依序作為記憶化器的額外參數；
    否則視為選項紀錄，且必須包含 memoize。

    Args:
        memoize_or_options: 記憶化器，或包含 memoize 的選項紀錄
        *memoize_options_from_args: 傳給記憶化器的額外參數（僅限第一種方式）

    Returns:
        自訂的 create_selector 函數

    Raises:
        ConfigurationError: 選項紀錄不合法、缺少 memoize，或在選項紀錄之後又傳入額外參數
    """
    if callable(memoize_or_options):
        creator_options = CreateSelectorOptions(
            memoize=memoize_or_options,
            memoize_options=list(memoize_options_from_args),
        )
    else:
        if memoize_options_from_args:
            raise ConfigurationError(
                "create_selector_creator does not accept extra memoize options after an options record",
                component="create_selector_creator",
                config_key="memoize_options",
            )
        creator_options = parse_options(memoize_or_options, component="create_selector_creator")
        if creator_options.memoize is None:
            raise ConfigurationError(
                "create_selector_creator expects an options record containing a memoize function",
                component="create_selector_creator",
                config_key="memoize",
            )

    def create_selector(*funcs: Any, **options: Any) -> Any:
        """
        創建一個記憶化的複合選擇器。

        輸入選擇器可逐一傳入或以列表傳入，最後是組合函數，之後可選擇性地
        附上選項紀錄（映射或 CreateSelectorOptions）；選項也可用關鍵字傳入。

            select_total = create_selector(
                lambda state: state["x"],
                lambda state: state["y"],
                lambda x, y: x + y,
            )

        Returns:
            複合選擇器，附帶 result_func、memoized_result_func、dependencies、
            recomputations、reset_recomputations、last_result、memoize、args_memoize
        """
        input_funcs, result_func, directly_passed = _split_create_selector_args(funcs, options)
        resolved: ResolvedOptions = resolve_options(merge_options(creator_options, directly_passed))
        dependencies = get_dependencies(input_funcs)

        recomputations = 0
        last_result: Any = None
        first_run = True

        def recomputation_wrapper(*args: Any) -> Any:
            nonlocal recomputations
            recomputations += 1
            logger.debug("recomputing %r (recomputations=%d)", result_func, recomputations)
            return result_func(*args)

        memoized_result_func = resolved.memoize(recomputation_wrapper, *resolved.memoize_options)
        equality_check = stability_check_comparator(memoized_result_func)

        def dependencies_checker(*args: Any) -> Any:
            nonlocal first_run
            input_selector_results = collect_input_selector_results(dependencies, args)

            if _should_run_stability_check(resolved.input_stability_check, first_run):
                # 以相同參數再取一次輸入，檢查輸入選擇器是否穩定
                input_selector_results_copy = collect_input_selector_results(dependencies, args)
                run_stability_check(
                    input_selector_results, input_selector_results_copy, equality_check, args,
                    entry_code=selector.__code__,
                )
                first_run = False

            return memoized_result_func(*input_selector_results)

        memoized_selector = resolved.args_memoize(dependencies_checker, *resolved.args_memoize_options)

        # 外層記憶化器命中時不會呼叫 dependencies_checker，last_result 在此更新
        @functools.wraps(memoized_selector)
        def selector(*args: Any) -> Any:
            nonlocal last_result
            result = memoized_selector(*args)
            last_result = result
            return result

        def reset_recomputations() -> None:
            nonlocal recomputations
            recomputations = 0

        selector.result_func = result_func
        selector.memoized_result_func = memoized_result_func
        selector.dependencies = dependencies
        selector.recomputations = lambda: recomputations
        selector.reset_recomputations = reset_recomputations
        selector.last_result = lambda: last_result
        selector.memoize = resolved.memoize
        selector.args_memoize = resolved.args_memoize

        logger.debug(
            "created selector over %d input selectors (input_stability_check=%s)",
            len(dependencies), resolved.input_stability_check,
        )
        return selector

    return create_selector


create_selector = create_selector_creator(default_memoize)
