from immutables import Map

from pyreselect import create_selector, create_structured_selector

# 定義Selectors
get_counter_state = lambda state: state["counter"]
get_count = create_selector(
    get_counter_state, lambda counter: counter.get("count") or 0
)
get_loading = create_selector(
    get_counter_state, lambda counter: counter.get("loading") or False
)
get_last_updated = create_selector(
    get_counter_state, lambda counter: counter.get("last_updated")
)
# 组合多个选择器
get_counter_info = create_selector(
    get_count,
    get_last_updated,
    lambda count, last_updated: {"count": count, "last_updated": last_updated},
)
get_counter_summary = create_structured_selector({
    "count": get_count,
    "loading": get_loading,
})


if __name__ == "__main__":
    counter = Map({"count": 1, "loading": False, "last_updated": None})
    state = Map({"counter": counter})

    print(get_counter_info(state))
    # counter 未改變，組合函數不會重新執行
    print(get_counter_info(state.set("other", 1)))
    print(f"recomputations: {get_counter_info.recomputations()}")

    state = state.set("counter", counter.set("count", 2))
    print(get_counter_info(state))
    print(get_counter_summary(state))
    print(f"recomputations: {get_counter_info.recomputations()}")
