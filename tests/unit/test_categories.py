from __future__ import annotations

import pytest

from kakeibo.categories import derive_items


def test_derive_items_trims_and_drops_empty() -> None:
    assert derive_items("食費, 趣味, , 交通費") == ["食費", "趣味", "交通費"]


@pytest.mark.parametrize("raw", ["", None, " , ,"])
def test_derive_items_empty_input(raw) -> None:
    assert derive_items(raw) == []


def test_derive_items_preserves_order() -> None:
    assert derive_items("税金,車 ,通信") == ["税金", "車", "通信"]
