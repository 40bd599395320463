# src/analytics/grouping.py
"""Generic grouping and aggregation over trades."""
from collections import defaultdict
from collections.abc import Callable, Hashable, Iterable
from typing import TypeVar

from src.journal.currency import BaseCurrencyNormalizer
from src.journal.models import Trade

K = TypeVar("K", bound=Hashable)

Reducer = Callable[[list[Trade]], float]


def group_by(
    trades: Iterable[Trade], key_fn: Callable[[Trade], K | None]
) -> dict[K, list[Trade]]:
    """Partition trades by a derived key.

    Args:
        trades: Trades to partition.
        key_fn: Extracts the group key; trades mapped to None are skipped.

    Returns:
        Dict of key to trades, in first-seen key order with input order kept
        inside each group.
    """
    groups: dict[K, list[Trade]] = defaultdict(list)
    for trade in trades:
        key = key_fn(trade)
        if key is None:
            continue
        groups[key].append(trade)
    return dict(groups)


def aggregate(group: list[Trade], reducers: dict[str, Reducer]) -> dict[str, float]:
    """Apply named reducers to one group of trades."""
    return {name: reducer(group) for name, reducer in reducers.items()}


def win_rate(trades: list[Trade]) -> float:
    """Percentage of trades with pnl > 0; 0.0 for an empty group."""
    if not trades:
        return 0.0
    wins = sum(1 for t in trades if t.pnl > 0)
    return wins / len(trades) * 100


def average_r(trades: list[Trade]) -> float:
    """Mean R-multiple; 0.0 for an empty group."""
    if not trades:
        return 0.0
    return sum(t.r_factor for t in trades) / len(trades)


def total_r(trades: list[Trade]) -> float:
    """Summed R-multiple."""
    return sum(t.r_factor for t in trades)


def total_pnl_reducer(normalizer: BaseCurrencyNormalizer) -> Reducer:
    """Build a reducer summing base-currency P&L."""
    return normalizer.total_base_pnl


def bucket_reducers(normalizer: BaseCurrencyNormalizer) -> dict[str, Reducer]:
    """Reducers shared by the session, hour and market-condition breakdowns."""
    return {
        "total_trades": len,
        "win_rate": win_rate,
        "avg_r": average_r,
        "total_pnl": total_pnl_reducer(normalizer),
    }
