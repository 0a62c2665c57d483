"""Small-scale unit tests for pruning and quantity matching.

These tests use explicit handcrafted records so each reconciliation step can be
verified in isolation.
"""

from __future__ import annotations

import copy

from loot_checker.models import CheckRecord, LootRecord
from loot_checker.reconcile import index_check_records, latest_timestamp, match_and_reduce, prune_stale


def _loot(
    *,
    name: str = "PlayerA",
    item: str = "Sword of Dawn",
    quantity: int = 1,
    timestamp: str = "2025-09-27T03:00:00.000Z",
) -> LootRecord:
    """Build a minimal loot record for targeted reconciliation tests."""
    return LootRecord(
        timestamp_utc=timestamp,
        looted_by_alliance="Alliance",
        looted_by_guild="GuildX",
        looted_by_name=name,
        item_id="T4_MAIN_SWORD",
        item_name=item,
        quantity=quantity,
        looted_from_alliance="Alliance",
        looted_from_guild="GuildY",
        looted_from_name="PlayerB",
    )


def _check(
    *,
    player: str = "PlayerA",
    item: str = "Sword of Dawn",
    amount: int = 1,
    date: str = "09/27/2025 04:00:00",
) -> CheckRecord:
    """Build a minimal chest log record for targeted reconciliation tests."""
    return CheckRecord(date=date, player=player, item=item, enchantment="0", quality="Normal", amount=amount)


def test_partial_reduction_keeps_later_bucket_entries_untouched() -> None:
    """Loot 3 against [5, 2] consumes from the first entry only."""
    loot_records = [_loot(quantity=3)]
    check_records = [_check(amount=5), _check(amount=2)]
    first, second = check_records

    assert match_and_reduce(loot_records, check_records) == (1, 0)

    assert loot_records == []
    assert check_records == [first, second]
    assert first.amount == 2
    assert second.amount == 2


def test_exact_reduction_removes_both_sides() -> None:
    """Loot 5 against [3, 2] exhausts both chest entries and the loot record."""
    loot_records = [_loot(quantity=5)]
    check_records = [_check(amount=3), _check(amount=2)]

    assert match_and_reduce(loot_records, check_records) == (1, 2)

    assert loot_records == []
    assert check_records == []


def test_greedy_consumption_stops_at_exhaustion() -> None:
    """Loot 4 against [2, 1, 3] removes the first two and leaves 2 in the third."""
    loot_records = [_loot(quantity=4)]
    check_records = [_check(amount=2), _check(amount=1), _check(amount=3)]
    third = check_records[2]

    match_and_reduce(loot_records, check_records)

    assert loot_records == []
    assert check_records == [third]
    assert third.amount == 2


def test_uncovered_loot_keeps_remaining_quantity() -> None:
    """Loot larger than the bucket survives with the uncovered quantity."""
    loot = _loot(quantity=5)
    loot_records = [loot]
    check_records = [_check(amount=1), _check(amount=2)]

    assert match_and_reduce(loot_records, check_records) == (0, 2)

    assert loot_records == [loot]
    assert loot.quantity == 2
    assert check_records == []


def test_non_matching_keys_leave_both_collections_unchanged() -> None:
    """Key mismatch on either player or item leaves everything as it was."""
    loot_records = [_loot(name="PlayerA", item="Sword of Dawn", quantity=2)]
    check_records = [
        _check(player="PlayerB", item="Sword of Dawn", amount=2),
        _check(player="PlayerA", item="Shield of Light", amount=2),
    ]
    loot_before = copy.deepcopy(loot_records)
    check_before = copy.deepcopy(check_records)

    assert match_and_reduce(loot_records, check_records) == (0, 0)

    assert loot_records == loot_before
    assert check_records == check_before


def test_loot_records_sharing_a_key_consume_in_collection_order() -> None:
    """Earlier loot records take from earlier chest entries first."""
    first_loot = _loot(quantity=2, timestamp="2025-09-27T01:00:00.000Z")
    second_loot = _loot(quantity=3, timestamp="2025-09-27T02:00:00.000Z")
    third_loot = _loot(quantity=4, timestamp="2025-09-27T03:00:00.000Z")
    loot_records = [first_loot, second_loot, third_loot]
    check_records = [_check(amount=1), _check(amount=3), _check(amount=2)]

    match_and_reduce(loot_records, check_records)

    # 2 takes [1, 1 of 3]; 3 takes [2 of 3, 1 of 2]; 4 takes [1 of 2] leaving 3.
    assert loot_records == [third_loot]
    assert third_loot.quantity == 3
    assert check_records == []


def test_processing_order_changes_outcome_for_shared_keys() -> None:
    """Reordering loot records with a shared key changes which survive."""
    small = _loot(quantity=1, timestamp="2025-09-27T01:00:00.000Z")
    large = _loot(quantity=5, timestamp="2025-09-27T02:00:00.000Z")

    small_first = [copy.deepcopy(small), copy.deepcopy(large)]
    large_first = [copy.deepcopy(large), copy.deepcopy(small)]
    match_and_reduce(small_first, [_check(amount=2)])
    match_and_reduce(large_first, [_check(amount=2)])

    assert [(record.quantity, record.timestamp_utc) for record in small_first] == [(4, large.timestamp_utc)]
    assert [(record.quantity, record.timestamp_utc) for record in large_first] == [
        (3, large.timestamp_utc),
        (1, small.timestamp_utc),
    ]


def test_interleaved_keys_only_touch_their_own_buckets() -> None:
    """Buckets group non-adjacent chest entries and survivors keep their order."""
    loot_records = [_loot(name="PlayerA", quantity=2), _loot(name="PlayerB", quantity=1)]
    check_records = [
        _check(player="PlayerA", amount=1),
        _check(player="PlayerB", amount=4),
        _check(player="PlayerA", amount=3),
        _check(player="PlayerC", amount=9),
    ]
    _, player_b, player_a_second, player_c = check_records

    match_and_reduce(loot_records, check_records)

    assert loot_records == []
    assert check_records == [player_b, player_a_second, player_c]
    assert [record.amount for record in check_records] == [3, 2, 9]


def test_zero_quantity_loot_is_removed_only_when_key_matches() -> None:
    """A zero-quantity loot record is dropped when it has a bucket, kept otherwise."""
    matched = _loot(name="PlayerA", quantity=0)
    unmatched = _loot(name="PlayerZ", quantity=0)
    loot_records = [matched, unmatched]
    check_records = [_check(player="PlayerA", amount=2)]

    assert match_and_reduce(loot_records, check_records) == (1, 0)

    assert loot_records == [unmatched]
    assert check_records[0].amount == 2


def test_zero_amount_check_record_is_removed_when_walk_reaches_it() -> None:
    """Zero-amount chest entries contribute nothing and are dropped once walked."""
    loot = _loot(quantity=2)
    loot_records = [loot]
    empty = _check(amount=0)
    full = _check(amount=5)
    check_records = [empty, full]

    assert match_and_reduce(loot_records, check_records) == (1, 1)

    assert check_records == [full]
    assert full.amount == 3


def test_zero_amount_check_record_is_kept_when_walk_stops_before_it() -> None:
    """A walk that ends early never reaches later zero-amount entries."""
    loot_records = [_loot(quantity=1)]
    full = _check(amount=5)
    empty = _check(amount=0)
    check_records = [full, empty]

    match_and_reduce(loot_records, check_records)

    assert check_records == [full, empty]
    assert full.amount == 4


def test_zero_amount_check_record_without_loot_is_kept() -> None:
    empty = _check(amount=0)
    check_records = [empty]

    assert match_and_reduce([], check_records) == (0, 0)
    assert check_records == [empty]


def test_index_check_records_groups_positions_in_order() -> None:
    check_records = [
        _check(player="PlayerA", amount=1),
        _check(player="PlayerB", amount=1),
        _check(player="PlayerA", amount=1),
    ]

    assert index_check_records(check_records) == {
        ("PlayerA", "Sword of Dawn"): [0, 2],
        ("PlayerB", "Sword of Dawn"): [1],
    }


def test_latest_timestamp_uses_lexical_maximum() -> None:
    loot_records = [
        _loot(timestamp="2025-09-27T03:00:00.000Z"),
        _loot(timestamp="2025-09-28T01:00:00.000Z"),
        _loot(timestamp="2025-09-27T23:59:59.999Z"),
    ]
    assert latest_timestamp(loot_records) == "2025-09-28T01:00:00.000Z"
    assert latest_timestamp([]) is None


def test_prune_stale_removes_older_and_reformats_newer() -> None:
    """Chest entries before the latest loot timestamp go, the rest become ISO."""
    loot_records = [_loot(timestamp="2025-09-27T03:00:00.000Z")]
    older = _check(date="09/27/2025 01:00:00")
    newer = _check(date="09/27/2025 04:00:00")
    check_records = [older, newer]

    assert prune_stale(loot_records, check_records) == 1

    assert check_records == [newer]
    assert newer.date == "2025-09-27T04:00:00.000Z"


def test_prune_stale_keeps_equal_timestamps_and_survivor_order() -> None:
    """Only strictly older records are removed and survivors keep their order."""
    loot_records = [_loot(timestamp="2025-09-27T03:00:00.000Z")]
    check_records = [
        _check(player="PlayerA", date="9/28/2025 00:00:00"),
        _check(player="PlayerB", date="09/26/2025 23:00:00"),
        _check(player="PlayerC", date="09/27/2025 03:00:00"),
        _check(player="PlayerD", date="09/27/2025 02:59:59"),
    ]

    assert prune_stale(loot_records, check_records) == 2

    assert [record.player for record in check_records] == ["PlayerA", "PlayerC"]
    assert [record.date for record in check_records] == [
        "2025-09-28T00:00:00.000Z",
        "2025-09-27T03:00:00.000Z",
    ]


def test_prune_stale_without_loot_is_a_no_op() -> None:
    """No loot records means no removal and no date conversion."""
    check_records = [_check(date="09/27/2025 01:00:00"), _check(date="not a date")]
    before = copy.deepcopy(check_records)

    assert prune_stale([], check_records) == 0

    assert check_records == before
