import random
from datetime import timedelta

import pytest

from core import recommender, srs
from core.schemas import Recommendation


@pytest.fixture
def n5_pool(make_item):
    """One never-practiced vocab item plus four overdue ones, and some grammar."""
    vocab = [make_item(title="unseen")]
    vocab += [make_item(title=f"overdue-{d}", overdue_days=d) for d in (1, 7, 15, 30)]
    grammar = [
        make_item(title=f"grammar-{d}", item_type="grammar", due_in_days=d)
        for d in (1, 2, 3)
    ]
    other = [
        make_item(title="other-level", jlpt_level="N4"),
        make_item(title="other-user", user_id="u2"),
    ]
    return vocab + grammar + other


def test_recommend_returns_both_kinds(make_store, n5_pool, now):
    store = make_store(n5_pool)
    rec = recommender.recommend_items("u1", "N5", 2, 1, now=now, rng=random.Random(0), store=store)

    assert isinstance(rec, Recommendation)
    assert len(rec.vocab) == 2
    assert len(rec.grammar) == 1
    assert all(item.item_type == "vocab" for item in rec.vocab)
    assert all(item.item_type == "grammar" for item in rec.grammar)


def test_recommend_filters_by_owner_and_level(make_store, n5_pool, now):
    store = make_store(n5_pool)
    rec = recommender.recommend_items("u1", "N5", 10, 10, now=now, store=store)

    titles = {item.title for item in rec.vocab + rec.grammar}
    assert "other-level" not in titles
    assert "other-user" not in titles
    assert len(rec.vocab) == 5
    assert len(rec.grammar) == 3


def test_unseen_item_always_in_top_tier(make_store, n5_pool, now):
    store = make_store(n5_pool)
    candidates = store.find_candidates("u1", "N5", "vocab")

    # Score 1000 wins the top-tier cutoff whenever the tier is non-empty
    ranked = srs.rank_items(candidates, now)
    assert ranked[0][1].title == "unseen"
    assert ranked[0][0] == 1000


def test_unseen_item_recommended_when_tier_matches_count(make_store, n5_pool, now):
    store = make_store(n5_pool)
    rng = random.Random(11)

    # With the whole pool in the tier, asking for all of it always includes it
    for _ in range(100):
        rec = recommender.recommend_items("u1", "N5", vocab_count=5, grammar_count=0, now=now, rng=rng, store=store)
        assert "unseen" in {item.title for item in rec.vocab}


def test_unseen_item_frequently_recommended(make_store, n5_pool, now):
    store = make_store(n5_pool)
    rng = random.Random(5)

    hits = 0
    trials = 500
    for _ in range(trials):
        rec = recommender.recommend_items("u1", "N5", vocab_count=2, grammar_count=0, now=now, rng=rng, store=store)
        assert len(rec.vocab) == 2
        hits += "unseen" in {item.title for item in rec.vocab}

    # Picked 2 from a shuffled tier of 5: expected rate 40%
    assert 0.3 < hits / trials < 0.5


@pytest.mark.parametrize(
    "user_id, level, vocab_count, grammar_count",
    [
        ("", "N5", 3, 2),
        (None, "N5", 3, 2),
        ("u1", "", 3, 2),
        ("u1", None, 3, 2),
        ("u1", "N5", -1, 2),
        ("u1", "N5", 3, -2),
    ],
)
def test_invalid_requests_rejected_before_storage(make_store, user_id, level, vocab_count, grammar_count):
    store = make_store()
    with pytest.raises(ValueError):
        recommender.recommend_items(user_id, level, vocab_count, grammar_count, store=store)
    assert store.calls == []


def test_empty_pool_is_not_an_error(make_store, now):
    rec = recommender.recommend_items("u1", "N5", now=now, store=make_store())
    assert rec.vocab == []
    assert rec.grammar == []


def test_advance_skips_unknown_ids(make_store, make_item, now, capsys):
    known = make_item(title="known")
    store = make_store([known])

    results = recommender.advance_after_session("u1", ["missing-id", known.item_id], now=now, store=store)

    assert len(results) == 1
    assert results[0].item_id == known.item_id
    assert results[0].title == "known"
    assert results[0].practice_count == 1
    assert results[0].new_interval == 1
    assert results[0].next_practice == now + timedelta(days=1)
    assert "missing-id" in capsys.readouterr().out


def test_advance_persists_schedule(make_store, make_item, now):
    item = make_item()
    store = make_store([item])

    recommender.advance_after_session("u1", [item.item_id], now=now, store=store)
    recommender.advance_after_session("u1", [item.item_id], now=now + timedelta(days=1), store=store)
    results = recommender.advance_after_session("u1", [item.item_id], now=now + timedelta(days=4), store=store)

    stored = store.items[item.item_id]
    assert stored.practice_count == 3
    assert stored.practice_interval == 8
    assert stored.last_practiced == now + timedelta(days=4)
    assert stored.next_practice == now + timedelta(days=12)
    assert results[0].new_interval == 8


def test_advance_ignores_items_of_other_users(make_store, make_item, now):
    item = make_item(user_id="u2")
    store = make_store([item])

    assert recommender.advance_after_session("u1", [item.item_id], now=now, store=store) == []
    assert store.items[item.item_id].practice_count == 0


def test_failed_write_does_not_abort_batch(make_store, make_item, now):
    first, second = make_item(title="first"), make_item(title="second")
    store = make_store([first, second])
    store.fail_writes.add(first.item_id)

    results = recommender.advance_after_session("u1", [first.item_id, second.item_id], now=now, store=store)

    assert [r.title for r in results] == ["second"]


def test_advance_requires_user(make_store):
    with pytest.raises(ValueError):
        recommender.advance_after_session("", ["x"], store=make_store())


def test_score_item(make_item, now):
    assert recommender.score_item(make_item(), now) == 1000
    assert recommender.score_item(make_item(overdue_days=1), now) == pytest.approx(510)
