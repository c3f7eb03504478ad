from datetime import timedelta

from core import review_repo, srs
from core.schemas import BunproItem, ItemType, MasteryLevel


def _bunpro_item(source_id=101, title="食べる", level="N5"):
    return BunproItem(id=source_id, slug="taberu", title=title, meaning="to eat", level=level)


def test_upsert_inserts_item_without_schedule(fake_collection, now):
    outcome = review_repo.upsert_item("u1", _bunpro_item(), MasteryLevel.BEGINNER, ItemType.VOCAB, now)

    assert outcome == "inserted"
    doc = fake_collection.docs[0]
    assert doc["user_id"] == "u1"
    assert doc["item_type"] == "vocab"
    assert doc["source_id"] == 101
    assert doc["jlpt_level"] == "N5"
    assert doc["mastery_level"] == "beginner"
    assert doc["practice_count"] == 0
    assert doc["last_practiced"] is None
    assert doc["next_practice"] is None
    assert doc["item_id"]


def test_upsert_updates_mastery_level_only(fake_collection, now):
    review_repo.upsert_item("u1", _bunpro_item(), "beginner", "vocab", now)
    item_id = fake_collection.docs[0]["item_id"]
    fake_collection.docs[0]["practice_count"] = 4

    assert review_repo.upsert_item("u1", _bunpro_item(), "beginner", "vocab", now) == "unchanged"
    assert review_repo.upsert_item("u1", _bunpro_item(), "adept", "vocab", now + timedelta(hours=1)) == "updated"

    assert len(fake_collection.docs) == 1
    doc = fake_collection.docs[0]
    assert doc["item_id"] == item_id
    assert doc["mastery_level"] == "adept"
    assert doc["practice_count"] == 4
    assert doc["updated_at"] == now + timedelta(hours=1)


def test_same_source_id_is_distinct_per_type_and_user(fake_collection, now):
    review_repo.upsert_item("u1", _bunpro_item(), "beginner", "vocab", now)
    review_repo.upsert_item("u1", _bunpro_item(), "beginner", "grammar", now)
    review_repo.upsert_item("u2", _bunpro_item(), "beginner", "vocab", now)

    assert len(fake_collection.docs) == 3
    assert review_repo.count_items("u1") == 2
    assert review_repo.count_items("u1", ItemType.GRAMMAR) == 1


def test_find_candidates_filters(fake_collection, now):
    review_repo.upsert_item("u1", _bunpro_item(1), "beginner", "vocab", now)
    review_repo.upsert_item("u1", _bunpro_item(2, level="N4"), "beginner", "vocab", now)
    review_repo.upsert_item("u1", _bunpro_item(3), "beginner", "grammar", now)

    candidates = review_repo.find_candidates("u1", "N5", ItemType.VOCAB)

    assert [c.source_id for c in candidates] == [1]
    assert candidates[0].title == "食べる"


def test_get_item_and_update_schedule(fake_collection, now):
    review_repo.upsert_item("u1", _bunpro_item(), "beginner", "vocab", now)
    item_id = fake_collection.docs[0]["item_id"]

    item = review_repo.get_item("u1", item_id)
    state = srs.advance_schedule(srs.ScheduleState.from_item(item), now)

    assert review_repo.update_schedule(item_id, state, now) is True

    stored = review_repo.get_item("u1", item_id)
    assert stored.practice_count == 1
    assert stored.practice_interval == 1
    assert stored.practice_ease == 2.5
    assert stored.next_practice == now + timedelta(days=1)
    assert review_repo.get_item("u2", item_id) is None


def test_update_schedule_unknown_id(fake_collection, now):
    assert review_repo.update_schedule("nope", srs.ScheduleState(), now) is False


def test_items_without_reading(fake_collection, now):
    review_repo.upsert_item("u1", _bunpro_item(1), "beginner", "vocab", now)
    review_repo.upsert_item("u1", _bunpro_item(2, title="日本"), "beginner", "vocab", now)
    review_repo.upsert_item("u1", _bunpro_item(3), "beginner", "grammar", now)
    first_id = fake_collection.docs[0]["item_id"]

    assert review_repo.set_reading(first_id, "たべる", now) is True

    pending = review_repo.get_items_without_reading("u1", MasteryLevel.BEGINNER)
    assert [item.title for item in pending] == ["日本"]


def test_ensure_indexes(fake_collection):
    review_repo.ensure_indexes()
    unique = [keys for keys, kwargs in fake_collection.indexes if kwargs.get("unique")]
    assert [("item_id", 1)] in unique
