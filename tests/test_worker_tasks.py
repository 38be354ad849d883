import json
from datetime import datetime, timezone
from unittest.mock import MagicMock

from app.notifications.models import ScheduledReminder
from app.notifications.push_service import MongoNotificationPlatform, SnsPushSender
from app.worker.tasks import deliver_due

NOW = datetime(2025, 3, 8, 9, 0, tzinfo=timezone.utc)


class FakeReminderCollection:
    """Just enough of a PyMongo collection for deliver_due."""

    def __init__(self, docs):
        self.docs = list(docs)

    def find_one_and_delete(self, query, sort=None):
        limit = query["fire_at"]["$lte"]
        due = sorted((d for d in self.docs if d["fire_at"] <= limit), key=lambda d: d["fire_at"])
        if not due:
            return None
        self.docs.remove(due[0])
        return due[0]


def doc(identifier, fire_at, plant_id="p1"):
    return {
        "identifier": identifier,
        "fire_at": fire_at,
        "title": "🌱 Time to water Fern!",
        "body": "Your Fern is ready for its next watering.",
        "payload": {"plantId": plant_id, "plantName": "Fern", "kind": "day_of"},
    }


def test_delivers_only_due_reminders():
    collection = FakeReminderCollection([
        doc("due-1", datetime(2025, 3, 8, 8, 0, tzinfo=timezone.utc)),
        doc("due-2", NOW),
        doc("later", datetime(2025, 3, 9, 18, 0, tzinfo=timezone.utc)),
    ])
    sns = MagicMock()
    sender = SnsPushSender(sns_client=sns, topic_arn="arn:aws:sns:eu-west-1:123:plant-care")

    stats = deliver_due(collection, sender, now=NOW)

    assert stats == {"delivered": 2, "failed": 0}
    assert [d["identifier"] for d in collection.docs] == ["later"]
    assert sns.publish.call_count == 2

    kwargs = sns.publish.call_args.kwargs
    assert kwargs["TopicArn"] == "arn:aws:sns:eu-west-1:123:plant-care"
    assert kwargs["MessageStructure"] == "json"
    message = json.loads(kwargs["Message"])
    assert json.loads(message["GCM"])["data"]["plantId"] == "p1"


def test_failed_publish_is_counted_and_dropped():
    collection = FakeReminderCollection([doc("due-1", NOW)])
    sns = MagicMock()
    sns.publish.side_effect = RuntimeError("throttled")
    sender = SnsPushSender(sns_client=sns, topic_arn="arn:aws:sns:eu-west-1:123:plant-care")

    stats = deliver_due(collection, sender, now=NOW)

    assert stats == {"delivered": 0, "failed": 1}
    assert collection.docs == []


def test_missing_topic_does_not_publish():
    sns = MagicMock()
    sender = SnsPushSender(sns_client=sns, topic_arn="")
    reminder = ScheduledReminder(identifier="r1", fire_at=NOW, title="t", body="b", payload={"plantId": "p1"})

    assert sender.send(reminder) is False
    sns.publish.assert_not_called()


def test_batch_limit():
    collection = FakeReminderCollection([doc(f"r{i}", NOW) for i in range(5)])
    sender = SnsPushSender(sns_client=MagicMock(), topic_arn="arn")

    assert deliver_due(collection, sender, now=NOW, limit=2) == {"delivered": 2, "failed": 0}
    assert len(collection.docs) == 3


def test_naive_fire_time_from_mongo_is_read_as_utc():
    reminder = MongoNotificationPlatform.doc_to_reminder(doc("r1", datetime(2025, 3, 8, 9, 0)))
    assert reminder.fire_at == NOW
    assert reminder.plant_id == "p1"
