"""Change Broadcaster — topic fan-out for live streams."""

from skillswap.infrastructure.broadcaster import ALL, ChangeBroadcaster


async def test_publish_wakes_only_matching_topic():
    events = ChangeBroadcaster("test")
    async with events.subscribe("a") as qa, events.subscribe("b") as qb:
        assert events.publish("a") == 1
        assert qa.qsize() == 1
        assert qb.qsize() == 0


async def test_publish_without_subscribers_is_noop():
    events = ChangeBroadcaster("test")
    assert events.publish("nobody") == 0


async def test_wakeups_coalesce_instead_of_blocking():
    events = ChangeBroadcaster("test")
    async with events.subscribe() as queue:
        assert events.publish() == 1
        assert events.publish() == 0
        assert queue.qsize() == 1
        assert await queue.get() == ALL


async def test_subscription_removed_on_exit():
    events = ChangeBroadcaster("test")
    async with events.subscribe("a"):
        async with events.subscribe("a"):
            assert events.subscriber_count("a") == 2
        assert events.subscriber_count("a") == 1
    assert events.subscriber_count("a") == 0
