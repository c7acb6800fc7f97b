from thehub import Channel, Hub


def test_channel_round_trip():
    hub = Hub()
    temperature = hub.channel("temperature")
    assert isinstance(temperature, Channel)
    assert repr(temperature) == "Channel['temperature']"

    received = []
    temperature.subscribe(received.append).publish(20.0)
    assert received == [20.0]
    assert temperature.last() == 20.0
    assert hub.get_last("temperature") == 20.0
    assert len(temperature.subscribers()) == 1

    temperature.unsubscribe(received.append).publish(21.0)
    assert received == [20.0]
    assert temperature.subscribers() == []


def test_channels_share_hub_state():
    hub = Hub()
    hub.publish("mode", "eco")
    assert hub.channel("mode").last() == "eco"
    assert hub.channel("unset").last("default") == "default"
