from __future__ import annotations

import json

from thehub import Hub, HubSettings, setup_logger


def main():
    settings = HubSettings.from_env()
    logger = setup_logger(level=settings.log_level)
    hub = Hub(settings=settings)

    def echo(prop):
        return lambda value: print(f"hub> {prop} = {value!r}")

    print("Hub ready. Type /quit to exit. Examples:")
    print("  /sub temperature")
    print("  /pub temperature 21.5")
    print("  /multi {\"temperature\": 22, \"mode\": \"eco\"}")
    print("  /last mode")

    subscriptions = {}
    while True:
        user_input = input("you> ").strip()
        if user_input.lower() in {"/quit", "quit", "exit"}:
            break
        command, _, rest = user_input.partition(" ")
        try:
            if command == "/sub":
                subscriptions.setdefault(rest, echo(rest))
                hub.subscribe(rest, subscriptions[rest])
            elif command == "/unsub":
                if rest in subscriptions:
                    hub.unsubscribe(rest, subscriptions.pop(rest))
            elif command == "/pub":
                prop, _, raw = rest.partition(" ")
                hub.publish(prop, json.loads(raw) if raw else None)
            elif command == "/multi":
                hub.publish_multiple(json.loads(rest))
            elif command == "/last":
                print("hub>", hub.get_last(rest, "<never published>"))
            else:
                print("hub> unknown command")
        except json.JSONDecodeError as exc:
            logger.error("Bad JSON value: %s", exc)


if __name__ == "__main__":
    main()
