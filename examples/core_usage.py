"""
Example usage of the Telegraf client.

Sends a single point and a batch to a local collector listening on UDP 8094.
"""

from datetime import datetime, timezone

from telegraf_client import Measurement, TelegrafClient, encode, merge_tags, routing_tags


def main():
    cfg = {
        "address": "udp://127.0.0.1:8094",
        "implicit_tags": merge_tags({"region": "us-east"}, routing_tags("telemetry")),
    }

    point = Measurement(
        name="cpu",
        tags={"host": "srv1"},
        fields={"usage": 64.5, "cores": 8},
        timestamp=datetime.now(timezone.utc),
    )
    print(f"Encoded (no implicit tags): {encode(point)}")

    with TelegrafClient(cfg) as client:
        client.write_point(point)
        client.write_points(
            [
                Measurement(name="mem", tags={"host": "srv1"}, fields={"free": 2048}),
                Measurement(name="svc", tags={"host": "srv1"}, fields={"state": "running", "ok": True}),
            ]
        )
    print("Sent 3 points")


if __name__ == "__main__":
    main()
