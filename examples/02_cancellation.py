"""
Cancellation and Lifecycle Events

Aborts a slow request from another thread and prints the events it produced.
"""

import threading

from src.request_helper import AbortError, CancellationController, HTTPClient, LoggingConfig


def abort_slow_request():
    print("\n=== Abort from another thread ===")

    client = HTTPClient(
        base_url="https://httpbin.org",
        logging=LoggingConfig.create(level="DEBUG"),
        verbose=True,
    )
    client.events.on("request:abort", lambda data: print(f"aborted: {data['id']}"))
    client.events.on("request:success", lambda data: print(f"done in {data['duration_ms']}ms"))

    controller = CancellationController()
    threading.Timer(0.5, controller.abort, args=("user pressed cancel",)).start()

    try:
        client.get("/delay/3", signal=controller.signal)
    except AbortError as e:
        print(f"Caught: {e}")
    finally:
        client.close()


if __name__ == "__main__":
    abort_slow_request()
