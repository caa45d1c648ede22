"""Countdown basics -- a 3.5 second countdown printed to the console.

Demonstrates:
- Building a CountdownView on a real-time Loop
- A sink that prints every rendered text
- Hiding the view mid-countdown (engine cancelled) and showing it again
  (fresh engine, full duration)
- on_start / on_stop loop hooks

Run: python packages/tick-countdown/examples/basics.py
"""

import logging

from tick_loop import Loop

from tick_countdown import CountdownConfig, CountdownView, Finish, TimeFormat


class PrintSink:
    def set_display_text(self, text: str) -> None:
        print(f"  display -> {text}")


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="  [%(name)s] %(message)s")
    print("=== Countdown basics ===\n")

    loop = Loop()
    loop.on_start(lambda lp: print(f"loop started at {lp.time()} ms"))
    loop.on_stop(lambda lp: print(f"loop stopped at {lp.time()} ms"))

    view = CountdownView(loop, PrintSink(), CountdownConfig(
        time_in_future=3500,
        time_format=TimeFormat.MIN_SEC,
        template="T-minus %s",
        auto_display_text=True,
    ))

    def observer(v: CountdownView, event) -> None:
        if isinstance(event, Finish):
            print("  finished!")
        else:
            print(f"  tick: {event.remaining} ms left")

    view.add_countdown_callback(observer)

    # The host shows the view, the client starts it.
    view.on_visibility_changed(True)
    view.start()

    # Hide after 1.2s, show again 0.5s later.
    loop.call_later(1200, lambda: view.on_visibility_changed(False))
    loop.call_later(1700, lambda: view.on_visibility_changed(True))

    loop.run()


if __name__ == "__main__":
    main()
