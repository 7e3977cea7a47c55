import clipboard
import threading

from errors import ClipboardAccessError


# --- Clipboard Access ---
def read_clipboard_text():
    """Returns the current clipboard text ("" when it holds no text)."""
    try:
        value = clipboard.paste()
    except Exception as e:
        raise ClipboardAccessError(f"Could not read the clipboard: {e}") from e
    return value if isinstance(value, str) else ""


def write_clipboard_text(text):
    """Replaces the clipboard content with `text`."""
    try:
        clipboard.copy(text)
    except Exception as e:
        raise ClipboardAccessError(f"Could not write to the clipboard: {e}") from e


class ClipboardHandler:
    """Watches the system clipboard and replaces new text with its transformed version."""

    def __init__(self, transform, reader=read_clipboard_text, writer=write_clipboard_text,
                 interval=0.5, on_transform=None, skip_initial=False):
        """Initializes the handler.

        `transform` maps the captured text to the text written back.
        `on_transform(original, result)` is called after every write.
        With `skip_initial`, whatever is on the clipboard at start-up is left alone.
        """
        self.transform = transform
        self.reader = reader
        self.writer = writer
        self.interval = interval
        self.on_transform = on_transform
        self.stop_monitoring = threading.Event()
        self.paused = threading.Event()
        self.monitor_thread = None
        self.error = None
        self.last_input = self.reader() if skip_initial else None
        self.last_output = None

    # --- Single Cycle ---
    def poll_once(self):
        """Reads the clipboard once and transforms it if it holds new text.

        Text equal to the last input or the last output written is ignored,
        so the handler never reacts to its own writes. Returns True if the
        clipboard was rewritten.
        """
        current_value = self.reader()

        if not current_value:
            return False
        if current_value == self.last_input or current_value == self.last_output:
            return False

        self.last_input = current_value
        self.last_output = self.transform(current_value)
        self.writer(self.last_output)

        if self.on_transform:
            self.on_transform(current_value, self.last_output)
        return True

    # --- Monitoring Control ---
    def run(self):
        """Polls until stop() is called. Clipboard errors propagate to the caller."""
        while not self.stop_monitoring.is_set():
            if not self.paused.is_set():
                self.poll_once()
            self.stop_monitoring.wait(self.interval)

    def start_monitoring(self):
        """Starts the background thread to monitor clipboard changes."""
        if self.monitor_thread is None or not self.monitor_thread.is_alive():
            self.stop_monitoring.clear()
            self.error = None
            self.monitor_thread = threading.Thread(target=self._monitor_loop, daemon=True)
            self.monitor_thread.start()

    def _monitor_loop(self):
        try:
            self.run()
        except Exception as e:
            # Handed over to join() on the main thread
            self.error = e
            self.stop_monitoring.set()

    def pause(self):
        self.paused.set()

    def resume(self):
        self.paused.clear()

    @property
    def is_paused(self):
        return self.paused.is_set()

    def stop(self):
        """Signals the monitoring loop to stop."""
        self.stop_monitoring.set()

    def join(self, timeout=None):
        """Waits for the monitoring thread to finish and re-raises its error, if any."""
        if self.monitor_thread and self.monitor_thread.is_alive():
            self.monitor_thread.join(timeout=timeout)
        if self.error is not None:
            raise self.error
