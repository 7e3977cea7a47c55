"""
System tray icon for the clipboard watcher: pause/resume and exit.
"""

import os
import sys

import pystray
from pystray import MenuItem as item
from PIL import Image, ImageDraw

TRAY_ICON_PATH = "icon.png"
ICON_SIZE = 64


# Helper to get resource path for bundled application
def resource_path(relative_path):
    """Get absolute path to resource, works for development and bundled apps."""
    base_path = getattr(sys, "_MEIPASS", os.path.abspath("."))
    return os.path.join(base_path, relative_path)


def load_icon_image(path=TRAY_ICON_PATH):
    """Loads the tray image, or draws a plain 'Z' badge when the file is missing."""
    icon_full_path = resource_path(path)
    try:
        return Image.open(icon_full_path)
    except FileNotFoundError:
        pass
    except OSError as e:
        print(f"Error loading tray icon '{icon_full_path}': {e}")

    image = Image.new("RGB", (ICON_SIZE, ICON_SIZE), (40, 40, 48))
    draw = ImageDraw.Draw(image)
    draw.rectangle((8, 8, ICON_SIZE - 8, ICON_SIZE - 8), outline=(170, 110, 255), width=4)
    draw.line((20, 20, 44, 20), fill=(170, 110, 255), width=5)
    draw.line((44, 20, 20, 44), fill=(170, 110, 255), width=5)
    draw.line((20, 44, 44, 44), fill=(170, 110, 255), width=5)
    return image


class TrayController:
    """Owns the pystray icon and drives a ClipboardHandler running in the background."""

    def __init__(self, handler, image=None, quiet=False):
        self.handler = handler
        self.quiet = quiet
        self.tray_icon = pystray.Icon(
            "ClipboardZalgo",
            image if image is not None else load_icon_image(),
            "Clipboard Zalgo",
            self._build_menu(),
        )

    def _build_menu(self):
        return pystray.Menu(
            item(lambda _: "Resume" if self.handler.is_paused else "Pause", self.toggle_pause, default=True),
            item("Exit", self.quit_application),
        )

    def toggle_pause(self, icon=None, menu_item=None):
        if self.handler.is_paused:
            self.handler.resume()
            if not self.quiet:
                print("Clipboard watching resumed.")
        else:
            self.handler.pause()
            if not self.quiet:
                print("Clipboard watching paused.")
        self.tray_icon.update_menu()

    def quit_application(self, icon=None, menu_item=None):
        """Stops monitoring and the tray loop."""
        self.handler.stop()
        self.tray_icon.stop()

    def _watch_handler(self, icon):
        icon.visible = True
        self.handler.start_monitoring()
        # Tear the icon down if the watcher dies on its own (e.g. clipboard failure)
        self.handler.stop_monitoring.wait()
        icon.stop()

    def run(self):
        """Runs the tray loop on the calling thread; returns once the user exits.

        Re-raises any error the watcher thread hit.
        """
        self.tray_icon.run(setup=self._watch_handler)
        self.handler.stop()
        self.handler.join()
